# tfidf_rag/errors.py
from sklearn.exceptions import NotFittedError as _SklearnNotFittedError


class TfidfIndexError(Exception):
    """Base class for every error raised by the index."""


class NotFittedError(TfidfIndexError, _SklearnNotFittedError):
    """add/search called before fit."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Index is not fitted; call fit() before {operation}().")


class AlreadyFittedError(TfidfIndexError):
    """fit called on an index that is already fitted."""

    def __init__(self):
        super().__init__("Index is already fitted; use add() to grow it.")


class DuplicateDocumentIdError(TfidfIndexError):
    def __init__(self, document_id):
        self.document_id = document_id
        super().__init__(f"Document id {document_id!r} is already indexed.")


class InvalidKError(TfidfIndexError, ValueError):
    def __init__(self, k):
        self.k = k
        super().__init__(f"k must be a positive integer, got {k!r}.")
