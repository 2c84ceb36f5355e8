# tfidf_rag/index.py
"""In-memory TF-IDF index with incremental additions and cosine ranking.

Lifecycle is Empty -> Fitted, one way: `fit` once, then `add` and `search`.

Weights of a stored document are computed with the idf values known when it
was added and are not re-weighted when later additions change document
frequencies. `search` always weights the query with the current idf. Call
`reindex()` to re-weight every stored document explicitly (O(corpus)).
"""
import logging
import os
import threading
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

import joblib
import numpy as np

from .errors import AlreadyFittedError, DuplicateDocumentIdError, InvalidKError, NotFittedError
from .ranker import DocumentMatrix, SearchResult
from .tokenizer import tokenize
from .utils import ReadWriteLock
from .vectorizer import l2_norm, smoothed_idf, vectorize
from .vocabulary import DocumentFrequencyTable, Vocabulary, count_terms, observe

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentRecord:
    id: str
    term_counts: Dict[int, int]
    vector: Dict[int, float]
    norm: float
    total_documents: int  # corpus size the idf weights were computed with


def _iter_corpus(corpus):
    for entry in corpus:
        if isinstance(entry, dict):
            yield entry["id"], entry["text"]
        else:
            doc_id, text = entry
            yield doc_id, text


def _check_id(document_id):
    if not isinstance(document_id, str):
        raise TypeError(f"Document ids must be str, got {type(document_id).__name__}: {document_id!r}")


def _valid_k(k):
    return isinstance(k, (int, np.integer)) and not isinstance(k, bool) and k > 0


class TfidfIndex:
    def __init__(self):
        self.vocabulary = Vocabulary()
        self.document_frequency = DocumentFrequencyTable()
        self._records = {}
        self._fitted = False
        self._lock = ReadWriteLock()
        self._matrix = None
        self._matrix_lock = threading.Lock()

    # ---------- lifecycle ----------
    def fit(self, corpus):
        """Build vocabulary, document frequencies and document vectors from `corpus`.

        `corpus` holds (id, text) pairs or {"id": ..., "text": ...} mappings.
        Pass 1 observes every document; pass 2 vectorizes them all with the
        completed statistics. Nothing is changed if an error is raised.
        """
        with self._lock.write():
            if self._fitted:
                raise AlreadyFittedError()

            docs = []
            seen = set()
            for doc_id, text in _iter_corpus(corpus):
                _check_id(doc_id)
                if doc_id in seen:
                    raise DuplicateDocumentIdError(doc_id)
                seen.add(doc_id)
                docs.append((doc_id, tokenize(text)))

            vocabulary = Vocabulary()
            document_frequency = DocumentFrequencyTable()
            counted = [(doc_id, observe(vocabulary, document_frequency, terms)) for doc_id, terms in docs]

            n = document_frequency.n_documents
            records = {}
            for doc_id, term_counts in counted:
                vector = vectorize(term_counts, n, document_frequency)
                records[doc_id] = DocumentRecord(doc_id, term_counts, vector, l2_norm(vector), n)

            self.vocabulary = vocabulary
            self.document_frequency = document_frequency
            self._records = records
            self._matrix = None
            self._fitted = True
        log.info("Fitted index: %d documents, %d terms", len(records), len(vocabulary))
        return self

    def add(self, document_id, text):
        """Index one more document; earlier documents keep their weights."""
        with self._lock.write():
            if not self._fitted:
                raise NotFittedError("add")
            _check_id(document_id)
            if document_id in self._records:
                raise DuplicateDocumentIdError(document_id)

            terms = tokenize(text)
            term_counts = observe(self.vocabulary, self.document_frequency, terms)
            n = self.document_frequency.n_documents
            vector = vectorize(term_counts, n, self.document_frequency)
            self._records[document_id] = DocumentRecord(document_id, term_counts, vector, l2_norm(vector), n)
            self._matrix = None
        log.debug("Added document %r (%d distinct terms)", document_id, len(term_counts))

    def reindex(self):
        """Re-weight every stored document with the current idf values."""
        with self._lock.write():
            if not self._fitted:
                raise NotFittedError("reindex")
            n = self.document_frequency.n_documents
            records = {}
            for doc_id, r in self._records.items():
                vector = vectorize(r.term_counts, n, self.document_frequency)
                records[doc_id] = DocumentRecord(doc_id, r.term_counts, vector, l2_norm(vector), n)
            self._records = records
            self._matrix = None
        log.info("Re-weighted %d documents", len(self._records))

    # ---------- queries ----------
    def search(self, query, k) -> List[SearchResult]:
        """Top-k documents by cosine similarity, ties broken by ascending id.

        Query terms outside the vocabulary are ignored; a query with no known
        terms scores every document 0.0.
        """
        with self._lock.read():
            if not self._fitted:
                raise NotFittedError("search")
            if not _valid_k(k):
                raise InvalidKError(k)
            query_vector = self.vectorize_query(query)
            return self._document_matrix().rank(query_vector, int(k))

    def vectorize_query(self, query):
        counts = count_terms(self.vocabulary, tokenize(query))
        return vectorize(counts, self.document_frequency.n_documents, self.document_frequency)

    def _document_matrix(self):
        with self._matrix_lock:
            if self._matrix is None:
                self._matrix = DocumentMatrix(self._records.values(), n_features=len(self.vocabulary))
            return self._matrix

    # ---------- accessors ----------
    def size(self) -> int:
        with self._lock.read():
            return len(self._records)

    __len__ = size

    def __contains__(self, document_id):
        with self._lock.read():
            return document_id in self._records

    @property
    def is_fitted(self) -> bool:
        with self._lock.read():
            return self._fitted

    @property
    def document_count(self) -> int:
        with self._lock.read():
            return self.document_frequency.n_documents

    @property
    def vocabulary_size(self) -> int:
        with self._lock.read():
            return len(self.vocabulary)

    def get_document(self, document_id) -> DocumentRecord:
        """Copy of the stored record; changing it does not touch the index."""
        with self._lock.read():
            r = self._records[document_id]
            return replace(r, term_counts=dict(r.term_counts), vector=dict(r.vector))

    def term_id(self, term) -> Optional[int]:
        with self._lock.read():
            return self.vocabulary.get(term)

    def idf(self, term) -> Optional[float]:
        """Current idf of `term`, or None if it is not in the vocabulary."""
        with self._lock.read():
            term_id = self.vocabulary.get(term)
            if term_id is None:
                return None
            return smoothed_idf(self.document_frequency.n_documents, self.document_frequency[term_id])

    def idf_table(self) -> Dict[str, float]:
        """Current idf of every term, in term-id order."""
        with self._lock.read():
            if not len(self.vocabulary):
                return {}
            idf = smoothed_idf(self.document_frequency.n_documents, self.document_frequency.counts())
            return {term: float(idf[i]) for i, term in enumerate(self.vocabulary)}

    # ---------- snapshots ----------
    def save(self, path):
        os.makedirs(os.path.dirname(str(path)) or ".", exist_ok=True)
        with self._lock.read():
            joblib.dump(self, path)
        log.info("Saved index snapshot to %s", path)

    @classmethod
    def load(cls, path):
        index = joblib.load(path)
        if not isinstance(index, cls):
            raise TypeError(f"{path} does not hold a {cls.__name__} snapshot")
        return index

    def __getstate__(self):
        state = self.__dict__.copy()
        del state["_lock"], state["_matrix_lock"]
        state["_matrix"] = None
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = ReadWriteLock()
        self._matrix_lock = threading.Lock()
