"""TF-IDF document index and cosine-similarity search for small RAG pipelines."""

from tfidf_rag.tokenizer import tokenize
from tfidf_rag.vocabulary import Vocabulary, DocumentFrequencyTable, observe, count_terms
from tfidf_rag.vectorizer import smoothed_idf, vectorize, l2_norm
from tfidf_rag.ranker import SearchResult, DocumentMatrix, cosine_similarity, rank
from tfidf_rag.index import TfidfIndex, DocumentRecord
from tfidf_rag.errors import (
    TfidfIndexError,
    NotFittedError,
    AlreadyFittedError,
    DuplicateDocumentIdError,
    InvalidKError,
)

__all__ = [
    "tokenize",
    "Vocabulary",
    "DocumentFrequencyTable",
    "observe",
    "count_terms",
    "smoothed_idf",
    "vectorize",
    "l2_norm",
    "SearchResult",
    "DocumentMatrix",
    "cosine_similarity",
    "rank",
    "TfidfIndex",
    "DocumentRecord",
    "TfidfIndexError",
    "NotFittedError",
    "AlreadyFittedError",
    "DuplicateDocumentIdError",
    "InvalidKError",
]
