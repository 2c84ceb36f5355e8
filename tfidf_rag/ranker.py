# tfidf_rag/ranker.py
from typing import NamedTuple

import numpy as np
from scipy.sparse import csr_matrix

from .vectorizer import l2_norm


class SearchResult(NamedTuple):
    document_id: str
    score: float


def cosine_similarity(a, b, norm_a=None, norm_b=None):
    """Cosine of two sparse {term_id: weight} vectors; 0.0 if either is all zeros."""
    norm_a = l2_norm(a) if norm_a is None else norm_a
    norm_b = l2_norm(b) if norm_b is None else norm_b
    if norm_a == 0 or norm_b == 0:
        return 0.0
    if len(a) > len(b):
        a, b = b, a
    dot = sum(w * b[t] for t, w in a.items() if t in b)
    return min(max(dot / (norm_a * norm_b), 0.0), 1.0)


class DocumentMatrix:
    """Stored document vectors packed into one CSR matrix for batch scoring.

    Rows follow the order of `records`; `id_rank` holds each row's position in
    ascending id order and is the secondary sort key.
    """

    def __init__(self, records, n_features=None):
        records = list(records)
        if n_features is None:
            n_features = 1 + max((max(r.vector, default=-1) for r in records), default=-1)
        self.ids = [r.id for r in records]
        self.norms = np.array([r.norm for r in records], dtype=np.float64)

        indptr = [0]
        indices = []
        data = []
        for r in records:
            for term_id in sorted(r.vector):
                indices.append(term_id)
                data.append(r.vector[term_id])
            indptr.append(len(indices))
        self.matrix = csr_matrix(
            (np.array(data, dtype=np.float64), np.array(indices, dtype=np.int64), np.array(indptr, dtype=np.int64)),
            shape=(len(records), max(n_features, 0)),
        )

        id_rank = np.empty(len(records), dtype=np.int64)
        for position, row in enumerate(sorted(range(len(self.ids)), key=lambda i: self.ids[i])):
            id_rank[row] = position
        self.id_rank = id_rank

    def __len__(self):
        return len(self.ids)

    @property
    def n_features(self):
        return self.matrix.shape[1]

    def scores(self, query_vector, query_norm=None):
        """Cosine score of every row against `query_vector`, clipped to [0, 1]."""
        n_docs = len(self.ids)
        if query_norm is None:
            query_norm = l2_norm(query_vector)
        if n_docs == 0 or query_norm == 0:
            return np.zeros(n_docs, dtype=np.float64)

        q = np.zeros(self.n_features, dtype=np.float64)
        for term_id, weight in query_vector.items():
            # ids newer than every stored row cannot overlap any of them
            if term_id < self.n_features:
                q[term_id] = weight
        dots = self.matrix.dot(q)

        denom = self.norms * query_norm
        sims = np.zeros(n_docs, dtype=np.float64)
        np.divide(dots, denom, out=sims, where=denom > 0)
        return np.clip(sims, 0.0, 1.0)

    def rank(self, query_vector, k, query_norm=None):
        """Top-k results: score descending, ties by ascending document id."""
        sims = self.scores(query_vector, query_norm)
        order = np.lexsort((self.id_rank, -sims))[:k]
        return [SearchResult(self.ids[i], float(sims[i])) for i in order]


def rank(query_vector, documents, k):
    """Rank `documents` (records with id/vector/norm) against a query vector.

    Returns min(k, len(documents)) results.
    """
    return DocumentMatrix(documents).rank(query_vector, k)
