# tfidf_rag/metrics.py
import numpy as np
from sklearn.metrics import average_precision_score

def _hits(results, relevant):
    relevant = set(relevant)
    return np.array([r.document_id in relevant for r in results], dtype=int)

def average_precision(results, relevant):
    """AUC-PR of the scored result list; 0.0 when nothing relevant was retrieved."""
    y_true = _hits(results, relevant)
    if y_true.sum() == 0:
        return 0.0
    y_score = np.array([r.score for r in results], dtype=float)
    return float(average_precision_score(y_true, y_score))

def precision_at_k(results, relevant, k):
    """Fraction of the first k results that are relevant."""
    if k <= 0:
        raise ValueError("k must be positive")
    return float(_hits(results[:k], relevant).sum()) / k

def recall_at_k(results, relevant, k):
    relevant = set(relevant)
    if not relevant:
        return 0.0
    return float(_hits(results[:k], relevant).sum()) / len(relevant)

def reciprocal_rank(results, relevant):
    hits = np.flatnonzero(_hits(results, relevant))
    return 1.0 / float(hits[0] + 1) if hits.size else 0.0
