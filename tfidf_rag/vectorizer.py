# tfidf_rag/vectorizer.py
import math

import numpy as np


def smoothed_idf(total_documents, document_frequency):
    """idf = ln((1 + N) / (1 + df)) + 1.

    Same definition as scikit-learn's TfidfVectorizer(smooth_idf=True). The +1
    terms keep idf strictly positive, even when a term is in every document.
    Accepts scalars or numpy arrays of document frequencies.
    """
    df = np.asarray(document_frequency, dtype=np.float64)
    idf = np.log((1.0 + total_documents) / (1.0 + df)) + 1.0
    if idf.ndim == 0:
        return float(idf)
    return idf


def vectorize(term_counts, total_documents, document_frequency):
    """Sparse TF-IDF vector {term_id: raw_count * idf} for one document or query.

    Term ids the document-frequency table has never seen carry no idf and are
    left out of the vector.
    """
    vector = {}
    for term_id, count in term_counts.items():
        df = document_frequency.get(term_id, 0)
        if df <= 0:
            continue
        vector[term_id] = count * smoothed_idf(total_documents, df)
    return vector


def l2_norm(vector):
    return math.sqrt(sum(w * w for w in vector.values()))
