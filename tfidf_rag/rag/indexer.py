# tfidf_rag/rag/indexer.py
import os
import glob
import numpy as np

from ..config import DEFAULT_TOP_K
from ..index import TfidfIndex

def load_corpus(path, pattern="*.md"):
    """Load all markdown docs from folder as (doc_id, text) pairs; doc_id is the file stem."""
    if not os.path.isdir(path):
        raise FileNotFoundError(f"Corpus directory not found: {path}")
    files = sorted(glob.glob(os.path.join(path, pattern)))
    corpus = []
    for f in files:
        with open(f, encoding="utf-8") as fh:
            corpus.append((os.path.splitext(os.path.basename(f))[0], fh.read()))
    return corpus

def build_tfidf_index(corpus):
    """Fit a TF-IDF index over (doc_id, text) pairs."""
    return TfidfIndex().fit(corpus)

def retrieve_top_docs(index, query, top_k=DEFAULT_TOP_K):
    """Retrieve top-k document ids and their cosine scores."""
    results = index.search(query, top_k)
    ids = np.array([r.document_id for r in results], dtype=object)
    sims = np.array([r.score for r in results], dtype=float)
    return ids, sims
