# tfidf_rag/config.py
import os

CORPUS_DIR = os.environ.get("TFIDF_RAG_CORPUS_DIR", "data/corpus")
OUT_DIR = os.environ.get("TFIDF_RAG_OUT_DIR", "out")
OUT_RAG = os.path.join(OUT_DIR, "rag")
SNAPSHOT_PATH = os.path.join(OUT_DIR, "index.joblib")

DEFAULT_TOP_K = int(os.environ.get("TFIDF_RAG_TOP_K", "3"))
RUNTIME_BUDGET_SECONDS = int(os.environ.get("TFIDF_RAG_RUNTIME_BUDGET", "300"))
