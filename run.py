# run.py
import logging
import time
from tfidf_rag.config import CORPUS_DIR, OUT_DIR, OUT_RAG, SNAPSHOT_PATH, DEFAULT_TOP_K
from tfidf_rag.rag.indexer import load_corpus, build_tfidf_index
from tfidf_rag.rag.generate import generate_answers
from tfidf_rag.utils import StageTimer
from tfidf_rag.verify import run_all_verifications

QUERIES = [
    "how does tf-idf weight rare terms",
    "cosine similarity between query and document vectors",
    "what happens when new documents are added to the index",
]

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    t0 = time.time()

    print("=== STEP 1: Load corpus ===")
    corpus = load_corpus(CORPUS_DIR)
    if len(corpus) < 2:
        raise RuntimeError(f"Need at least 2 documents in {CORPUS_DIR}. Please add markdown files.")
    texts = dict(corpus)
    print(f" Loaded {len(corpus)} documents from {CORPUS_DIR}/")

    print("\n=== STEP 2: Fit index, then add the last document incrementally ===")
    with StageTimer("index") as t:
        index = build_tfidf_index(corpus[:-1])
        vocab_before = index.vocabulary_size
        doc_id, text = corpus[-1]
        index.add(doc_id, text)
    print(f" {index.size()} documents, vocabulary {vocab_before} -> {index.vocabulary_size} terms ({t.elapsed:.3f}s)")
    index.save(SNAPSHOT_PATH)

    print("\n=== STEP 3: Retrieval-augmented answers ===")
    with StageTimer("rag"):
        generate_answers(index, texts, QUERIES, top_k=DEFAULT_TOP_K, out_dir=OUT_RAG)

    total_sec = time.time() - t0
    print(f"\n=== STEP 4: Verifications (total runtime {total_sec:.2f}s) ===")
    run_all_verifications(index, QUERIES, total_sec, out_dir=OUT_DIR)

    print(f"\n🎯 All steps complete, outputs saved under {OUT_DIR}/")
