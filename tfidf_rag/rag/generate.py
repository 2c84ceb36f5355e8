# tfidf_rag/rag/generate.py
import os

from ..config import DEFAULT_TOP_K, OUT_RAG
from ..utils import write_jsonl
from .indexer import retrieve_top_docs

def _first_line(text, limit=160):
    for line in text.splitlines():
        line = line.strip().lstrip("#").strip()
        if line:
            return line[:limit]
    return ""

def render_answer_steps(doc_ids, texts, label_prefix="Doc"):
    """One extractive line per retrieved doc, cited as [Doc#N] by retrieval rank."""
    steps = []
    for i, doc_id in enumerate(doc_ids, start=1):
        snippet = _first_line(texts[doc_id])
        steps.append(f"{i}. {snippet} [{label_prefix}#{i}]")
    return steps

def build_prompt(query, doc_ids, texts, label_prefix="Doc"):
    """Prompt for an external generator: numbered context blocks, then the question."""
    blocks = [f"[{label_prefix}#{i}] {texts[d].strip()}" for i, d in enumerate(doc_ids, start=1)]
    return (
        "Answer the question using only the context below. "
        f"Cite sources as [{label_prefix}#N].\n\n"
        + "\n\n".join(blocks)
        + f"\n\nQuestion: {query}\nAnswer:"
    )

def answer_query(index, texts, query, top_k=DEFAULT_TOP_K, generate=None):
    """Retrieve top-k docs for `query` and answer from them.

    `texts` maps doc id -> raw text (the caller's own store). `generate` is any
    callable prompt -> str (e.g. a hosted LLM client); without one the answer is
    extractive.
    """
    doc_ids, sims = retrieve_top_docs(index, query, top_k=top_k)
    doc_ids = [d for d, s in zip(doc_ids, sims) if s > 0]
    steps = render_answer_steps(doc_ids, texts)
    if generate is not None and doc_ids:
        answer = generate(build_prompt(query, doc_ids, texts)).strip()
    else:
        answer = "\n".join(steps)
    return {
        "query": query,
        "retrieved_docs": list(doc_ids),
        "scores": [round(float(s), 6) for s in sims[: len(doc_ids)]],
        "answer": answer,
        "citations": [f"[Doc#{i}]" for i in range(1, len(doc_ids) + 1)],
    }

def generate_answers(index, texts, queries, top_k=DEFAULT_TOP_K, generate=None, out_dir=OUT_RAG):
    """Answer every query and write the records to <out_dir>/answers.jsonl."""
    results = [answer_query(index, texts, q, top_k=top_k, generate=generate) for q in queries]
    out_path = os.path.join(out_dir, "answers.jsonl")
    write_jsonl(out_path, results)
    print(f" Answers written to {out_path}")
    return results
