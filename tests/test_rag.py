import json

import pytest

from tfidf_rag.rag.generate import answer_query, build_prompt, generate_answers, render_answer_steps
from tfidf_rag.rag.indexer import build_tfidf_index, load_corpus, retrieve_top_docs


@pytest.fixture
def corpus_dir(tmp_path):
    d = tmp_path / "corpus"
    d.mkdir()
    (d / "b_cosine.md").write_text("# Cosine similarity\nAngles between vectors.\n", encoding="utf-8")
    (d / "a_tfidf.md").write_text("# TF-IDF\nRare terms weigh more than common terms.\n", encoding="utf-8")
    (d / "notes.txt").write_text("ignored", encoding="utf-8")
    return d


@pytest.fixture
def rag_index(corpus_dir):
    corpus = load_corpus(str(corpus_dir))
    return build_tfidf_index(corpus), dict(corpus)


def test_load_corpus_reads_sorted_markdown(corpus_dir):
    corpus = load_corpus(str(corpus_dir))
    assert [doc_id for doc_id, _ in corpus] == ["a_tfidf", "b_cosine"]
    assert corpus[0][1].startswith("# TF-IDF")


def test_load_corpus_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_corpus(str(tmp_path / "missing"))


def test_retrieve_top_docs(rag_index):
    index, _ = rag_index
    ids, sims = retrieve_top_docs(index, "rare terms", top_k=5)
    assert list(ids) == ["a_tfidf", "b_cosine"]
    assert sims[0] > 0 and sims[1] == 0.0


def test_render_answer_steps_cites_by_rank():
    texts = {"x": "\n# Title X\nbody", "y": "first line of y"}
    assert render_answer_steps(["y", "x"], texts) == ["1. first line of y [Doc#1]", "2. Title X [Doc#2]"]


def test_build_prompt_contains_context_and_question():
    prompt = build_prompt("what is x?", ["x"], {"x": "X is a letter."})
    assert "[Doc#1] X is a letter." in prompt
    assert prompt.rstrip().endswith("Question: what is x?\nAnswer:")


def test_answer_query_extractive(rag_index):
    index, texts = rag_index
    record = answer_query(index, texts, "angles between vectors", top_k=3)
    assert record["retrieved_docs"] == ["b_cosine"]
    assert record["citations"] == ["[Doc#1]"]
    assert record["answer"] == "1. Cosine similarity [Doc#1]"
    assert 0 < record["scores"][0] <= 1.0


def test_answer_query_with_generator(rag_index):
    index, texts = rag_index
    prompts = []

    def fake_llm(prompt):
        prompts.append(prompt)
        return "  Rare terms matter [Doc#1]  "

    record = answer_query(index, texts, "rare terms", generate=fake_llm)
    assert record["answer"] == "Rare terms matter [Doc#1]"
    assert len(prompts) == 1
    assert "Rare terms weigh more" in prompts[0]


def test_generator_not_called_without_matches(rag_index):
    index, texts = rag_index

    def fail(prompt):
        raise AssertionError("should not be called")

    record = answer_query(index, texts, "zebra", generate=fail)
    assert record["retrieved_docs"] == []
    assert record["citations"] == []
    assert record["answer"] == ""


def test_generate_answers_writes_jsonl(rag_index, tmp_path):
    index, texts = rag_index
    out_dir = tmp_path / "out" / "rag"
    results = generate_answers(index, texts, ["rare terms", "vectors"], out_dir=str(out_dir))
    lines = (out_dir / "answers.jsonl").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line) for line in lines] == results
