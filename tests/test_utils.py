import threading
import time

from tfidf_rag.index import TfidfIndex
from tfidf_rag.utils import ReadWriteLock, StageTimer, read_jsonl, sha1_of_pairs, write_jsonl


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []

    def reader():
        with lock.read():
            events.append("read")

    with lock.write():
        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        events.append("write-done")
    t.join(timeout=2)
    assert events == ["write-done", "read"]


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2)

    def reader():
        with lock.read():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=3)
    assert not inside.broken


def test_concurrent_adds_and_searches(corpus):
    index = TfidfIndex().fit(corpus)
    errors = []

    def writer(start):
        try:
            for i in range(start, start + 20):
                index.add(f"w{i}", f"generated document number {i} about learning")
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    def searcher():
        try:
            for _ in range(20):
                results = index.search("learning document", 5)
                assert all(0.0 <= r.score <= 1.0 for r in results)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(s,)) for s in (0, 100)]
    threads += [threading.Thread(target=searcher) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not any(t.is_alive() for t in threads)

    assert errors == []
    assert index.size() == len(corpus) + 40


def test_stage_timer():
    with StageTimer("x") as t:
        pass
    assert t.elapsed >= 0.0


def test_jsonl_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "rows.jsonl")
    rows = [{"a": 1}, {"b": "ü"}]
    write_jsonl(path, rows)
    assert read_jsonl(path) == rows


def test_sha1_of_pairs_is_order_sensitive():
    assert sha1_of_pairs([("a", 1), ("b", 2)]) != sha1_of_pairs([("b", 2), ("a", 1)])
    assert sha1_of_pairs([("a", 1)]) == sha1_of_pairs([("a", 1)])


def test_state_accessors_wait_for_the_writer(corpus):
    index = TfidfIndex().fit(corpus)
    seen = []

    def reader():
        seen.append((index.is_fitted, index.document_count))

    with index._lock.write():
        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        assert seen == []
    t.join(timeout=2)
    assert seen == [(True, len(corpus))]
