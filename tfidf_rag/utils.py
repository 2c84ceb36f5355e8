# tfidf_rag/utils.py
import os, json, time, hashlib, threading
from contextlib import contextmanager


class StageTimer:
    def __init__(self, name: str):
        self.name = name
        self.start_t = None
        self.elapsed = 0.0
    def __enter__(self):
        self.start_t = time.time(); return self
    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.time() - self.start_t


class ReadWriteLock:
    """Single writer / multiple readers. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def save_json(path: str, data):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def write_jsonl(path: str, rows):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

def read_jsonl(path: str):
    rows = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                rows.append(json.loads(line))
    return rows

def sha1_of_pairs(pairs):
    h = hashlib.sha1()
    for a, b in pairs:
        h.update(str(a).encode()); h.update(str(b).encode())
    return h.hexdigest()

def assert_or_raise(condition: bool, msg: str):
    if not condition:
        raise AssertionError(msg)
