import pytest

from tfidf_rag.index import TfidfIndex

CORPUS = [
    ("d1", "Machine learning algorithms learn patterns from data"),
    ("d2", "Deep learning neural networks need large training data"),
    ("d3", "Information retrieval ranks documents by relevance to a query"),
    ("d4", "TF-IDF weighting reflects how important a word is to a document"),
]


@pytest.fixture
def corpus():
    return list(CORPUS)


@pytest.fixture
def index(corpus):
    return TfidfIndex().fit(corpus)


@pytest.fixture
def cat_dog_index():
    return TfidfIndex().fit([
        {"id": "a", "text": "the cat sat"},
        {"id": "b", "text": "the dog ran"},
    ])
