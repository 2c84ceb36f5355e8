import pytest
from sklearn.feature_extraction.text import TfidfVectorizer

from tfidf_rag.index import TfidfIndex
from tfidf_rag.tokenizer import tokenize


def _sklearn(corpus):
    vec = TfidfVectorizer(token_pattern=r"(?u)\b\w+\b", smooth_idf=True, norm=None)
    X = vec.fit_transform([text for _, text in corpus])
    return vec, X


def test_idf_matches_smoothed_sklearn_idf(corpus):
    vec, _ = _sklearn(corpus)
    ours = TfidfIndex().fit(corpus).idf_table()
    assert set(ours) == set(vec.vocabulary_)
    for term, column in vec.vocabulary_.items():
        assert ours[term] == pytest.approx(vec.idf_[column])


def test_document_weights_match_unnormalized_sklearn_vectors(corpus):
    vec, X = _sklearn(corpus)
    index = TfidfIndex().fit(corpus)
    for row, (doc_id, _) in enumerate(corpus):
        record = index.get_document(doc_id)
        for term_id, weight in record.vector.items():
            column = vec.vocabulary_[index.vocabulary.term(term_id)]
            assert X[row, column] == pytest.approx(weight)
        assert X[row].nnz == len(record.vector)


def test_tokenizer_agrees_with_sklearn_analyzer(corpus):
    analyzer = TfidfVectorizer(token_pattern=r"(?u)\b\w+\b").build_analyzer()
    for _, text in corpus:
        assert tokenize(text) == analyzer(text)
