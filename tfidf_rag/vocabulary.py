# tfidf_rag/vocabulary.py
from collections import Counter


class Vocabulary:
    """Append-only mapping term -> dense integer id (first-seen order).

    Ids are never renumbered or reused; growing the vocabulary only appends.
    """

    def __init__(self):
        self._ids = {}
        self._terms = []

    def __len__(self):
        return len(self._terms)

    def __contains__(self, term):
        return term in self._ids

    def __iter__(self):
        return iter(self._terms)

    def get(self, term, default=None):
        return self._ids.get(term, default)

    def term(self, term_id: int) -> str:
        return self._terms[term_id]

    def add(self, term: str) -> int:
        """Return the id of `term`, assigning the next free id if it is new."""
        term_id = self._ids.get(term)
        if term_id is None:
            term_id = len(self._terms)
            self._ids[term] = term_id
            self._terms.append(term)
        return term_id


class DocumentFrequencyTable:
    """Per term id, the number of documents that contain the term at least once."""

    def __init__(self):
        self._counts = []
        self.n_documents = 0

    def __len__(self):
        return len(self._counts)

    def __getitem__(self, term_id):
        return self._counts[term_id]

    def get(self, term_id, default=0):
        if 0 <= term_id < len(self._counts):
            return self._counts[term_id]
        return default

    def counts(self):
        return list(self._counts)

    def record_document(self, term_ids):
        """Count one more document containing each of the (distinct) `term_ids`."""
        for term_id in term_ids:
            while term_id >= len(self._counts):
                self._counts.append(0)
            self._counts[term_id] += 1
        self.n_documents += 1


def observe(vocabulary, document_frequency, terms):
    """Register one document's terms and return its raw counts keyed by term id.

    Every distinct term bumps its document frequency exactly once, however many
    times it occurs; the returned counts keep the full occurrence numbers.
    """
    raw = Counter(terms)
    term_counts = {vocabulary.add(term): count for term, count in raw.items()}
    document_frequency.record_document(term_counts.keys())
    return term_counts


def count_terms(vocabulary, terms):
    """Raw counts of the in-vocabulary `terms`; unknown terms are dropped."""
    term_counts = {}
    for term in terms:
        term_id = vocabulary.get(term)
        if term_id is not None:
            term_counts[term_id] = term_counts.get(term_id, 0) + 1
    return term_counts
