# tfidf_rag/tokenizer.py
import unicodedata

import regex

# regex's \w follows UTS#18 and keeps combining marks (\p{M}), so vowel signs,
# viramas and decomposed accents stay inside their word.
_NON_WORD = regex.compile(r"[^\w\s]")


def tokenize(text):
    """NFC-normalize, lowercase, blank out punctuation, split on whitespace."""
    if not text:
        return []
    text = unicodedata.normalize("NFC", text).lower()
    return _NON_WORD.sub(" ", text).split()
