"""Lexical normalization primitives shared by safety, routing, and FAQ scoring.

Normalization steps:
- Lowercasing.
- Every character that is not a letter, digit, or whitespace becomes a space.
- Whitespace runs collapse to a single space; the result is trimmed.

Tokenization:
- Normalized text is split on whitespace.
- Tokens from a closed stop-word set are dropped.

Stemming:
- Light suffix stripping for tokens of length >= 4.
- Ordered rule list, first matching suffix wins, ending with a generic trailing `s`.

Determinism:
- Fully deterministic; all tables are module constants.

Edge cases:
- `None` or non-string input normalizes to `""` and tokenizes to `[]`.
"""

import re


# =========================================================
# STOP WORDS
# =========================================================

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "to", "of", "in", "on", "for", "with",
    "is", "are", "do", "does", "can", "you", "i", "me", "my", "his", "her",
    "he", "she", "it", "this", "that", "what", "how", "about", "has", "have",
    "was", "be",
})


# =========================================================
# STEM RULES (suffix, replacement)
# =========================================================

STEM_RULES = (
    ("ies", "y"),
    ("ying", "y"),
    ("tion", "t"),
    ("sion", "s"),
    ("ment", ""),
    ("ness", ""),
    ("able", ""),
    ("ible", ""),
    ("ally", ""),
    ("ful", ""),
    ("ing", ""),
    ("ous", ""),
    ("ive", ""),
    ("ed", ""),
    ("er", ""),
    ("ly", ""),
    ("s", ""),
)

MIN_STEM_LENGTH = 4

# `[^\w\s]` keeps letters, digits and underscore; underscore is handled separately.
_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize(text) -> str:
    """Return lowercased text with punctuation replaced and whitespace collapsed."""
    if not isinstance(text, str) or not text:
        return ""

    t = text.lower()
    t = _NON_WORD.sub(" ", t)
    return _WHITESPACE.sub(" ", t).strip()


def tokenize(text) -> list[str]:
    """Split normalized text into content tokens, dropping stop words."""
    return [t for t in normalize(text).split(" ") if t and t not in STOP_WORDS]


def stem(token: str) -> str:
    """
    Strip the first matching suffix from `token`.

    Tokens shorter than `MIN_STEM_LENGTH` are returned unchanged.
    """
    if len(token) < MIN_STEM_LENGTH:
        return token

    for suffix, replacement in STEM_RULES:
        if token.endswith(suffix):
            return token[: len(token) - len(suffix)] + replacement

    return token
