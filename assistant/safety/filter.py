"""Rule-based lexical safety gate for confidential and sensitive queries.

Purpose:
    Provide a deterministic pre-routing check that intercepts questions about
    confidential client work or sensitive personal records before any intent
    detector or FAQ lookup can answer them.

Validation model:
    - Rule-based only (regex over normalized text), no classifier/model inference.
    - NDA-probe patterns are evaluated before the broader sensitive patterns so
      the more specific refusal wins.
    - Output is a `SafetyVerdict` consumed by orchestration (`assistant.core`).

Blocking behavior:
    - `verdict.blocked is False`: request continues to routing/FAQ matching.
    - `verdict.blocked is True`: caller short-circuits with the refusal named by
      `verdict.category` (`nda` or `sensitive`).

Determinism:
    For the same input text and pattern tables, output is deterministic.

Bypass risk:
    Lexical matching can be bypassed by misspellings or paraphrase. The answer
    space is limited to the curated record in any case.
"""

import re
from dataclasses import dataclass

from assistant.nlp.text_normalizer import normalize


CATEGORY_NDA = "nda"
CATEGORY_SENSITIVE = "sensitive"


# Confidentiality probes: naming or identifying clients behind NDA work.
NDA_PROBE_PATTERNS = [
    ("nda", re.compile(r"\bnda\b")),
    ("client_or_company_name", re.compile(r"(client|company)\s+name")),
    ("who_was_it_for", re.compile(r"who\s+was\s+it\s+for")),
]


# Sensitive topics: disciplinary, legal, medical, and registrar records.
SENSITIVE_PATTERNS = [
    ("disciplinary", re.compile(r"disciplin")),
    ("exclusion", re.compile(r"exclusion")),
    ("registrar", re.compile(r"registrar")),
    ("transcript", re.compile(r"transcript")),
    ("codes", re.compile(r"\bcodes?\b")),
    ("medical", re.compile(r"medical")),
    ("health", re.compile(r"health")),
    ("legal", re.compile(r"legal")),
    ("case_number", re.compile(r"case\s+number")),
]


@dataclass(frozen=True)
class SafetyVerdict:
    """Outcome of the safety gate for one query."""

    blocked: bool
    category: str | None = None
    rule: str | None = None


ALLOWED = SafetyVerdict(blocked=False)


def _first_match(text: str, patterns) -> str | None:
    for name, pattern in patterns:
        if pattern.search(text):
            return name
    return None


def check_query(question) -> SafetyVerdict:
    """Classify raw query text against the NDA-probe and sensitive pattern tables.

    Evaluation order:
        1. Empty input is allowed.
        2. Any NDA-probe pattern -> blocked with category `nda`.
        3. Any sensitive pattern -> blocked with category `sensitive`.
        4. Otherwise allowed.
    """
    text = normalize(question)
    if not text:
        return ALLOWED

    rule = _first_match(text, NDA_PROBE_PATTERNS)
    if rule:
        return SafetyVerdict(blocked=True, category=CATEGORY_NDA, rule=rule)

    rule = _first_match(text, SENSITIVE_PATTERNS)
    if rule:
        return SafetyVerdict(blocked=True, category=CATEGORY_SENSITIVE, rule=rule)

    return ALLOWED


def is_allowed(question) -> bool:
    """Return whether a question should pass the lexical safety gate."""
    return not check_query(question).blocked
