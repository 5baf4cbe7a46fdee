"""Refusal policy: maps safety verdicts and unanswerable queries to refusals.

Decision model:
    - Refusal text comes from the record's `safety.refusals` entries.
    - When the record omits a refusal, a fixed default keeps the response non-empty.
    - Every refusal carries contact actions so the visitor is redirected to a human.

Determinism:
    Deterministic for identical verdicts and records.
"""

from assistant.core.routing_types import SOURCE_SAFETY, ResolutionResult
from assistant.knowledge.actions import contact_actions
from assistant.knowledge.record import KnowledgeRecord
from assistant.safety.filter import CATEGORY_NDA, CATEGORY_SENSITIVE, SafetyVerdict


CATEGORY_UNKNOWN = "unknown"

DEFAULT_REFUSALS = {
    CATEGORY_NDA: "Some work is under NDA.",
    CATEGORY_SENSITIVE: "I can’t help with that.",
    CATEGORY_UNKNOWN: "I don’t have that detail in my public portfolio notes.",
}


def refusal_text(record: KnowledgeRecord, category: str) -> str:
    """Return the authored refusal for `category`, or its default."""
    return record.refusal(category) or DEFAULT_REFUSALS[category]


def refuse(record: KnowledgeRecord, category: str, route: str = "safety") -> ResolutionResult:
    """Build a refusal result for `category` with contact actions attached."""
    actions = contact_actions(record)
    return ResolutionResult(
        answer=refusal_text(record, category),
        source=SOURCE_SAFETY,
        actions=actions or None,
        route=route,
    )


def refuse_verdict(record: KnowledgeRecord, verdict: SafetyVerdict) -> ResolutionResult:
    """Build the refusal matching a blocking safety verdict."""
    category = CATEGORY_NDA if verdict.category == CATEGORY_NDA else CATEGORY_SENSITIVE
    return refuse(record, category)


def refuse_unknown(record: KnowledgeRecord) -> ResolutionResult:
    """Last-resort answer when nothing in the record matches."""
    return refuse(record, CATEGORY_UNKNOWN, route="unknown")
