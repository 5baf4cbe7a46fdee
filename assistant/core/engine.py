"""Query resolution: one visitor message in, one grounded answer out.

Architectural role:
    Provides the pure resolution function used by API/CLI adapters (and any other
    caller) to turn free text plus a knowledge record into a `ResolutionResult`.

Control-flow model (one transition per message, no state between messages):
    received -> safety-checked -> (refused | routed | faq-matched | unknown)

    1. Safety gate (`safety.filter.check_query`). A blocking verdict returns the
       `nda`/`sensitive` refusal and nothing downstream runs.
    2. Intent router (`nlp.intent_router.decide_route`), first detector wins.
    3. FAQ overlap matcher (`nlp.faq_matcher.pick_faq_answer`).
    4. `unknown` refusal with contact actions.

Grounding:
    Every non-refusal answer is read from one record field; the only fixed text
    is the greeting overview and formatting headings.

Error handling strategy:
    `resolve` never raises for malformed text or a partially-populated record.
    Non-string text is treated as empty and falls through to the `unknown`
    refusal. Missing record fields skip the detectors that depend on them.

Side effects:
    Debug/info logging only. The record is never modified.

Determinism:
    Identical `(text, record)` inputs yield identical results.
"""

import logging
from typing import Any, Mapping

from assistant.core.routing_types import SOURCE_FAQ, ResolutionResult
from assistant.knowledge.record import KnowledgeRecord
from assistant.nlp.faq_matcher import pick_faq_answer
from assistant.nlp.intent_router import ParsedQuery, decide_route
from assistant.safety.filter import check_query
from assistant.safety.policy import refuse_unknown, refuse_verdict


logger = logging.getLogger(__name__)


def _faq_result(query: ParsedQuery, record: KnowledgeRecord) -> ResolutionResult | None:
    candidate = pick_faq_answer(query.raw, record.faq)
    if candidate is None:
        return None

    logger.debug("FAQ match id=%s score=%.3f", candidate.item.get("id"), candidate.score)
    return ResolutionResult(answer=candidate.item["a"], source=SOURCE_FAQ, route="faq")


def resolve(text: Any, knowledge_record: KnowledgeRecord | Mapping[str, Any] | None) -> ResolutionResult:
    """Resolve one visitor message against the knowledge record.

    Args:
        text: Raw visitor message. Non-string values are treated as empty.
        knowledge_record: `KnowledgeRecord` or raw record mapping.

    Returns:
        `ResolutionResult` with `answer`, `source`, and optional `actions`.

    Precedence:
        The safety refusal is absolute; no detector or FAQ entry can override it.
    """
    record = KnowledgeRecord.wrap(knowledge_record)
    query = ParsedQuery.parse(text)

    # -----------------------------------------------------
    # SAFETY GATE
    # -----------------------------------------------------

    verdict = check_query(query.raw)
    if verdict.blocked:
        logger.info("Safety refusal category=%s rule=%s", verdict.category, verdict.rule)
        return refuse_verdict(record, verdict)

    # -----------------------------------------------------
    # INTENT ROUTING
    # -----------------------------------------------------

    result = decide_route(query, record)

    # -----------------------------------------------------
    # FAQ OVERLAP
    # -----------------------------------------------------

    if result is None:
        result = _faq_result(query, record)

    # -----------------------------------------------------
    # UNKNOWN
    # -----------------------------------------------------

    if result is None:
        result = refuse_unknown(record)

    logger.debug("Resolved route=%s source=%s", result.route, result.source)
    return result
