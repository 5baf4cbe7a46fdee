"""Ordered topic detectors mapping a cleared query onto one record section.

Intent classification logic:
- `DETECTORS` is an ordered list of `Detector(name, matches, answer)` pairs.
- `matches` is a boolean test over the parsed query (opener, cue words, topic
  signature regex).
- `answer` reads the knowledge record and returns a `ResolutionResult`, or
  `None` when the section it depends on is missing or empty.
- The first detector that both matches and answers wins.

Precedence:
  greeting > project case study > metrics > project list > skills >
  certifications > contact > experience > education > work policy

Interaction with core:
- Called by `assistant.core.engine.resolve` after the safety gate has cleared the
  query. A `None` route result hands control to the FAQ matcher.

Determinism:
- Fully deterministic; detector tables are module constants.

Failure handling:
- Empty input matches nothing. Missing record fields skip the detector.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from assistant.core import routing_types as rt
from assistant.core.routing_types import ResolutionResult
from assistant.knowledge.actions import case_study_actions, contact_actions, credibility_actions
from assistant.knowledge.record import KnowledgeRecord, as_text
from assistant.nlp import formatters
from assistant.nlp.faq_matcher import overlap_score
from assistant.nlp.text_normalizer import normalize, tokenize
from assistant.safety.policy import CATEGORY_UNKNOWN, refusal_text


PROJECT_FUZZY_THRESHOLD = 0.25


@dataclass(frozen=True)
class ParsedQuery:
    """Raw and normalized forms of one visitor message."""

    raw: str
    normalized: str

    @classmethod
    def parse(cls, text) -> "ParsedQuery":
        raw = text if isinstance(text, str) else ""
        return cls(raw=raw, normalized=normalize(raw))

    def has(self, pattern: re.Pattern) -> bool:
        return bool(pattern.search(self.normalized))


@dataclass(frozen=True)
class Detector:
    """Topic predicate paired with the handler that answers it."""

    name: str
    matches: Callable[[ParsedQuery], bool]
    answer: Callable[[ParsedQuery, KnowledgeRecord], ResolutionResult | None]


# =========================================================
# TOPIC SIGNATURES
# =========================================================

GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey|howdy|sup|yo|greetings|good\s*(morning|afternoon|evening))(\s|$)"
)
PROJECT_CUE_PATTERN = re.compile(r"\b(project|case|study|work|tell|about|explain|details)\b")
METRICS_PATTERN = re.compile(r"\b(metric|metrics|impact|results|outcome|kpi|proof)\b")
PROJECT_LIST_PATTERN = re.compile(r"\b(projects?|case study|case studies|work)\b")
SKILLS_PATTERN = re.compile(r"\b(skills?|stack|tech|technolog(y|ies))\b")
CERTIFICATION_PATTERN = re.compile(r"\b(certs?|certifications?|certified|badges?|credly|credentials?)\b")
CONTACT_PATTERN = re.compile(r"\b(contact|email|reach|linkedin)\b")
EXPERIENCE_PATTERN = re.compile(r"\b(experience|background)\b")
EDUCATION_PATTERN = re.compile(r"\b(education|university|uct|degree|graduat\w*)\b")
WORK_POLICY_PATTERN = re.compile(r"\b(role|roles|looking for|availability|remote|hybrid)\b")


# Shortcut routing from domain keywords to a project name in the record.
PROJECT_KEYWORDS = [
    (re.compile(r"\bocr\b|\bcomputer vision\b|\bdocument automation\b"), "OCR document automation"),
    (re.compile(r"\brag\b|\bretrieval\b|\bfaiss\b"), "Retrieval assistant (RAG)"),
    (re.compile(r"\bembedded\b|\bedge\b|\bstm32\b|\bsensor\b"), "Embedded / edge foundations"),
    (re.compile(r"\bconfidential\b"), "Confidential AI product build (NDA)"),
]


# =========================================================
# PROJECT LOOKUP
# =========================================================

def pick_project(query: ParsedQuery, record: KnowledgeRecord) -> Mapping[str, Any] | None:
    """
    Find the project a query refers to.

    Keyword shortcuts are tried first; a keyword whose project is absent from the
    record falls through to the next one. Otherwise the best fuzzy token overlap
    against project names wins when it reaches `PROJECT_FUZZY_THRESHOLD`.
    """
    projects = [p for p in record.projects if as_text(p.get("name"))]
    if not projects:
        return None

    by_name = {}
    for p in projects:
        by_name.setdefault(normalize(p["name"]), p)

    for pattern, name in PROJECT_KEYWORDS:
        if query.has(pattern):
            hit = by_name.get(normalize(name))
            if hit is not None:
                return hit

    query_tokens = tokenize(query.raw)
    best = None
    best_score = 0.0
    for p in projects:
        score = overlap_score(query_tokens, tokenize(p["name"]))
        if score > best_score:
            best, best_score = p, score

    if best is not None and best_score >= PROJECT_FUZZY_THRESHOLD:
        return best
    return None


# =========================================================
# HANDLERS
# =========================================================

def _text_result(text: str | None, source: str, route: str, actions=()) -> ResolutionResult | None:
    if not text:
        return None
    return ResolutionResult(answer=text, source=source, actions=tuple(actions) or None, route=route)


def _answer_greeting(query, record):
    return ResolutionResult(answer=formatters.GREETING_REPLY, source=rt.SOURCE_GREETING, route="greeting")


def _answer_project(query, record):
    project = pick_project(query, record)
    if project is None:
        return None

    return _text_result(
        formatters.format_project_case_study(project),
        rt.SOURCE_CASE_STUDY,
        "project",
        case_study_actions(project),
    )


def _answer_highlights(query, record):
    return _text_result(formatters.format_highlights(record), rt.SOURCE_HIGHLIGHTS, "metrics")


def _answer_projects(query, record):
    return _text_result(formatters.format_projects(record), rt.SOURCE_PROJECTS, "projects")


def _answer_skills(query, record):
    return _text_result(formatters.format_skills(record), rt.SOURCE_SKILLS, "skills")


def _answer_certifications(query, record):
    return _text_result(
        formatters.format_credibility(record),
        rt.SOURCE_CERTIFICATIONS,
        "certifications",
        credibility_actions(record),
    )


def _answer_contact(query, record):
    return _text_result(formatters.format_contact(record), rt.SOURCE_CONTACT, "contact", contact_actions(record))


def _answer_experience(query, record):
    return _text_result(formatters.format_experience(record), rt.SOURCE_EXPERIENCE, "experience")


def _answer_education(query, record):
    return _text_result(formatters.format_education(record), rt.SOURCE_EDUCATION, "education")


def _answer_work_policy(query, record):
    policy = record.work_policy or refusal_text(record, CATEGORY_UNKNOWN)
    return _text_result(policy, rt.SOURCE_WORK_POLICY, "work_policy")


def _signature(pattern: re.Pattern) -> Callable[[ParsedQuery], bool]:
    return lambda query: query.has(pattern)


DETECTORS = [
    Detector("greeting", _signature(GREETING_PATTERN), _answer_greeting),
    Detector("project", _signature(PROJECT_CUE_PATTERN), _answer_project),
    Detector("metrics", _signature(METRICS_PATTERN), _answer_highlights),
    Detector("projects", _signature(PROJECT_LIST_PATTERN), _answer_projects),
    Detector("skills", _signature(SKILLS_PATTERN), _answer_skills),
    Detector("certifications", _signature(CERTIFICATION_PATTERN), _answer_certifications),
    Detector("contact", _signature(CONTACT_PATTERN), _answer_contact),
    Detector("experience", _signature(EXPERIENCE_PATTERN), _answer_experience),
    Detector("education", _signature(EDUCATION_PATTERN), _answer_education),
    Detector("work_policy", _signature(WORK_POLICY_PATTERN), _answer_work_policy),
]


def decide_route(query: ParsedQuery, record: KnowledgeRecord, detectors=None) -> ResolutionResult | None:
    """Return the answer of the first matching detector, or `None`."""
    for detector in detectors if detectors is not None else DETECTORS:
        if not detector.matches(query):
            continue

        result = detector.answer(query, record)
        if result is not None:
            return result

    return None
