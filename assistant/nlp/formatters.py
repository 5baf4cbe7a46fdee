"""Answer text formatters for intent-router detectors.

Each formatter reads one section of the knowledge record and returns plain text,
or `None` when that section has nothing to report. Formatting is limited to
headings, bullets, and joins; no content is generated beyond the record.
"""

import re
from typing import Any, Mapping

from assistant.knowledge.record import KnowledgeRecord, as_text, case_study, string_list


INTRO_MESSAGE = (
    "Hi. I can answer questions about skills, case studies, credibility, "
    "and contact using public portfolio notes only."
)

GREETING_REPLY = (
    "Hi! I can help with questions about skills, projects, experience, "
    "certifications, or contact info. What would you like to know?"
)

CASE_STUDY_FOLLOWUP = "If you want, ask: “Show skills”, “Show experience”, or “How do I contact you?”"

PROJECT_LIST_TIP = "Tip: ask about a specific project (e.g., “Tell me about OCR” or “Tell me about RAG”)."

# Display labels for the skill groups used by the portfolio record.
SKILL_GROUP_LABELS = {
    "ocrComputerVision": "OCR / Computer Vision",
    "retrievalRag": "Retrieval (RAG)",
    "backendServices": "Backend / Services",
    "shippingDiscipline": "Shipping discipline",
    "embeddedFundamentals": "Embedded fundamentals",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def skill_group_label(key: str) -> str:
    """Return the display label for a skill group key (`camelCase` -> `Camel case`)."""
    if key in SKILL_GROUP_LABELS:
        return SKILL_GROUP_LABELS[key]

    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").split()
    return " ".join(words).capitalize()


def format_highlights(record: KnowledgeRecord) -> str | None:
    highlights = record.highlights
    if not highlights:
        return None

    lines = ["Public-safe highlights:"]
    lines += [f"- {h}" for h in highlights]
    return "\n".join(lines)


def format_project_case_study(project: Mapping[str, Any]) -> str:
    """Render a project's full case study: outcome, approach, reliability, stack, links."""
    cs = case_study(project)
    lines = [f"{as_text(project.get('name')) or 'Project'} (public-safe)"]

    for label, key in (("Outcome", "outcome"), ("Approach", "approach"), ("Reliability", "reliability")):
        value = as_text(cs.get(key))
        if value:
            lines.append(f"{label}: {value}")

    stack = string_list(cs.get("stack"))
    if stack:
        lines.append(f"Stack: {', '.join(stack)}")

    links = [
        l for l in (cs.get("links") if isinstance(cs.get("links"), list) else [])
        if isinstance(l, Mapping) and as_text(l.get("label")) and as_text(l.get("url"))
    ]
    if links:
        lines.append("Links:")
        lines += [f"- {l['label']}: {l['url']}" for l in links]

    lines.append("")
    lines.append(CASE_STUDY_FOLLOWUP)
    return "\n".join(lines)


def format_projects(record: KnowledgeRecord) -> str | None:
    projects = [p for p in record.projects if as_text(p.get("name"))]
    if not projects:
        return None

    lines = ["Selected case studies (public-safe):"]
    for p in projects:
        outcome = as_text(case_study(p).get("outcome")) or ""
        lines.append(f"- {p['name']}: {outcome}".strip())

    lines.append("")
    lines.append(PROJECT_LIST_TIP)
    return "\n".join(lines)


def format_skills(record: KnowledgeRecord) -> str | None:
    groups = [(key, string_list(values)) for key, values in record.skills.items()]
    groups = [(key, values) for key, values in groups if values]
    if not groups:
        return None

    lines = ["Skills summary:"]
    lines += [f"- {skill_group_label(key)}: {'; '.join(values)}" for key, values in groups]
    return "\n".join(lines)


def format_credibility(record: KnowledgeRecord) -> str | None:
    lines = []
    for c in record.certifications:
        name = as_text(c.get("name"))
        if not name:
            continue
        proof = as_text(c.get("proof"))
        lines.append(f"- {name} (proof: {proof})" if proof else f"- {name}")

    for label, key in (("GitHub", "github"), ("LinkedIn", "linkedin"), ("Credly", "credly")):
        url = record.link(key)
        if url:
            lines.append(f"- {label}: {url}")

    if not lines:
        return None
    return "\n".join(["Credibility (public-safe):"] + lines)


def format_contact(record: KnowledgeRecord) -> str | None:
    lines = []

    email = record.link("email")
    if email:
        lines.append(f"- Email: {email.removeprefix('mailto:')}")

    for label, key in (("LinkedIn", "linkedin"), ("GitHub", "github"), ("Credly", "credly")):
        url = record.link(key)
        if url:
            lines.append(f"- {label}: {url}")

    if not lines:
        return None
    return "\n".join(["Contact:"] + lines)


def format_experience(record: KnowledgeRecord) -> str | None:
    lines = []
    for e in record.experience:
        area = as_text(e.get("area"))
        if not area:
            continue
        lines.append(f"- {area}")
        lines += [f"  - {s}" for s in string_list(e.get("summary"))]

    if not lines:
        return None
    return "\n".join(["Experience (public-safe):"] + lines)


def format_education(record: KnowledgeRecord) -> str | None:
    """
    Return the record's approved education line verbatim.

    Without an approved line there is nothing that may be said about
    education, so `None` is returned and routing moves on.
    """
    return as_text(record.education.get("approvedLine"))
