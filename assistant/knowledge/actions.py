"""Quick-link builders drawn from record link fields.

Every action label/url pair originates from the record; entries missing either
half are dropped rather than rendered as broken links.
"""

from typing import Any, Mapping

from assistant.core.routing_types import ActionLink
from assistant.knowledge.record import KnowledgeRecord, as_text, case_study


def _pair(label: Any, url: Any) -> ActionLink | None:
    label, url = as_text(label), as_text(url)
    if label and url:
        return ActionLink(label=label, url=url)
    return None


def contact_actions(record: KnowledgeRecord) -> tuple[ActionLink, ...]:
    """Email, LinkedIn, and GitHub links, in that order, when present."""
    actions = [
        _pair("Email", record.link("email")),
        _pair("LinkedIn", record.link("linkedin")),
        _pair("GitHub", record.link("github")),
    ]
    return tuple(a for a in actions if a)


def credibility_actions(record: KnowledgeRecord) -> tuple[ActionLink, ...]:
    """Certification proof links followed by the profile links that back them."""
    actions = [_pair(c.get("name"), c.get("proof")) for c in record.certifications]
    actions += [
        _pair("Credly", record.link("credly")),
        _pair("GitHub", record.link("github")),
        _pair("LinkedIn", record.link("linkedin")),
    ]
    return tuple(a for a in actions if a)


def case_study_actions(project: Mapping[str, Any]) -> tuple[ActionLink, ...]:
    links = case_study(project).get("links")
    if not isinstance(links, list):
        return ()

    actions = [_pair(l.get("label"), l.get("url")) for l in links if isinstance(l, Mapping)]
    return tuple(a for a in actions if a)
