"""Read-only accessor over an author-curated knowledge record.

Architectural role:
    Wraps the raw JSON mapping consumed by `assistant.core.engine` and exposes each
    top-level field with a stable Python type, so detectors never need to guard
    against missing or mistyped record content themselves.

Degradation model:
    - Missing or non-list list fields read as `[]`.
    - Missing or non-mapping object fields read as `{}`.
    - Missing, blank, or non-string string fields read as `None`.

Mutability:
    The wrapped mapping is never written to. Accessors return the underlying
    lists/mappings, which callers must treat as read-only.
"""

from typing import Any, Mapping


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str | None:
    """Return `value` when it is a non-blank string, otherwise `None`."""
    if isinstance(value, str) and value.strip():
        return value
    return None


class KnowledgeRecord:
    """Typed, forgiving view over a knowledge-record mapping."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data = _as_mapping(data)

    @classmethod
    def wrap(cls, record: "KnowledgeRecord | Mapping[str, Any] | None") -> "KnowledgeRecord":
        """Return `record` unchanged when already wrapped, otherwise wrap it."""
        if isinstance(record, KnowledgeRecord):
            return record
        return cls(record)

    @property
    def raw(self) -> Mapping[str, Any]:
        return self._data

    # -----------------------------------------------------
    # Top-level sections
    # -----------------------------------------------------

    @property
    def profile(self) -> Mapping[str, Any]:
        return _as_mapping(self._data.get("profile"))

    @property
    def highlights(self) -> list:
        return [h for h in _as_list(self._data.get("highlights")) if as_text(h)]

    @property
    def projects(self) -> list[Mapping[str, Any]]:
        return [p for p in _as_list(self._data.get("projects")) if isinstance(p, Mapping)]

    @property
    def skills(self) -> Mapping[str, Any]:
        return _as_mapping(self._data.get("skills"))

    @property
    def certifications(self) -> list[Mapping[str, Any]]:
        return [c for c in _as_list(self._data.get("certifications")) if isinstance(c, Mapping)]

    @property
    def experience(self) -> list[Mapping[str, Any]]:
        return [e for e in _as_list(self._data.get("experience")) if isinstance(e, Mapping)]

    @property
    def education(self) -> Mapping[str, Any]:
        return _as_mapping(self._data.get("education"))

    @property
    def faq(self) -> list:
        return _as_list(self._data.get("faq"))

    @property
    def links(self) -> Mapping[str, Any]:
        return _as_mapping(self._data.get("links"))

    # -----------------------------------------------------
    # Derived lookups
    # -----------------------------------------------------

    @property
    def work_policy(self) -> str | None:
        return as_text(self.profile.get("workPolicy"))

    def link(self, key: str) -> str | None:
        return as_text(self.links.get(key))

    def refusal(self, category: str) -> str | None:
        """Return the authored refusal text for `category` (`nda|sensitive|unknown`)."""
        safety = _as_mapping(self._data.get("safety"))
        refusals = _as_mapping(safety.get("refusals"))
        return as_text(refusals.get(category))


def case_study(project: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the project's `caseStudy` mapping, or `{}`."""
    return _as_mapping(project.get("caseStudy"))


def string_list(value: Any) -> list[str]:
    """Return the non-blank strings of a list field."""
    return [v for v in _as_list(value) if as_text(v)]
