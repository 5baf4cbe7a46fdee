"""Resolution value types shared by the router, safety gate, and engine.

Architectural role:
    Defines the structured answer returned by `assistant.core.engine.resolve` and
    rendered by API/CLI adapters.

Control-flow interaction:
    Detectors and the safety gate build `ResolutionResult` values directly; the
    engine returns the first one produced in precedence order.

Determinism:
    The data classes are purely structural and immutable.
"""

from dataclasses import dataclass, field


# Provenance captions rendered by callers next to the answer.
SOURCE_SAFETY = "Safety policy"
SOURCE_GREETING = "Greeting"
SOURCE_CASE_STUDY = "Projects (case study)"
SOURCE_HIGHLIGHTS = "Highlights"
SOURCE_PROJECTS = "Projects"
SOURCE_SKILLS = "Skills"
SOURCE_CERTIFICATIONS = "Certifications"
SOURCE_CONTACT = "Contact"
SOURCE_EXPERIENCE = "Experience"
SOURCE_EDUCATION = "Education"
SOURCE_WORK_POLICY = "Work policy"
SOURCE_FAQ = "FAQ"


@dataclass(frozen=True)
class ActionLink:
    """Quick-link surfaced next to an answer (email, proof URL, profile)."""

    label: str
    url: str

    def to_dict(self) -> dict:
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class ResolutionResult:
    """Structured answer for one visitor message.

    Attributes:
        answer: Message text to render.
        source: Human-readable provenance caption (for example `"FAQ"`).
        actions: Optional quick links; callers display at most `MAX_ACTIONS`.
        route: Internal route label that produced the answer (`safety`, a detector
            name, `faq`, or `unknown`). Used for logging and tests only.
    """

    answer: str
    source: str
    actions: tuple[ActionLink, ...] | None = None
    route: str = field(default="", compare=False)

    def to_dict(self, max_actions: int | None = None) -> dict:
        """Serialize for transport, truncating actions to `max_actions` when given."""
        payload = {"answer": self.answer, "source": self.source}

        if self.actions:
            actions = self.actions if max_actions is None else self.actions[:max_actions]
            payload["actions"] = [a.to_dict() for a in actions]

        return payload
