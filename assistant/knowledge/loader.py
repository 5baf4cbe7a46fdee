"""Knowledge-record supply: embedded page payload first, JSON file fallback.

Architectural role:
    Obtains the author-curated record once per session and validates the minimum
    contract the engine relies on before handing it out as a `KnowledgeRecord`.

Load order:
    1. JSON text of the `<script id=EMBEDDED_KB_ID>` element in page markup, when
       a page path is configured and the element holds valid JSON.
    2. The standalone JSON file at `KNOWLEDGE_PATH`.

Validation model (pydantic):
    - `faq` is a list of `{id, q, a}` string triples with unique `id` values.
    - `safety.refusals.unknown` is a non-empty string (last-resort output).
    - All other fields are optional and passed through untouched; the engine
      degrades gracefully on them.

Failure handling:
    - Missing/unreadable files, non-UTF-8 bytes and invalid JSON raise
      `KnowledgeLoadError`.
    - Contract violations raise `KnowledgeValidationError`.
    - An unusable embedded payload is logged and skipped in favour of the file.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Any, Mapping

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from assistant.knowledge import source_config
from assistant.knowledge.record import KnowledgeRecord


logger = logging.getLogger(__name__)


# =========================================================
# ERRORS
# =========================================================

class KnowledgeError(Exception):
    """Base error for knowledge-record supply."""


class KnowledgeLoadError(KnowledgeError):
    """The record could not be read or parsed."""


class KnowledgeValidationError(KnowledgeError):
    """The record does not satisfy the engine's minimum contract."""


# =========================================================
# SCHEMA
# =========================================================

class FaqItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    q: str
    a: str


class Refusals(BaseModel):
    model_config = ConfigDict(extra="allow")

    unknown: str
    nda: str | None = None
    sensitive: str | None = None

    @field_validator("unknown")
    @classmethod
    def _unknown_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("unknown refusal must not be blank")
        return value


class Safety(BaseModel):
    model_config = ConfigDict(extra="allow")

    refusals: Refusals


class RecordContract(BaseModel):
    """Minimum shape of a knowledge record accepted by the loader."""

    model_config = ConfigDict(extra="allow")

    faq: list[FaqItem]
    safety: Safety

    @field_validator("faq")
    @classmethod
    def _unique_ids(cls, items: list[FaqItem]) -> list[FaqItem]:
        seen = set()
        for item in items:
            if item.id in seen:
                raise ValueError(f"duplicate faq id: {item.id}")
            seen.add(item.id)
        return items


def validate_record(raw: Any) -> KnowledgeRecord:
    """Validate a parsed record and wrap it for the engine.

    The original mapping is wrapped as-is; validation never rewrites content.
    """
    if not isinstance(raw, Mapping):
        raise KnowledgeValidationError("knowledge record must be a JSON object")

    try:
        RecordContract.model_validate(raw)
    except ValidationError as e:
        raise KnowledgeValidationError(str(e)) from e

    return KnowledgeRecord(raw)


# =========================================================
# EMBEDDED PAYLOAD
# =========================================================

def load_embedded_knowledge(html: str, element_id: str = source_config.EMBEDDED_KB_ID) -> dict | None:
    """
    Extract and parse the JSON record embedded in page markup.

    Edge cases:
    - Missing element, blank content, or invalid JSON returns `None`.
    """
    if not html:
        return None

    soup = BeautifulSoup(html, "html.parser")
    element = soup.find(id=element_id)
    if element is None:
        return None

    raw = (element.string or element.get_text() or "").strip()
    if not raw:
        return None

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Embedded knowledge payload in #%s is not valid JSON", element_id)
        return None


# =========================================================
# FILE PAYLOAD
# =========================================================

def load_knowledge_file(path: str) -> Any:
    """Read and parse a JSON record file."""
    if not os.path.exists(path):
        raise KnowledgeLoadError(f"knowledge file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise KnowledgeLoadError(f"invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise KnowledgeLoadError(f"{path} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise KnowledgeLoadError(f"cannot read {path}: {e}") from e


def load_knowledge(path: str | None = None, html_path: str | None = None) -> KnowledgeRecord:
    """Load and validate the knowledge record.

    Args:
        path: JSON file path (defaults to `KNOWLEDGE_PATH`).
        html_path: Optional page whose embedded payload takes precedence
            (defaults to `KNOWLEDGE_HTML_PATH`).

    Returns:
        Validated `KnowledgeRecord`.
    """
    html_path = html_path or source_config.KNOWLEDGE_HTML_PATH

    if html_path:
        try:
            with open(html_path, "r", encoding="utf-8") as f:
                embedded = load_embedded_knowledge(f.read())
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read knowledge page %s; using file payload", html_path)
            embedded = None

        if embedded is not None:
            return validate_record(embedded)

    return validate_record(load_knowledge_file(path or source_config.KNOWLEDGE_PATH))


@lru_cache(maxsize=1)
def get_knowledge_record() -> KnowledgeRecord:
    """Return the process-wide record, loading it on first use."""
    record = load_knowledge()
    logger.info("Knowledge record loaded: %d FAQ entries", len(record.faq))
    return record
