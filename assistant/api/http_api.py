"""
HTTP API adapter for the portfolio assistant.

Architectural role:
- Expose the resolution engine over JSON endpoints for the site widget.
- Enforce adapter-level input validation.
- Delegate answering to `assistant.core.engine.resolve`.
- Truncate quick links to `MAX_ACTIONS` for rendering.

Endpoint responsibilities:
- `GET /health`: liveness probe.
- `GET /v1/suggestions`: intro message and seeded suggestion chips.
- `POST /v1/chat`: validate `message`, resolve it, return the structured answer.

API request lifecycle (`POST /v1/chat`):
1. Parse request JSON (`message`).
2. Validate that `message` is a string.
3. Obtain the session-wide knowledge record (loaded once).
4. Resolve and serialize `{answer, source, actions?}`.

Input validation behavior:
- Unparseable body or non-string `message` -> HTTP 400.
- Knowledge record unavailable -> HTTP 503.

Side effects:
- Loads the knowledge record on first request via `get_knowledge_record()`.
- Emits request/response debug logs only when `DEBUG == "true"`.
- Loads environment variables at import time via `load_dotenv()`.
- Configures root logging with `LOG_LEVEL` at import time.

Determinism considerations:
- Response content is a pure function of the message and record; only the
  health timestamp varies between calls.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from assistant import __version__
from assistant.core.engine import resolve
from assistant.nlp.formatters import INTRO_MESSAGE
from assistant.knowledge import source_config
from assistant.knowledge.loader import KnowledgeError, get_knowledge_record


logging.basicConfig(level=source_config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Portfolio Assistant", version=__version__)
# Request/response debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"

SUGGESTIONS = [
    {"label": "What roles are you looking for?", "value": "What roles are you looking for?"},
    {"label": "Show case studies", "value": "Show case studies"},
    {"label": "Skills summary", "value": "Skills summary"},
    {"label": "Certifications", "value": "What certifications are publicly verifiable?"},
    {"label": "Contact", "value": "How do I contact you?"},
]


# ============================================================
# Response Schemas
# ============================================================

class ActionModel(BaseModel):
    label: str
    url: str


class ChatResponse(BaseModel):
    """Structured answer rendered by the widget."""

    answer: str
    source: str
    actions: list[ActionModel] | None = None


# ============================================================
# Health / Suggestions
# ============================================================

@app.get("/health")
def health():
    """Return liveness status with a UTC timestamp."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


@app.get("/v1/suggestions")
def suggestions():
    """Return the intro message and seeded suggestion chips."""
    return {"intro": INTRO_MESSAGE, "suggestions": SUGGESTIONS}


# ============================================================
# Chat
# ============================================================

@app.post("/v1/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(request: Request):
    """
    Resolve one visitor message.

    Error handling strategy:
    - Explicit validation failures return structured 400 JSON errors.
    - Record load failures return 503 and are logged with traceback.
    - The engine itself does not raise for any string input.
    """
    try:
        body = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError both derive from ValueError.
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    message = body.get("message") if isinstance(body, dict) else None

    if not isinstance(message, str):
        return JSONResponse(status_code=400, content={"error": "Invalid message"})

    if DEBUG:
        logger.debug("Incoming message: %r", message)

    try:
        record = get_knowledge_record()
    except KnowledgeError:
        logger.exception("Knowledge record unavailable")
        return JSONResponse(status_code=503, content={"error": "Knowledge base unavailable"})

    result = resolve(message, record)

    if DEBUG:
        logger.debug("Resolved source=%s route=%s", result.source, result.route)

    return result.to_dict(max_actions=source_config.MAX_ACTIONS)
