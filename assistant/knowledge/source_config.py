"""Runtime configuration for knowledge-record supply and adapters.

Architectural role:
    Centralizes where the knowledge record is read from and how adapters render
    results, for `assistant.knowledge.loader` and `assistant.api`.

Determinism:
    Deterministic for a fixed process environment. Values are resolved at import
    time after `load_dotenv()`.

Failure behavior:
    Unset variables fall back to defaults; a malformed `MAX_ACTIONS` falls back to 3.
"""

import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Record JSON used when no embedded page payload is available.
KNOWLEDGE_PATH = os.getenv(
    "KNOWLEDGE_PATH",
    os.path.join(BASE_DIR, "knowledge", "chatbot_knowledge.json"),
)

# Optional page markup carrying the record in a `<script id=EMBEDDED_KB_ID>` element.
KNOWLEDGE_HTML_PATH = os.getenv("KNOWLEDGE_HTML_PATH") or None
EMBEDDED_KB_ID = os.getenv("EMBEDDED_KB_ID", "mm-chatbot-kb")


def _int_env(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# Quick links rendered per answer.
MAX_ACTIONS = _int_env("MAX_ACTIONS", 3)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
