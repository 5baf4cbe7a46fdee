"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from assistant.knowledge import source_config
from assistant.knowledge.record import KnowledgeRecord


KNOWLEDGE_FILE = Path(__file__).resolve().parents[1] / "knowledge" / "chatbot_knowledge.json"


@pytest.fixture(autouse=True)
def no_configured_page(monkeypatch):
    """Keep loaders on the bundled record regardless of the local .env."""
    monkeypatch.setattr(source_config, "KNOWLEDGE_HTML_PATH", None)


@pytest.fixture
def knowledge_path() -> Path:
    return KNOWLEDGE_FILE


@pytest.fixture
def record_data() -> dict:
    """Fresh copy of the bundled knowledge record as a plain dict."""
    with open(KNOWLEDGE_FILE, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def record(record_data) -> KnowledgeRecord:
    return KnowledgeRecord(record_data)
