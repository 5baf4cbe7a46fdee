"""Tests for the HTTP and CLI adapters."""

import importlib
import logging

import pytest
from fastapi.testclient import TestClient

from assistant.api import cli, http_api
from assistant.core.engine import resolve
from assistant.core.routing_types import SOURCE_SAFETY
from assistant.knowledge import source_config
from assistant.knowledge.loader import KnowledgeLoadError
from assistant.nlp.formatters import GREETING_REPLY


@pytest.fixture
def client(monkeypatch, record):
    monkeypatch.setattr(http_api, "get_knowledge_record", lambda: record)
    monkeypatch.setattr(source_config, "MAX_ACTIONS", 3)
    return TestClient(http_api.app)


# ============================================================================
# HTTP adapter
# ============================================================================


class TestHttpApi:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_suggestions_resolve_to_grounded_answers(self, client, record):
        data = client.get("/v1/suggestions").json()
        assert data["intro"]
        assert len(data["suggestions"]) == 5
        for suggestion in data["suggestions"]:
            assert resolve(suggestion["value"], record).source != SOURCE_SAFETY

    def test_chat_greeting(self, client):
        response = client.post("/v1/chat", json={"message": "hello"})
        assert response.status_code == 200
        assert response.json() == {"answer": GREETING_REPLY, "source": "Greeting"}

    def test_chat_truncates_actions(self, client):
        response = client.post("/v1/chat", json={"message": "What certifications are publicly verifiable?"})
        data = response.json()
        assert data["source"] == "Certifications"
        assert len(data["actions"]) == 3
        assert data["actions"][0] == {
            "label": "AWS Certified Cloud Practitioner",
            "url": "https://www.credly.com/badges/example-aws",
        }

    def test_chat_empty_message_gets_unknown_refusal(self, client, record):
        data = client.post("/v1/chat", json={"message": ""}).json()
        assert data["answer"] == record.refusal("unknown")

    @pytest.mark.parametrize("body", [{}, {"message": 5}, {"message": None}, ["hello"]])
    def test_chat_invalid_message(self, client, body):
        response = client.post("/v1/chat", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid message"}

    def test_chat_invalid_json(self, client):
        response = client.post("/v1/chat", content="not json", headers={"content-type": "application/json"})
        assert response.status_code == 400

    def test_chat_body_not_utf8(self, client):
        response = client.post(
            "/v1/chat",
            content=b'{"message": "\xff\xfe"}',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    def test_import_configures_log_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        monkeypatch.setattr(source_config, "LOG_LEVEL", "WARNING")
        importlib.reload(http_api)
        assert calls and calls[0]["level"] == "WARNING"

    def test_chat_record_unavailable(self, monkeypatch):
        def fail():
            raise KnowledgeLoadError("knowledge file not found")

        monkeypatch.setattr(http_api, "get_knowledge_record", fail)
        response = TestClient(http_api.app).post("/v1/chat", json={"message": "hello"})
        assert response.status_code == 503


# ============================================================================
# CLI adapter
# ============================================================================


class TestCli:
    def test_one_shot_question(self, knowledge_path, capsys):
        assert cli.main(["--knowledge", str(knowledge_path), "hello"]) == 0
        out = capsys.readouterr().out
        assert GREETING_REPLY in out
        assert "[Greeting]" in out

    def test_missing_knowledge_file(self, tmp_path, capsys):
        assert cli.main(["--knowledge", str(tmp_path / "missing.json"), "hello"]) == 1
        assert "Knowledge initialization error" in capsys.readouterr().out

    def test_non_utf8_knowledge_file(self, tmp_path, capsys):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe")
        assert cli.main(["--knowledge", str(path), "hello"]) == 1
        assert "Knowledge initialization error" in capsys.readouterr().out

    def test_interactive_loop(self, knowledge_path, monkeypatch, capsys):
        answers = iter(["", "Skills summary", "exit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        assert cli.main(["--knowledge", str(knowledge_path)]) == 0
        out = capsys.readouterr().out
        assert "Skills summary:" in out
        assert "[Skills]" in out

    def test_interactive_eof(self, knowledge_path, monkeypatch):
        def eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)
        assert cli.main(["--knowledge", str(knowledge_path)]) == 0

    def test_render_truncates_actions(self, record):
        result = resolve("What certifications are publicly verifiable?", record)
        rendered = cli.render(result, max_actions=3)
        assert rendered.count("  -> ") == 3
        assert "[Certifications]" in rendered
