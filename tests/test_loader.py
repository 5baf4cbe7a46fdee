"""Tests for knowledge-record loading and contract validation."""

import json

import pytest

from assistant.knowledge.loader import (
    KnowledgeLoadError,
    KnowledgeValidationError,
    load_embedded_knowledge,
    load_knowledge,
    load_knowledge_file,
    validate_record,
)
from assistant.knowledge.record import KnowledgeRecord


MINIMAL = {"faq": [], "safety": {"refusals": {"unknown": "Not in my notes."}}}


def page_with(payload: str, element_id: str = "mm-chatbot-kb") -> str:
    return (
        "<!doctype html><html><head><title>Portfolio</title></head><body>"
        f'<script id="{element_id}" type="application/json">{payload}</script>'
        "<main><p>Hello</p></main></body></html>"
    )


# ============================================================================
# validate_record
# ============================================================================


class TestValidateRecord:
    def test_bundled_record_is_valid(self, record_data):
        record = validate_record(record_data)
        assert isinstance(record, KnowledgeRecord)
        assert record.raw is record_data

    def test_minimal_record(self):
        assert validate_record(MINIMAL).faq == []

    def test_not_an_object(self):
        with pytest.raises(KnowledgeValidationError):
            validate_record([])

    def test_missing_unknown_refusal(self):
        with pytest.raises(KnowledgeValidationError):
            validate_record({"faq": [], "safety": {"refusals": {"nda": "x"}}})

    def test_blank_unknown_refusal(self):
        with pytest.raises(KnowledgeValidationError):
            validate_record({"faq": [], "safety": {"refusals": {"unknown": "   "}}})

    def test_faq_item_missing_answer(self):
        with pytest.raises(KnowledgeValidationError):
            validate_record({**MINIMAL, "faq": [{"id": "a", "q": "question"}]})

    def test_duplicate_faq_ids(self):
        faq = [{"id": "a", "q": "one", "a": "1"}, {"id": "a", "q": "two", "a": "2"}]
        with pytest.raises(KnowledgeValidationError, match="duplicate faq id"):
            validate_record({**MINIMAL, "faq": faq})

    def test_extra_fields_pass_through(self):
        record = validate_record({**MINIMAL, "highlights": ["Shipped it."], "custom": {"x": 1}})
        assert record.highlights == ["Shipped it."]
        assert record.raw["custom"] == {"x": 1}


# ============================================================================
# Embedded payload
# ============================================================================


class TestEmbeddedKnowledge:
    def test_extracts_script_json(self):
        assert load_embedded_knowledge(page_with(json.dumps(MINIMAL))) == MINIMAL

    def test_missing_element(self):
        assert load_embedded_knowledge(page_with(json.dumps(MINIMAL), element_id="other")) is None

    def test_blank_payload(self):
        assert load_embedded_knowledge(page_with("   ")) is None

    def test_invalid_json(self):
        assert load_embedded_knowledge(page_with("{not json")) is None

    def test_empty_markup(self):
        assert load_embedded_knowledge("") is None

    def test_nested_markup_in_other_elements_is_ignored(self):
        page = (
            "<div id=\"intro\"><p>{\"faq\": []}</p></div>"
            f'<script id="mm-chatbot-kb" type="application/json">{json.dumps(MINIMAL)}</script>'
        )
        assert load_embedded_knowledge(page) == MINIMAL


# ============================================================================
# File payload and load order
# ============================================================================


class TestLoadKnowledge:
    def test_load_bundled_file(self, knowledge_path):
        record = load_knowledge(path=str(knowledge_path))
        assert len(record.faq) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(KnowledgeLoadError, match="not found"):
            load_knowledge_file(str(tmp_path / "missing.json"))

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(KnowledgeLoadError, match="invalid JSON"):
            load_knowledge(path=str(path))

    def test_embedded_payload_takes_precedence(self, tmp_path, knowledge_path):
        page = tmp_path / "index.html"
        page.write_text(page_with(json.dumps(MINIMAL)), encoding="utf-8")
        record = load_knowledge(path=str(knowledge_path), html_path=str(page))
        assert record.faq == []

    def test_page_without_payload_falls_back_to_file(self, tmp_path, knowledge_path):
        page = tmp_path / "index.html"
        page.write_text("<html><body></body></html>", encoding="utf-8")
        record = load_knowledge(path=str(knowledge_path), html_path=str(page))
        assert len(record.faq) == 4

    def test_unreadable_page_falls_back_to_file(self, tmp_path, knowledge_path):
        record = load_knowledge(path=str(knowledge_path), html_path=str(tmp_path / "missing.html"))
        assert len(record.faq) == 4

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"faq": [], "note": "\xff"}')
        with pytest.raises(KnowledgeLoadError, match="not UTF-8"):
            load_knowledge(path=str(path))

    def test_non_utf8_page_falls_back_to_file(self, tmp_path, knowledge_path):
        page = tmp_path / "index.html"
        page.write_bytes(b"<html><body>\xff\xfe</body></html>")
        record = load_knowledge(path=str(knowledge_path), html_path=str(page))
        assert len(record.faq) == 4

    def test_invalid_embedded_record_is_rejected(self, tmp_path, knowledge_path):
        page = tmp_path / "index.html"
        page.write_text(page_with(json.dumps({"faq": []})), encoding="utf-8")
        with pytest.raises(KnowledgeValidationError):
            load_knowledge(path=str(knowledge_path), html_path=str(page))
