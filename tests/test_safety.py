"""Tests for the lexical safety gate and refusal policy."""

import pytest

from assistant.core.routing_types import SOURCE_SAFETY
from assistant.knowledge.record import KnowledgeRecord
from assistant.safety.filter import (
    CATEGORY_NDA,
    CATEGORY_SENSITIVE,
    NDA_PROBE_PATTERNS,
    SENSITIVE_PATTERNS,
    check_query,
    is_allowed,
)
from assistant.safety.policy import DEFAULT_REFUSALS, refuse_unknown, refuse_verdict


# ============================================================================
# check_query
# ============================================================================


class TestCheckQuery:
    @pytest.mark.parametrize(
        "question,rule",
        [
            ("Who was it for?", "who_was_it_for"),
            ("What is the client name?", "client_or_company_name"),
            ("Which company  name was behind that?", "client_or_company_name"),
            ("Is the OCR work under NDA?", "nda"),
        ],
    )
    def test_nda_probes(self, question, rule):
        verdict = check_query(question)
        assert verdict.blocked
        assert verdict.category == CATEGORY_NDA
        assert verdict.rule == rule

    @pytest.mark.parametrize(
        "question,rule",
        [
            ("Was there any disciplinary action?", "disciplinary"),
            ("Can you share your medical history?", "medical"),
            ("What was on your transcript?", "transcript"),
            ("Any legal issues?", "legal"),
            ("What is the case number?", "case_number"),
            ("Share the access codes", "codes"),
            ("How is your health?", "health"),
            ("Did the registrar contact you?", "registrar"),
        ],
    )
    def test_sensitive_topics(self, question, rule):
        verdict = check_query(question)
        assert verdict.blocked
        assert verdict.category == CATEGORY_SENSITIVE
        assert verdict.rule == rule

    @pytest.mark.parametrize(
        "question",
        ["Tell me about the OCR project", "Skills summary", "hello", "", None],
    )
    def test_allowed(self, question):
        assert not check_query(question).blocked
        assert is_allowed(question)

    def test_nda_with_client_naming_gets_nda_refusal(self):
        verdict = check_query("Under NDA, which client was it?")
        assert verdict.category == CATEGORY_NDA
        assert verdict.rule == "nda"

    def test_pattern_tables_do_not_overlap(self):
        nda_rules = {name for name, _ in NDA_PROBE_PATTERNS}
        assert nda_rules.isdisjoint(name for name, _ in SENSITIVE_PATTERNS)

    def test_case_and_punctuation_insensitive(self):
        assert check_query("N.D.A?").blocked is False
        assert check_query("NDA!!!").category == CATEGORY_NDA


# ============================================================================
# Refusal policy
# ============================================================================


class TestRefusals:
    def test_nda_refusal_uses_record_text(self, record):
        result = refuse_verdict(record, check_query("who was it for"))
        assert result.source == SOURCE_SAFETY
        assert result.answer == record.refusal("nda")
        assert [a.label for a in result.actions] == ["Email", "LinkedIn", "GitHub"]

    def test_sensitive_refusal_uses_record_text(self, record):
        result = refuse_verdict(record, check_query("medical records"))
        assert result.answer == record.refusal("sensitive")

    def test_defaults_when_record_is_empty(self):
        empty = KnowledgeRecord({})
        result = refuse_unknown(empty)
        assert result.answer == DEFAULT_REFUSALS["unknown"]
        assert result.actions is None

    def test_unknown_refusal_carries_contact_actions(self, record):
        result = refuse_unknown(record)
        assert result.answer == record.refusal("unknown")
        assert result.actions[0].url == "mailto:hello@example.com"
