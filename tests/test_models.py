"""Tests for Pydantic data models."""

import pytest

from tone_resizer.models import (
    DocumentType,
    FailureReason,
    Persona,
    RewriteFailure,
    RewriteRequest,
    RewriteResult,
)


class TestPersona:
    def test_tone_descriptor(self):
        persona = Persona(
            style="direct",
            formality="high",
            context="legal",
            traits=["precision", "brevity"],
        )
        assert persona.tone_descriptor("professional") == (
            "professional with direct style, high formality, in a legal context, "
            "emphasizing precision, brevity"
        )

    def test_tone_descriptor_without_traits(self):
        persona = Persona(traits=[])
        assert persona.tone_descriptor("friendly") == (
            "friendly with clear style, moderate formality, in a business context"
        )

    def test_defaults(self):
        assert Persona().traits == ["clarity"]


class TestRewriteRequest:
    def test_defaults(self):
        request = RewriteRequest(content="hello", target_words=10)
        assert request.document_type is DocumentType.EMAIL
        assert request.tone == "professional"
        assert request.is_email

    def test_non_email(self):
        request = RewriteRequest(content="hello", target_words=10, document_type="text")
        assert request.document_type is DocumentType.TEXT
        assert not request.is_email

    def test_zero_target_is_allowed_at_construction(self):
        # The enhancer turns this into an invalid-target failure
        assert RewriteRequest(content="x", target_words=0).target_words == 0

    def test_rejects_unknown_document_type(self):
        with pytest.raises(Exception):
            RewriteRequest(content="x", target_words=5, document_type="spreadsheet")


class TestRewriteOutcomes:
    def test_result_subject_optional(self):
        result = RewriteResult(body="Short body", word_count=2)
        assert result.subject is None

    def test_failure_reason_values(self):
        assert FailureReason.TOO_LONG_OUTPUT.value == "too-long-output"
        assert FailureReason("input-too-long") is FailureReason.INPUT_TOO_LONG

    @pytest.mark.parametrize(
        "reason,retryable",
        [
            (FailureReason.TOO_LONG_OUTPUT, True),
            (FailureReason.RATE_LIMITED, True),
            (FailureReason.INVALID_TARGET, False),
            (FailureReason.UPSTREAM_AUTH, False),
            (FailureReason.UNAVAILABLE, False),
        ],
    )
    def test_retryable(self, reason, retryable):
        assert RewriteFailure(reason=reason, message="m").retryable is retryable

    def test_failure_carries_draft(self):
        failure = RewriteFailure(
            reason=FailureReason.TOO_LONG_OUTPUT, message="too long", draft="a b c", word_count=3
        )
        assert failure.model_dump()["draft"] == "a b c"
