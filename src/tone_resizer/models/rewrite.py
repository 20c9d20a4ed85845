"""Pydantic models for rewrite requests and their outcomes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DocumentType(str, Enum):
    EMAIL = "email"
    TEXT = "text"
    MESSAGE = "message"
    DOCUMENT = "document"


class FailureReason(str, Enum):
    UNAVAILABLE = "unavailable"
    INVALID_INPUT = "invalid-input"
    INVALID_TARGET = "invalid-target"
    INPUT_TOO_LONG = "input-too-long"
    MODEL_ERROR = "model-error"
    UPSTREAM_AUTH = "upstream-auth"
    RATE_LIMITED = "rate-limited"
    TOO_LONG_OUTPUT = "too-long-output"
    UNKNOWN = "unknown"


RETRYABLE_REASONS = frozenset({FailureReason.TOO_LONG_OUTPUT, FailureReason.RATE_LIMITED})


class RewriteRequest(BaseModel):
    """One rewrite of *content* toward *target_words* in the given tone.

    ``target_words >= 1`` and non-blank content are checked by the enhancer,
    which reports violations as failures instead of raising.
    """

    content: str
    tone: str = "professional"
    target_words: int
    document_type: DocumentType = DocumentType.EMAIL

    @property
    def is_email(self) -> bool:
        return self.document_type is DocumentType.EMAIL


class RewriteResult(BaseModel):
    body: str
    subject: str | None = None  # email responses only
    word_count: int  # body only, subject excluded


class RewriteFailure(BaseModel):
    reason: FailureReason
    message: str
    draft: str | None = None  # rejected over-long output
    word_count: int | None = None  # of the draft

    @property
    def retryable(self) -> bool:
        return self.reason in RETRYABLE_REASONS
