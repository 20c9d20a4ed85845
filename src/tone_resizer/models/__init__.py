"""Data models for the rewrite protocol."""

from tone_resizer.models.persona import Persona
from tone_resizer.models.rewrite import (
    DocumentType,
    FailureReason,
    RewriteFailure,
    RewriteRequest,
    RewriteResult,
)

__all__ = [
    "DocumentType",
    "FailureReason",
    "Persona",
    "RewriteFailure",
    "RewriteRequest",
    "RewriteResult",
]
