"""
FastAPI application exposing the enhancer.

GET  /api/health   - liveness plus whether rewriting is enabled
POST /api/enhance  - one length-checked rewrite
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from tone_resizer.clients.llm_client import LLMClient
from tone_resizer.config import AppConfig, load_config
from tone_resizer.models.rewrite import (
    DocumentType,
    FailureReason,
    RewriteFailure,
    RewriteRequest,
)
from tone_resizer.pipeline.enhancer import Enhancer

logger = logging.getLogger(__name__)

FAILURE_STATUS: dict[FailureReason, int] = {
    FailureReason.UNAVAILABLE: 503,
    FailureReason.INVALID_INPUT: 400,
    FailureReason.INVALID_TARGET: 400,
    FailureReason.INPUT_TOO_LONG: 400,
    FailureReason.TOO_LONG_OUTPUT: 400,
    FailureReason.UPSTREAM_AUTH: 401,
    FailureReason.RATE_LIMITED: 429,
    FailureReason.MODEL_ERROR: 500,
    FailureReason.UNKNOWN: 500,
}


def _as_target(value: Any) -> int:
    """Whole-number target from the wire; anything else becomes 0 (invalid)."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


class EnhancePayload(BaseModel):
    """Body of ``POST /api/enhance``.

    Fields are accepted as any JSON value so that bad types surface as the
    enhancer's 400 failures instead of FastAPI's 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: Any = None
    tone: Any = "professional"
    target_words: Any = Field(default=None, alias="targetWords")
    input_type: Any = Field(default="email", alias="inputType")

    def to_request(self) -> RewriteRequest:
        try:
            document_type = DocumentType(self.input_type)
        except (ValueError, TypeError):
            document_type = DocumentType.TEXT
        return RewriteRequest(
            content=self.content if isinstance(self.content, str) else "",
            tone=self.tone if isinstance(self.tone, str) and self.tone.strip() else "professional",
            target_words=_as_target(self.target_words),
            document_type=document_type,
        )


def failure_response(failure: RewriteFailure) -> JSONResponse:
    body: dict = {"error": failure.message, "reason": failure.reason.value}
    if failure.draft is not None:
        body["enhancedContent"] = failure.draft
        body["wordCount"] = failure.word_count
    return JSONResponse(status_code=FAILURE_STATUS[failure.reason], content=body)


def create_app(enhancer: Enhancer | None = None, config: AppConfig | None = None) -> FastAPI:
    """Build the app around *enhancer*, constructing one from config if omitted."""
    config = config or load_config()
    if enhancer is None:
        llm = LLMClient(
            timeout=config.llm.timeout,
            base_url=config.llm.base_url,
            model=config.llm.model,
        )
        enhancer = Enhancer(llm, limits=config.limits)

    app = FastAPI(
        title="Tone Resizer",
        description="Rewrite text to a target word count and tone",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.resolved_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.enhancer = enhancer

    @app.get("/api/health")
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "aiEnabled": enhancer.llm.is_available(),
        }

    @app.post("/api/enhance")
    async def enhance(payload: EnhancePayload):
        outcome = await enhancer.enhance(payload.to_request())
        if isinstance(outcome, RewriteFailure):
            return failure_response(outcome)
        return {
            "enhancedContent": outcome.body,
            "subject": outcome.subject,
            "wordCount": outcome.word_count,
        }

    return app
