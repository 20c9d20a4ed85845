"""Enhancer - one length-checked rewrite per call."""

from __future__ import annotations

import logging
import re

import anthropic

from tone_resizer.clients.llm_client import LLMClient
from tone_resizer.config import LimitsConfig
from tone_resizer.models.rewrite import (
    FailureReason,
    RewriteFailure,
    RewriteRequest,
    RewriteResult,
)
from tone_resizer.pipeline.prompt_builder import RewritePromptBuilder
from tone_resizer.utils.sanitizer import sanitize
from tone_resizer.utils.word_count import count_words, estimate_tokens, scaled_ceil

logger = logging.getLogger(__name__)

_SUBJECT_RE = re.compile(r"^Subject:(.*?)\n(.*)", re.DOTALL)


def split_subject(text: str) -> tuple[str | None, str]:
    """Split ``"Subject: <line>\\n<body>"`` into ``(subject, body)``.

    Text without a leading subject line comes back as ``(None, text)``.
    """
    match = _SUBJECT_RE.match(text.strip())
    if not match:
        return None, text.strip()
    return match.group(1).strip(), match.group(2).strip()


class Enhancer:
    """Rewrite text toward a target word count and reject over-long output.

    Every call makes at most one model request. Failures come back as
    :class:`RewriteFailure` values; nothing is raised to the caller.
    """

    def __init__(
        self,
        llm: LLMClient,
        limits: LimitsConfig | None = None,
        builder: RewritePromptBuilder | None = None,
    ):
        self.llm = llm
        self.limits = limits or LimitsConfig()
        self.builder = builder or RewritePromptBuilder()

    def output_token_budget(self, target_words: int) -> int:
        """Twice the naive token estimate for *target_words*, capped."""
        naive = scaled_ceil(target_words * 2, self.limits.tokens_per_word)
        return min(self.limits.max_output_tokens, naive)

    def max_allowed_words(self, target_words: int) -> int:
        return scaled_ceil(target_words, self.limits.tolerance)

    def validate(self, request: RewriteRequest) -> RewriteFailure | None:
        """Return the failure for a request that must not reach the model."""
        if not self.llm.is_available():
            return RewriteFailure(
                reason=FailureReason.UNAVAILABLE,
                message="AI enhancement is currently unavailable. Please check the server configuration.",
            )
        if not request.content.strip():
            return RewriteFailure(reason=FailureReason.INVALID_INPUT, message="Content is required")
        if request.target_words < 1:
            return RewriteFailure(
                reason=FailureReason.INVALID_TARGET, message="Invalid target word count"
            )
        if estimate_tokens(request.content, self.limits.tokens_per_word) > self.limits.max_input_tokens:
            return RewriteFailure(
                reason=FailureReason.INPUT_TOO_LONG,
                message=f"Input too long. Maximum {self.limits.max_input_tokens} tokens allowed.",
            )
        return None

    async def enhance(self, request: RewriteRequest) -> RewriteResult | RewriteFailure:
        failure = self.validate(request)
        if failure is not None:
            logger.info("Rejected rewrite request: %s", failure.reason.value)
            return failure

        instruction = self.builder.build(request)
        max_tokens = self.output_token_budget(request.target_words)
        try:
            response = await self.llm.generate(
                prompt=instruction.user,
                system=instruction.system,
                temperature=self.limits.temperature,
                max_tokens=max_tokens,
            )
        except anthropic.AuthenticationError:
            return RewriteFailure(
                reason=FailureReason.UPSTREAM_AUTH,
                message="Invalid API key. Please check your Anthropic API key configuration.",
            )
        except anthropic.RateLimitError:
            return RewriteFailure(
                reason=FailureReason.RATE_LIMITED,
                message="Rate limit exceeded. Please try again in a moment.",
            )
        except anthropic.APIConnectionError:
            return RewriteFailure(
                reason=FailureReason.UNAVAILABLE,
                message="Cannot reach the language model. Please try again later.",
            )
        except Exception as exc:
            logger.exception("Rewrite failed")
            return RewriteFailure(
                reason=FailureReason.UNKNOWN,
                message=str(exc) or "Failed to enhance content. Please try again.",
            )

        raw = (response.text or "").strip()
        if not raw:
            return RewriteFailure(
                reason=FailureReason.MODEL_ERROR, message="No content received from AI"
            )

        # Markup is stripped first so "**Subject:**" still matches.
        cleaned = sanitize(raw)
        subject, body = split_subject(cleaned) if request.is_email else (None, cleaned)
        subject = subject or None
        word_count = count_words(body)

        limit = self.max_allowed_words(request.target_words)
        if word_count > limit:
            logger.info(
                "Rewrite too long: %d words, target %d, limit %d",
                word_count, request.target_words, limit,
            )
            return RewriteFailure(
                reason=FailureReason.TOO_LONG_OUTPUT,
                message=f"Response too long ({word_count} words). Please try again for a shorter version.",
                draft=body,
                word_count=word_count,
            )

        logger.info("Rewrite accepted: %d words (target %d)", word_count, request.target_words)
        return RewriteResult(body=body, subject=subject, word_count=word_count)
