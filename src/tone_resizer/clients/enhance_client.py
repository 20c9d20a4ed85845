"""HTTP client for the enhance API: health check, then rewrite."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from tone_resizer.config import ClientConfig
from tone_resizer.models.rewrite import (
    FailureReason,
    RewriteFailure,
    RewriteRequest,
    RewriteResult,
)

logger = logging.getLogger(__name__)

STATUS_REASONS: dict[int, FailureReason] = {
    401: FailureReason.UPSTREAM_AUTH,
    429: FailureReason.RATE_LIMITED,
    503: FailureReason.UNAVAILABLE,
}


def _should_retry(outcome: RewriteResult | RewriteFailure) -> bool:
    return isinstance(outcome, RewriteFailure) and outcome.retryable


class EnhanceClient:
    """Talk to a running enhance server.

    Each :meth:`enhance` call checks ``/api/health`` first; when that fails
    the rewrite request is skipped and an ``unavailable`` failure returned
    straight away.
    """

    def __init__(
        self,
        base_url: str,
        *,
        health_timeout: float = 5.0,
        enhance_timeout: float = 60.0,
        max_attempts: int = 3,
        retry_wait: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.health_timeout = health_timeout
        self.enhance_timeout = enhance_timeout
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait
        self._transport = transport

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> EnhanceClient:
        return cls(
            config.resolved_backend_url,
            health_timeout=config.health_timeout,
            enhance_timeout=config.enhance_timeout,
            max_attempts=config.max_attempts,
            **kwargs,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport)

    async def health(self) -> dict | None:
        """Return the health payload, or ``None`` if the server is unreachable."""
        try:
            async with self._client() as client:
                response = await client.get("/api/health", timeout=self.health_timeout)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Health check against %s failed", self.base_url, exc_info=True)
            return None

    async def enhance(self, request: RewriteRequest) -> RewriteResult | RewriteFailure:
        if await self.health() is None:
            return RewriteFailure(
                reason=FailureReason.UNAVAILABLE,
                message="Cannot connect to the server. Please try again later.",
            )

        payload = {
            "content": request.content,
            "tone": request.tone,
            "targetWords": request.target_words,
            "inputType": request.document_type.value,
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/enhance", json=payload, timeout=self.enhance_timeout
                )
            data = response.json()
        except httpx.TimeoutException:
            logger.warning("Enhance request timed out after %.0fs", self.enhance_timeout)
            return RewriteFailure(
                reason=FailureReason.UNAVAILABLE, message="The enhancement request timed out."
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Enhance request failed", exc_info=True)
            return RewriteFailure(
                reason=FailureReason.UNKNOWN,
                message=str(exc) or "Failed to connect to the enhancement service. Please try again.",
            )

        if response.is_success:
            return RewriteResult(
                body=data["enhancedContent"],
                subject=data.get("subject"),
                word_count=data["wordCount"],
            )
        return self._parse_failure(response.status_code, data)

    @staticmethod
    def _parse_failure(status_code: int, data: dict) -> RewriteFailure:
        try:
            reason = FailureReason(data.get("reason"))
        except ValueError:
            reason = STATUS_REASONS.get(
                status_code,
                FailureReason.INVALID_INPUT if status_code == 400 else FailureReason.UNKNOWN,
            )
        return RewriteFailure(
            reason=reason,
            message=data.get("error") or "Failed to enhance content",
            draft=data.get("enhancedContent"),
            word_count=data.get("wordCount"),
        )

    async def enhance_with_retry(self, request: RewriteRequest) -> RewriteResult | RewriteFailure:
        """Call :meth:`enhance` until it succeeds or ``max_attempts`` is reached.

        Only retryable failures (over-long output, rate limiting) are retried;
        when attempts run out the last failure, draft included, is returned.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_wait, max=10),
            retry=retry_if_result(_should_retry),
            retry_error_callback=lambda state: state.outcome.result(),
        )
        return await retrying(self.enhance, request)
