"""Debounced resize handling, last-request-wins sessions and resize-driven rewrites."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable

from tone_resizer.config import ClientConfig
from tone_resizer.models.rewrite import RewriteFailure, RewriteRequest, RewriteResult
from tone_resizer.utils.sizing import words_for_height

logger = logging.getLogger(__name__)

Outcome = RewriteResult | RewriteFailure


class ResizeDebouncer:
    """Fire ``on_settled(target_words)`` once drag motion has been quiet.

    Every :meth:`push` cancels the pending timer and starts a new one, so a
    continuous drag produces a single call with the last height.
    """

    def __init__(
        self,
        on_settled: Callable[[int], Awaitable[object]],
        quiet_period: float = 0.3,
    ):
        self.on_settled = on_settled
        self.quiet_period = quiet_period
        self._pending: asyncio.Task | None = None
        self.last_height: float | None = None

    @property
    def preview_words(self) -> int | None:
        """Target shown under the drag handle while resizing."""
        if self.last_height is None:
            return None
        return words_for_height(self.last_height)

    def push(self, height: float) -> None:
        """Record a new height; must be called from a running event loop."""
        self.last_height = height
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._fire_later(height))

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Wait for the pending timer (if any) to fire and finish."""
        if self._pending is not None:
            try:
                await self._pending
            except asyncio.CancelledError:
                pass

    async def _fire_later(self, height: float) -> None:
        await asyncio.sleep(self.quiet_period)
        target = words_for_height(height)
        logger.debug("Resize settled at %.0fpx -> %d words", height, target)
        await self.on_settled(target)


class RewriteSession:
    """Issue rewrites for one interactive session and drop stale responses.

    Requests may race; only the outcome of the most recently issued request
    is delivered, older ones resolve to ``None``.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self.latest_sequence = 0
        self.latest_outcome: Outcome | None = None

    async def run(self, call: Callable[[], Awaitable[Outcome]]) -> Outcome | None:
        sequence = next(self._counter)
        self.latest_sequence = sequence
        outcome = await call()
        if sequence != self.latest_sequence:
            logger.debug("Discarding stale response #%d (latest #%d)", sequence, self.latest_sequence)
            return None
        self.latest_outcome = outcome
        return outcome


class ResizeRewriter:
    """Re-run the current rewrite whenever the output box settles at a new height.

    Heights go through a :class:`ResizeDebouncer`; the settled target replaces
    ``target_words`` on the source request and the rewrite runs inside a
    :class:`RewriteSession`, so only the newest result is kept.
    """

    def __init__(
        self,
        rewrite: Callable[[RewriteRequest], Awaitable[Outcome]],
        quiet_period: float = 0.3,
    ):
        self.rewrite = rewrite
        self.session = RewriteSession()
        self.debouncer = ResizeDebouncer(self._on_settled, quiet_period=quiet_period)
        self.source: RewriteRequest | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        rewrite: Callable[[RewriteRequest], Awaitable[Outcome]],
    ) -> ResizeRewriter:
        return cls(rewrite, quiet_period=config.debounce_seconds)

    @property
    def preview_words(self) -> int | None:
        return self.debouncer.preview_words

    def set_source(self, request: RewriteRequest) -> None:
        """Remember the request that resizes should re-run."""
        self.source = request

    def resize(self, height: float) -> None:
        """Record a drag position; must be called from a running event loop."""
        self.debouncer.push(height)

    async def settle(self) -> Outcome | None:
        """Wait for the pending resize to finish and return the latest outcome."""
        await self.debouncer.flush()
        return self.session.latest_outcome

    async def _on_settled(self, target: int) -> Outcome | None:
        if self.source is None:
            logger.debug("Resize to %d words ignored: nothing to rewrite yet", target)
            return None
        request = self.source.model_copy(update={"target_words": target})
        self.source = request
        return await self.session.run(lambda: self.rewrite(request))
