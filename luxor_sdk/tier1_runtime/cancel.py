"""
luxor_sdk.tier1_runtime.cancel
───────────────────────────────
Cancellation tokens: an explicit cancel signal plus an optional absolute
deadline. A deadline is cancellation that fires by itself at a point in
time, so both end up as a Canceled error.

"No deadline" is ``deadline=None``; any datetime, however far in the future,
is a real deadline.

Usage::

    token = CancellationToken.with_timeout(5)
    resp = await controller.theme_get(ThemeGetRequest(theme_index=0), token)

    token = CancellationToken()
    task = asyncio.create_task(controller.group_list_get(token=token))
    token.cancel()
"""
from __future__ import annotations

import asyncio
from datetime import datetime

from luxor_sdk.tier0_core.errors import Canceled, DeadlineExceeded
from luxor_sdk.tier1_runtime.clock import Clock, get_clock


class CancellationToken:
    """
    Caller-held handle conveying cancellation and/or a deadline.

    Once canceled (explicitly, or because the deadline passed) a token
    stays canceled. Tokens are not thread-safe: cancel() from the thread
    running the event loop.
    """

    def __init__(
        self,
        deadline: datetime | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._deadline = deadline
        self._clock = clock or get_clock()
        self._event = asyncio.Event()
        self._expired = False

    @classmethod
    def with_timeout(cls, seconds: float | None, *, clock: Clock | None = None) -> "CancellationToken":
        """Token whose deadline is *seconds* from now; None gives no deadline."""
        clock = clock or get_clock()
        if seconds is None:
            return cls(clock=clock)
        return cls(clock.deadline_after(seconds), clock=clock)

    @property
    def deadline(self) -> datetime | None:
        return self._deadline

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None if there is no deadline."""
        if self._deadline is None:
            return None
        left = self._clock.remaining(self._deadline)
        if left <= 0:
            self._expired = True
        return left

    @property
    def canceled(self) -> bool:
        if self._event.is_set() or self._expired:
            return True
        left = self.remaining()
        return left is not None and left <= 0

    def error(self, method: str | None = None) -> Canceled:
        """The error a call abandoned because of this token should raise."""
        if self._event.is_set():
            return Canceled(method=method)
        return DeadlineExceeded(method=method)

    async def wait(self) -> None:
        """Return once the token is canceled or its deadline passes."""
        left = self.remaining()
        if self._event.is_set() or (left is not None and left <= 0):
            return
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({waiter}, timeout=left)
        finally:
            waiter.cancel()
        if not self._event.is_set():
            self._expired = True

    def __repr__(self) -> str:
        state = "canceled" if self.canceled else "active"
        return f"CancellationToken({state}, deadline={self._deadline!r})"


__all__ = ["CancellationToken"]
