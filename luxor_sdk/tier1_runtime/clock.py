"""
luxor_sdk.tier1_runtime.clock
──────────────────────────────
Mockable time source for deadlines. Tokens and the executor ask the clock
for "now" instead of calling datetime.now() directly, so tests can put a
deadline in the past without sleeping.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable


class Clock:
    """Mockable clock. Pass now_fn to control time in tests."""

    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        self._now_fn = now_fn or (lambda: datetime.now(tz=timezone.utc))

    def now(self) -> datetime:
        """Return the current UTC datetime."""
        return self._now_fn()

    def deadline_after(self, seconds: float) -> datetime:
        """Return the absolute deadline *seconds* from now."""
        return self.now() + timedelta(seconds=seconds)

    def remaining(self, deadline: datetime) -> float:
        """Seconds left until *deadline*; zero or negative once it has passed."""
        return (deadline - self.now()).total_seconds()

    def freeze(self, dt: datetime) -> "Clock":
        """Return a new Clock frozen at the given datetime."""
        return Clock(now_fn=lambda: dt)


# ── Module-level singleton ─────────────────────────────────────────────────

_clock = Clock()


def get_clock() -> Clock:
    """Return the global clock instance."""
    return _clock


def set_clock(clock: Clock) -> None:
    """Replace the global clock (use in tests)."""
    global _clock
    _clock = clock


__all__ = ["Clock", "get_clock", "set_clock"]
