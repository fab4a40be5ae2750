"""
luxor_sdk test configuration.

No test talks to a real controller: HTTP is served by httpx.MockTransport
handlers. Override by setting environment variables before running pytest.
"""
from __future__ import annotations

import os
from typing import Any, Callable

import httpx
import pytest

# ── Pin configuration ──────────────────────────────────────────────────────
# These must be set before any luxor_sdk modules are imported.

os.environ.setdefault("LUXOR_BASE_URL", "http://luxor.test")
os.environ.setdefault("LUXOR_LOG_LEVEL", "WARNING")
os.environ.setdefault("LUXOR_LOG_FORMAT", "console")
os.environ.setdefault("LUXOR_ERROR_BACKEND", "none")


# ── Helpers ────────────────────────────────────────────────────────────────

def json_response(body: str, status_code: int = 200) -> httpx.Response:
    """A response labelled exactly application/json, like the controller's."""
    return httpx.Response(
        status_code,
        headers={"Content-Type": "application/json"},
        content=body.encode(),
    )


class Recorder:
    """MockTransport handler wrapper that records every request it serves."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handler(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """Fresh config and a real clock for every test."""
    from luxor_sdk.tier0_core.config import _reset_config
    from luxor_sdk.tier1_runtime import clock as _clock

    orig_clock = _clock.get_clock()
    _reset_config()

    yield

    _clock.set_clock(orig_clock)
    _reset_config()


@pytest.fixture
def recorder():
    """Build a Recorder around a handler: ``rec = recorder(lambda r: ...)``."""
    return Recorder
