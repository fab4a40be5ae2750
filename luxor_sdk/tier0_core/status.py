"""
luxor_sdk.tier0_core.status
────────────────────────────
Application-level status codes reported by the controller in the ``Status``
field of every response body, and their translation into errors.

A status is data, not a transport fault: the exchange itself succeeded.
"""
from __future__ import annotations

from typing import Any

from luxor_sdk.tier0_core.errors import ApplicationStatusError, UnknownStatusError


# ── Status code constants ──────────────────────────────────────────────────

class Status:
    """Status codes documented for the controller."""

    OK = 0
    UNKNOWN_METHOD = 1

    # 1xx: request could not be understood
    UNPARSEABLE_REQUEST = 101
    INVALID_REQUEST = 102

    # 2xx: request understood but refused
    PRECONDITION_FAILED = 201
    GROUP_NAME_IN_USE = 202
    GROUP_NUMBER_IN_USE = 205
    THEME_INDEX_OUT_OF_RANGE = 243


STATUS_NAMES: dict[int, str] = {
    Status.OK: "ok",
    Status.UNKNOWN_METHOD: "unknown method",
    Status.UNPARSEABLE_REQUEST: "unparseable request",
    Status.INVALID_REQUEST: "invalid request",
    Status.PRECONDITION_FAILED: "precondition failed",
    Status.GROUP_NAME_IN_USE: "group name in use",
    Status.GROUP_NUMBER_IN_USE: "group number in use",
    Status.THEME_INDEX_OUT_OF_RANGE: "theme index out of range",
}


def is_known(status: int) -> bool:
    return status in STATUS_NAMES


def describe(status: int) -> str | None:
    """Return the table entry for *status*, or None if it is not documented."""
    return STATUS_NAMES.get(status)


def error_for_status(
    status: int,
    *,
    method: str | None = None,
    response: Any = None,
) -> ApplicationStatusError | None:
    """
    Return the error for *status*, or None when status == 0.

    Known codes give an ApplicationStatusError whose message is the table
    entry; anything else gives an UnknownStatusError carrying the raw value.
    """
    if status == Status.OK:
        return None
    description = describe(status)
    if description is None:
        return UnknownStatusError(status, method=method, response=response)
    return ApplicationStatusError(status, description, method=method, response=response)


__all__ = ["Status", "STATUS_NAMES", "is_known", "describe", "error_for_status"]
