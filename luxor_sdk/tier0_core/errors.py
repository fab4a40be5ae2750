"""
luxor_sdk.tier0_core.errors
────────────────────────────
Error taxonomy for controller calls. Every way a call can fail maps to one
LuxorError subclass carrying enough context (method, raw body, status) to
diagnose the failure without re-running the call.

Raising a LuxorError reports it if an error backend is configured.
Select via:    LUXOR_ERROR_BACKEND=sentry|none
"""
from __future__ import annotations

import os
from typing import Any

from luxor_sdk.tier0_core.config import _reset_config, get_config


def _text(body: bytes | str | None) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


# ── Base error ────────────────────────────────────────────────────────────────

class LuxorError(Exception):
    """
    Base class for all client errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - detail: the full diagnostic message
    - method: the controller method (endpoint) involved, if any
    """

    code: str = "luxor_error"
    reportable: bool = True

    def __init__(
        self,
        detail: str,
        *,
        method: str | None = None,
        **metadata: Any,
    ) -> None:
        self.detail = detail
        self.method = method
        self.metadata = metadata
        super().__init__(detail)
        _capture(self)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"code": self.code, "message": str(self)}
        if self.method:
            d["method"] = self.method
        return {"error": d}


# ── Cancellation ──────────────────────────────────────────────────────────────

class Canceled(LuxorError):
    """The call was canceled before or while it ran. Nothing was observed."""
    code = "canceled"
    reportable = False

    def __init__(self, detail: str = "request canceled", **kwargs: Any) -> None:
        super().__init__(detail, **kwargs)


class DeadlineExceeded(Canceled):
    """The token's deadline passed. Treated exactly like cancellation."""
    code = "deadline_exceeded"

    def __init__(self, detail: str = "deadline exceeded", **kwargs: Any) -> None:
        super().__init__(detail, **kwargs)


# ── Request side ──────────────────────────────────────────────────────────────

class RequestEncodingError(LuxorError):
    """The request could not be serialized. Never reaches the network."""
    code = "request_encoding_error"

    def __init__(self, cause: Exception, *, method: str | None = None) -> None:
        self.cause = cause
        super().__init__(f"{method}: cannot encode request: {cause}", method=method)


class InvalidRequestError(LuxorError):
    """Request text supplied by a user did not match the method's request shape."""
    code = "invalid_request"


class UnknownMethodError(LuxorError):
    """No such method in the catalogue."""
    code = "unknown_method"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no such method {name!r}")


# ── Transport side ────────────────────────────────────────────────────────────

class TransportError(LuxorError):
    """Connection, DNS, URL or stream failure. Carries the native cause."""
    code = "transport_error"

    def __init__(self, cause: BaseException, *, url: str, method: str | None = None) -> None:
        self.cause = cause
        self.url = url
        super().__init__(f"{method}: request to {url} failed: {cause}", method=method)


class UnexpectedHTTPStatus(LuxorError):
    code = "unexpected_http_status"

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: bytes,
        *,
        method: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"{method}: unexpected HTTP status {status_code} {reason} "
            f"with body {_text(body)!r}",
            method=method,
        )


class UnexpectedContentType(LuxorError):
    code = "unexpected_content_type"

    def __init__(
        self,
        content_type: str | None,
        body: bytes,
        *,
        method: str | None = None,
    ) -> None:
        self.content_type = content_type
        self.body = body
        super().__init__(
            f"{method}: unexpected response content type {content_type!r} "
            f"with body {_text(body)!r}",
            method=method,
        )


class MalformedResponse(LuxorError):
    """Body is not JSON, or does not fit the method's response shape."""
    code = "malformed_response"

    def __init__(self, cause: Exception, body: bytes, *, method: str | None = None) -> None:
        self.cause = cause
        self.body = body
        super().__init__(
            f"{method}: JSON error {cause} while parsing body {_text(body)!r}",
            method=method,
        )


# ── Application side ──────────────────────────────────────────────────────────

class ApplicationStatusError(LuxorError):
    """
    The exchange succeeded but the device reported a non-zero Status.
    ``response`` holds the decoded (possibly defaulted) response, if any.
    """
    code = "application_status"

    def __init__(
        self,
        status: int,
        description: str,
        *,
        method: str | None = None,
        response: Any = None,
    ) -> None:
        self.status = status
        self.description = description
        self.response = response
        super().__init__(description, method=method, status=status)


class UnknownStatusError(ApplicationStatusError):
    """A status the table does not know. The raw value is preserved."""
    code = "unknown_status"

    def __init__(self, status: int, **kwargs: Any) -> None:
        super().__init__(status, f"unknown status {status}", **kwargs)


# ── Error capture backend ─────────────────────────────────────────────────────

def _capture(error: LuxorError) -> None:
    """Send error to configured backend. Called automatically by LuxorError.__init__."""
    if not error.reportable:
        return
    if get_config().error_backend.lower() == "sentry":
        _capture_sentry(error)


def _capture_sentry(error: LuxorError) -> None:
    try:
        import sentry_sdk
    except ImportError:
        return
    sentry_sdk.capture_message(
        str(error),
        level="warning",
        extras={"code": error.code, "method": error.method, **error.metadata},
    )


def configure_sentry(dsn: str, **kwargs: Any) -> None:
    """Initialize Sentry. Call once at application startup."""
    import sentry_sdk
    sentry_sdk.init(dsn=dsn, **kwargs)
    os.environ["LUXOR_ERROR_BACKEND"] = "sentry"
    _reset_config()


__all__ = [
    "LuxorError", "Canceled", "DeadlineExceeded", "RequestEncodingError",
    "InvalidRequestError", "UnknownMethodError", "TransportError",
    "UnexpectedHTTPStatus", "UnexpectedContentType", "MalformedResponse",
    "ApplicationStatusError", "UnknownStatusError", "configure_sentry",
]
