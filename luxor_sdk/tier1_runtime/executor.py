"""
luxor_sdk.tier1_runtime.executor
─────────────────────────────────
Executes one JSON-over-HTTP exchange with the controller: serialize, POST,
race the exchange against the caller's CancellationToken, validate the
transport-level result, and decode the body.

The executor never looks at the response's Status field; that is the
Controller's job (see tier2_protocol.controller).

Cancellation does not rely on httpx timeouts. The exchange runs as its own
task; if the token fires first the call raises Canceled at once and the
exchange task is cancelled and detached. Its late result, if any, is
dropped.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from luxor_sdk.tier0_core.errors import (
    MalformedResponse,
    RequestEncodingError,
    TransportError,
    UnexpectedContentType,
    UnexpectedHTTPStatus,
)
from luxor_sdk.tier0_core.logging import get_logger, request_scope
from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier1_runtime.serialize import decode_response, encode_request

T = TypeVar("T", bound=BaseModel)

JSON_CONTENT_TYPE = "application/json"

_HEADERS = {"Content-Type": JSON_CONTENT_TYPE}

log = get_logger(__name__)

# Abandoned exchanges, referenced until they finish unwinding.
_abandoned: set[asyncio.Future] = set()


@dataclass(frozen=True)
class ExchangeResult:
    """Outcome of one HTTP exchange: a response, or the transport error."""
    url: str
    status_code: int = 0
    reason: str = ""
    content_type: str | None = None
    body: bytes = b""
    error: Exception | None = None


class RequestExecutor:
    """
    Turns one logical call into exactly one HTTP exchange.

    Pass ``client`` to share an httpx connection pool across calls; the
    caller then owns its lifetime. Without it each exchange opens and
    closes its own client.
    """

    def __init__(self, base_url: str, *, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint}.json"

    async def execute(
        self,
        endpoint: str,
        request: BaseModel | dict,
        response_model: Type[T],
        token: CancellationToken | None = None,
    ) -> T:
        token = token or CancellationToken()

        if token.canceled:
            log.debug("luxor.request.canceled", method=endpoint, stage="before_dispatch")
            raise token.error(endpoint)

        # None: no deadline, so no transport timeout either.
        timeout = token.remaining()
        if timeout is not None and timeout <= 0:
            raise token.error(endpoint)

        try:
            payload = encode_request(request)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise RequestEncodingError(exc, method=endpoint) from exc

        url = self.url_for(endpoint)
        with request_scope(method=endpoint, url=url):
            log.debug("luxor.request.sent", bytes=len(payload), timeout=timeout)
            result = await self._race(self._exchange(url, payload, timeout), token, endpoint)
            body = self._validate(endpoint, result)
            try:
                response = decode_response(body, response_model)
            except PydanticValidationError as exc:
                log.warning("luxor.request.failed", reason="malformed_response", body=body)
                raise MalformedResponse(exc, body, method=endpoint) from exc
            log.debug("luxor.request.completed", status=getattr(response, "status", None))
            return response

    async def _race(self, exchange_coro, token: CancellationToken, endpoint: str) -> ExchangeResult:
        exchange = asyncio.ensure_future(exchange_coro)
        canceled = asyncio.ensure_future(token.wait())
        delivered = False
        try:
            done, _ = await asyncio.wait(
                {exchange, canceled}, return_when=asyncio.FIRST_COMPLETED
            )
            # A token that fired wins even if the exchange finished in the same tick.
            if canceled not in done:
                delivered = True
                return exchange.result()
        finally:
            canceled.cancel()
            if not delivered:
                _abandon(exchange)
        log.info("luxor.request.canceled", stage="in_flight")
        raise token.error(endpoint)

    async def _exchange(self, url: str, payload: bytes, timeout: float | None) -> ExchangeResult:
        try:
            if self._client is not None:
                response = await self._client.post(
                    url, content=payload, headers=_HEADERS, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(url, content=payload, headers=_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return ExchangeResult(url=url, error=exc)
        return ExchangeResult(
            url=url,
            status_code=response.status_code,
            reason=response.reason_phrase,
            content_type=response.headers.get("content-type"),
            body=response.content,
        )

    def _validate(self, endpoint: str, result: ExchangeResult) -> bytes:
        """Transport-level checks, in order; the first failure wins."""
        if result.error is not None:
            log.warning("luxor.request.failed", reason="transport_error", error=str(result.error))
            raise TransportError(result.error, url=result.url, method=endpoint) from result.error
        if result.status_code != httpx.codes.OK:
            log.warning(
                "luxor.request.failed",
                reason="unexpected_http_status",
                status_code=result.status_code,
                body=result.body,
            )
            raise UnexpectedHTTPStatus(
                result.status_code, result.reason, result.body, method=endpoint
            )
        if result.content_type != JSON_CONTENT_TYPE:
            log.warning(
                "luxor.request.failed",
                reason="unexpected_content_type",
                content_type=result.content_type,
                body=result.body,
            )
            raise UnexpectedContentType(result.content_type, result.body, method=endpoint)
        return result.body


def _abandon(task: asyncio.Future) -> None:
    task.cancel()
    _abandoned.add(task)
    task.add_done_callback(_reap)


def _reap(task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    log.debug("luxor.exchange.abandoned", error=repr(exc) if exc else None)


__all__ = ["RequestExecutor", "ExchangeResult", "JSON_CONTENT_TYPE"]
