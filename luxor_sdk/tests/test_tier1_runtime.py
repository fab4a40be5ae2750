"""Tests for tier1_runtime modules."""
from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from conftest import json_response
from luxor_sdk.tier0_core.errors import (
    Canceled,
    DeadlineExceeded,
    MalformedResponse,
    RequestEncodingError,
    TransportError,
    UnexpectedContentType,
    UnexpectedHTTPStatus,
)
from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier1_runtime.clock import Clock, get_clock, set_clock
from luxor_sdk.tier1_runtime.executor import RequestExecutor
from luxor_sdk.tier1_runtime.serialize import decode_response, encode_request, to_pretty_json
from luxor_sdk.tier2_protocol.messages import ThemeGetRequest, ThemeGetResponse

FIXED = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

THEME_BODY = (
    '{"Groups":['
    '{"GroupNumber":0,"Intensity":26},'
    '{"GroupNumber":1,"Intensity":42}'
    ']}'
)


async def _execute(executor, token=None):
    return await executor.execute(
        "ThemeGet", ThemeGetRequest(theme_index=0), ThemeGetResponse, token
    )


# ── clock ──────────────────────────────────────────────────────────────────

class TestClock:
    def test_now_returns_utc_datetime(self):
        assert Clock().now().tzinfo is not None

    def test_frozen_clock(self):
        assert Clock().freeze(FIXED).now() == FIXED

    def test_deadline_and_remaining(self):
        clock = Clock().freeze(FIXED)
        deadline = clock.deadline_after(3)
        assert deadline == FIXED + timedelta(seconds=3)
        assert clock.remaining(deadline) == 3
        assert clock.remaining(FIXED - timedelta(seconds=1)) == -1

    def test_set_global_clock(self):
        frozen = Clock().freeze(FIXED)
        set_clock(frozen)
        assert get_clock() is frozen


# ── cancellation tokens ────────────────────────────────────────────────────

class TestCancellationToken:
    def test_fresh_token_is_active(self):
        token = CancellationToken()
        assert not token.canceled
        assert token.deadline is None
        assert token.remaining() is None

    def test_cancel_is_monotonic(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.canceled
        assert token.canceled

    def test_explicit_cancel_error(self):
        token = CancellationToken()
        token.cancel()
        err = token.error("ThemeGet")
        assert type(err) is Canceled
        assert err.method == "ThemeGet"

    def test_past_deadline_is_canceled(self):
        clock = Clock().freeze(FIXED)
        token = CancellationToken(FIXED - timedelta(seconds=1), clock=clock)
        assert token.canceled
        assert isinstance(token.error(), DeadlineExceeded)

    def test_deadline_equal_to_now_is_canceled(self):
        clock = Clock().freeze(FIXED)
        assert CancellationToken(FIXED, clock=clock).canceled

    def test_future_deadline_is_active(self):
        clock = Clock().freeze(FIXED)
        token = CancellationToken(FIXED + timedelta(days=3650), clock=clock)
        assert not token.canceled
        assert token.remaining() == timedelta(days=3650).total_seconds()

    def test_expiry_is_sticky(self):
        now = [FIXED]
        clock = Clock(now_fn=lambda: now[0])
        token = CancellationToken(FIXED + timedelta(seconds=1), clock=clock)
        now[0] = FIXED + timedelta(seconds=2)
        assert token.canceled
        now[0] = FIXED
        assert token.canceled

    def test_with_timeout(self):
        clock = Clock().freeze(FIXED)
        token = CancellationToken.with_timeout(5, clock=clock)
        assert token.deadline == FIXED + timedelta(seconds=5)

    def test_with_timeout_none_means_no_deadline(self):
        assert CancellationToken.with_timeout(None).deadline is None

    @pytest.mark.asyncio
    async def test_wait_returns_on_cancel(self):
        token = CancellationToken()
        waiter = asyncio.create_task(token.wait())
        await asyncio.sleep(0)
        assert not waiter.done()
        token.cancel()
        await asyncio.wait_for(waiter, timeout=1)

    @pytest.mark.asyncio
    async def test_wait_returns_at_deadline(self):
        token = CancellationToken.with_timeout(0.05)
        await asyncio.wait_for(token.wait(), timeout=2)
        assert token.canceled
        assert isinstance(token.error(), DeadlineExceeded)


# ── serialize ──────────────────────────────────────────────────────────────

class TestSerialize:
    def test_request_uses_wire_names(self):
        assert encode_request(ThemeGetRequest(theme_index=0)) == b'{"ThemeIndex":0}'

    def test_dict_request(self):
        assert encode_request({"ThemeIndex": 3}) == b'{"ThemeIndex":3}'

    def test_missing_status_decodes_as_success(self):
        resp = decode_response(THEME_BODY, ThemeGetResponse)
        assert resp.status == 0
        assert [(g.group_number, g.intensity) for g in resp.groups] == [(0, 26), (1, 42)]

    def test_unknown_fields_are_ignored(self):
        resp = decode_response(b'{"Status":0,"Firmware":"2.1"}', ThemeGetResponse)
        assert resp.status == 0

    def test_pretty_json_uses_wire_names(self):
        text = to_pretty_json(decode_response(THEME_BODY, ThemeGetResponse))
        assert json.loads(text)["Groups"][1] == {"GroupNumber": 1, "Intensity": 42}


# ── executor ───────────────────────────────────────────────────────────────

class TestRequestExecutor:
    @pytest.mark.asyncio
    async def test_successful_theme_get(self, recorder):
        rec = recorder(lambda request: json_response(THEME_BODY))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        resp = await _execute(executor)

        assert len(rec.requests) == 1
        sent = rec.requests[0]
        assert sent.method == "POST"
        assert sent.url.path == "/ThemeGet.json"
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {"ThemeIndex": 0}
        assert len(resp.groups) == 2
        assert resp.groups[0].group_number == 0 and resp.groups[0].intensity == 26
        assert resp.groups[1].group_number == 1 and resp.groups[1].intensity == 42

    def test_url_for_strips_trailing_slash(self):
        assert RequestExecutor("http://luxor/").url_for("ThemeGet") == "http://luxor/ThemeGet.json"

    @pytest.mark.asyncio
    async def test_already_canceled_sends_nothing(self, recorder):
        rec = recorder(lambda request: json_response(THEME_BODY))
        executor = RequestExecutor("http://luxor.test", client=rec.client())
        token = CancellationToken()
        token.cancel()

        with pytest.raises(Canceled) as exc_info:
            await _execute(executor, token)

        assert not isinstance(exc_info.value, DeadlineExceeded)
        assert rec.requests == []

    @pytest.mark.asyncio
    async def test_past_deadline_sends_nothing(self, recorder):
        rec = recorder(lambda request: json_response(THEME_BODY))
        executor = RequestExecutor("http://luxor.test", client=rec.client())
        clock = Clock().freeze(FIXED)
        token = CancellationToken(FIXED - timedelta(hours=1), clock=clock)

        with pytest.raises(DeadlineExceeded):
            await asyncio.wait_for(_execute(executor, token), timeout=1)

        assert rec.requests == []

    @pytest.mark.asyncio
    async def test_canceled_while_waiting(self, recorder):
        token = CancellationToken()
        release = asyncio.Event()
        finished = []

        async def stall(request):
            token.cancel()
            await release.wait()
            finished.append(True)
            return json_response(THEME_BODY)

        rec = recorder(stall)
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(Canceled) as exc_info:
            await asyncio.wait_for(_execute(executor, token), timeout=5)

        assert not isinstance(exc_info.value, DeadlineExceeded)
        assert len(rec.requests) == 1
        release.set()
        for _ in range(5):
            await asyncio.sleep(0)
        # The abandoned exchange was torn down, not completed.
        assert finished == []

    @pytest.mark.asyncio
    async def test_deadline_while_waiting(self, recorder):
        async def stall(request):
            await asyncio.Event().wait()

        rec = recorder(stall)
        executor = RequestExecutor("http://luxor.test", client=rec.client())
        token = CancellationToken.with_timeout(0.1)

        with pytest.raises(DeadlineExceeded):
            await asyncio.wait_for(_execute(executor, token), timeout=5)

    @pytest.mark.asyncio
    async def test_caller_cancellation_tears_down_exchange(self, recorder):
        started = asyncio.Event()
        torn_down = []

        async def stall(request):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                torn_down.append(True)
                raise

        rec = recorder(stall)
        executor = RequestExecutor("http://luxor.test", client=rec.client())
        task = asyncio.create_task(_execute(executor))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        for _ in range(5):
            await asyncio.sleep(0)
        assert torn_down == [True]

    @pytest.mark.asyncio
    async def test_bad_http_status(self, recorder):
        rec = recorder(lambda request: httpx.Response(500, text="Horrible problem\n"))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(UnexpectedHTTPStatus) as exc_info:
            await _execute(executor)

        assert exc_info.value.status_code == 500
        assert "Horrible problem" in str(exc_info.value)
        assert "500" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_bad_content_type(self, recorder):
        rec = recorder(lambda request: httpx.Response(
            200, headers={"Content-Type": "text/plain"}, content=THEME_BODY.encode()
        ))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(UnexpectedContentType) as exc_info:
            await _execute(executor)

        assert "text/plain" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_content_type_must_match_exactly(self, recorder):
        rec = recorder(lambda request: httpx.Response(
            200,
            headers={"Content-Type": "application/json; charset=utf-8"},
            content=THEME_BODY.encode(),
        ))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(UnexpectedContentType):
            await _execute(executor)

    @pytest.mark.asyncio
    async def test_bad_json(self, recorder):
        rec = recorder(lambda request: json_response("asdf"))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(MalformedResponse) as exc_info:
            await _execute(executor)

        assert "asdf" in str(exc_info.value)
        assert exc_info.value.body == b"asdf"

    @pytest.mark.asyncio
    async def test_wrong_shape_is_malformed(self, recorder):
        rec = recorder(lambda request: json_response('{"Groups":"nope"}'))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(MalformedResponse):
            await _execute(executor)

    @pytest.mark.asyncio
    async def test_status_field_is_not_inspected(self, recorder):
        rec = recorder(lambda request: json_response('{"Status":1}'))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        resp = await _execute(executor)

        assert resp.status == 1

    @pytest.mark.asyncio
    async def test_unsupported_scheme(self):
        executor = RequestExecutor("badscheme://")

        with pytest.raises(TransportError) as exc_info:
            await _execute(executor)

        assert "badscheme" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_failure(self, recorder):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        rec = recorder(refuse)
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(TransportError) as exc_info:
            await _execute(executor)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert "connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unencodable_request_sends_nothing(self, recorder):
        rec = recorder(lambda request: json_response("{}"))
        executor = RequestExecutor("http://luxor.test", client=rec.client())

        with pytest.raises(RequestEncodingError):
            await executor.execute("ThemeGet", {"ThemeIndex": object()}, ThemeGetResponse)

        assert rec.requests == []
