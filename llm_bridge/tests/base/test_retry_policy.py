"""Unit tests for the retry controller.

Covers:
- backoff schedule and cap
- the exact retryable status set (500 excluded)
- attempt budget of ``max_retries + 1``
- transport errors retried; parse errors after a 2xx never retried
- ``http.retry`` log events and the attempt logger callback
"""
from __future__ import annotations

import asyncio

import httpx
import pytest

from llm_bridge.base.errors import ErrorCode, ProviderError
from llm_bridge.base.logging import LogContext
from llm_bridge.base.resilience.retry import RetryPolicy, request_json, send_with_retry

from ..utils import json_response, mock_client

URL = "https://api.test/v1/thing"


class _Sequence:
    """Transport handler replaying a scripted list of outcomes."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        # responses are single-use once the client has bound them
        return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)


def _send(handler, policy, fake_sleep, **kwargs):
    async def run():
        async with mock_client(handler) as client:
            return await send_with_retry(
                client,
                lambda: client.build_request("GET", URL),
                policy,
                ctx=LogContext(provider="p", model="m"),
                sleep=fake_sleep,
                **kwargs,
            )

    return asyncio.run(run())


def test_backoff_schedule_is_capped():
    policy = RetryPolicy(max_retries=5, initial_backoff=1.0, max_backoff=10.0, multiplier=2.0)
    assert [policy.backoff(n) for n in range(5)] == [1.0, 2.0, 4.0, 8.0, 10.0]  # nosec B101
    assert policy.max_attempts == 6  # nosec B101


def test_policy_rejects_invalid_values():
    with pytest.raises(ValueError):
        RetryPolicy(max_retries=-1)
    with pytest.raises(ValueError):
        RetryPolicy(multiplier=0.5)


@pytest.mark.parametrize("status", [408, 429, 502, 503, 504])
def test_retryable_statuses(status):
    assert RetryPolicy.is_retryable_status(status)  # nosec B101


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422, 500, 501])
def test_non_retryable_statuses(status):
    assert not RetryPolicy.is_retryable_status(status)  # nosec B101


def test_retries_until_success_with_backoff_between_attempts(fake_sleep):
    handler = _Sequence(
        httpx.Response(503, text="busy"),
        httpx.Response(429, text="slow down"),
        json_response(200, {"ok": True}),
    )
    policy = RetryPolicy(max_retries=3, initial_backoff=1.0, max_backoff=30.0, multiplier=2.0)
    response = _send(handler, policy, fake_sleep)
    assert response.status_code == 200  # nosec B101
    assert handler.calls == 3  # nosec B101
    assert fake_sleep.delays == [1.0, 2.0]  # nosec B101


def test_exhaustion_makes_max_retries_plus_one_attempts(fake_sleep):
    handler = _Sequence(httpx.Response(502, text="bad gateway"))
    policy = RetryPolicy(max_retries=2, initial_backoff=0.5, max_backoff=30.0, multiplier=2.0)
    with pytest.raises(ProviderError) as ei:
        _send(handler, policy, fake_sleep)
    assert handler.calls == 3  # nosec B101
    assert fake_sleep.delays == [0.5, 1.0]  # nosec B101
    assert ei.value.code is ErrorCode.HTTP  # nosec B101
    assert ei.value.status_code == 502  # nosec B101
    assert ei.value.message.startswith("http 502:")  # nosec B101


def test_http_500_is_not_retried(fake_sleep):
    handler = _Sequence(httpx.Response(500, text="boom"))
    with pytest.raises(ProviderError) as ei:
        _send(handler, RetryPolicy(max_retries=3), fake_sleep)
    assert handler.calls == 1  # nosec B101
    assert fake_sleep.delays == []  # nosec B101
    assert ei.value.status_code == 500  # nosec B101
    assert ei.value.retryable is False  # nosec B101


def test_error_body_is_truncated_to_twenty_lines(fake_sleep):
    body = "\n".join(f"line {i}" for i in range(50))
    handler = _Sequence(httpx.Response(400, text=body))
    with pytest.raises(ProviderError) as ei:
        _send(handler, RetryPolicy(max_retries=0), fake_sleep)
    assert ei.value.body.splitlines() == [f"line {i}" for i in range(20)]  # nosec B101


def test_transport_errors_are_retried(fake_sleep):
    handler = _Sequence(httpx.ConnectError("refused"), json_response(200, {"ok": 1}))
    response = _send(handler, RetryPolicy(max_retries=1, initial_backoff=0.25), fake_sleep)
    assert response.status_code == 200  # nosec B101
    assert fake_sleep.delays == [0.25]  # nosec B101


def test_transport_error_exhaustion_raises_http_without_status(fake_sleep):
    handler = _Sequence(httpx.ReadTimeout("slow"))
    with pytest.raises(ProviderError) as ei:
        _send(handler, RetryPolicy(max_retries=1, initial_backoff=0.1), fake_sleep)
    assert ei.value.code is ErrorCode.HTTP  # nosec B101
    assert ei.value.status_code is None  # nosec B101
    assert "transport error" in ei.value.message  # nosec B101


def test_parse_error_after_success_is_not_retried(fake_sleep):
    handler = _Sequence(httpx.Response(200, text="not json"))

    async def run():
        async with mock_client(handler) as client:
            return await request_json(
                client,
                lambda: client.build_request("GET", URL),
                RetryPolicy(max_retries=3),
                ctx=LogContext(provider="p", model="m"),
                sleep=fake_sleep,
            )

    with pytest.raises(ProviderError) as ei:
        asyncio.run(run())
    assert ei.value.code is ErrorCode.PARSE  # nosec B101
    assert handler.calls == 1  # nosec B101


def test_retry_events_and_attempt_logger(fake_sleep, log_events):
    seen = []

    def attempt_logger(**kw):
        seen.append(kw)

    handler = _Sequence(httpx.Response(503, text="busy"), json_response(200, {}))
    _send(handler, RetryPolicy(max_retries=2, initial_backoff=2.0), fake_sleep, attempt_logger=attempt_logger)

    retries = log_events.named("http.retry")
    assert len(retries) == 1  # nosec B101
    assert retries[0]["attempt"] == 0  # nosec B101
    assert retries[0]["delay_s"] == 2.0  # nosec B101
    assert retries[0]["provider"] == "p"  # nosec B101
    assert seen[0]["attempt"] == 0 and seen[0]["delay"] == 2.0  # nosec B101
    assert seen[0]["error"].status_code == 503  # nosec B101


def test_request_factory_called_once_per_attempt(fake_sleep):
    built = []
    handler = _Sequence(httpx.Response(504), httpx.Response(504), json_response(200, {}))

    async def run():
        async with mock_client(handler) as client:
            def factory():
                built.append(1)
                return client.build_request("POST", URL, json={"a": 1})

            return await send_with_retry(client, factory, RetryPolicy(max_retries=3), sleep=fake_sleep)

    asyncio.run(run())
    assert len(built) == 3  # nosec B101
