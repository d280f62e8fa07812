from __future__ import annotations

import asyncio

import pytest

from kritrim_engine.retry import RetryPolicy, is_transient_error, retry_async


class FlakyOperation:
    def __init__(self, errors: list[Exception], result: str = "ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def _recording_sleep(delays: list[float]):
    async def _sleep(delay: float) -> None:
        delays.append(delay)

    return _sleep


def test_transient_classifier() -> None:
    assert is_transient_error(RuntimeError('{"error":{"code":500,"status":"INTERNAL"}}'))
    assert is_transient_error(RuntimeError("500 Internal Server Error"))
    assert is_transient_error(RuntimeError("INTERNAL"))
    assert not is_transient_error(RuntimeError("400 INVALID_ARGUMENT"))
    assert not is_transient_error(RuntimeError("connection reset"))


def test_policy_delays_double_after_each_failure() -> None:
    policy = RetryPolicy()
    assert [policy.delay_for(attempt) for attempt in (1, 2)] == [1.0, 2.0]
    assert RetryPolicy(base_delay_s=0.5).delay_for(3) == 2.0


def test_transient_error_retried_with_backoff() -> None:
    delays: list[float] = []
    operation = FlakyOperation([RuntimeError("500 INTERNAL"), RuntimeError("500 INTERNAL")])
    result = asyncio.run(retry_async(operation, sleep=_recording_sleep(delays)))
    assert result == "ok"
    assert operation.calls == 3
    assert delays == [1.0, 2.0]


def test_exhausted_retries_reraise_last_error_unchanged() -> None:
    delays: list[float] = []
    last = RuntimeError("500 INTERNAL (third)")
    operation = FlakyOperation([RuntimeError("500 INTERNAL"), RuntimeError("500 INTERNAL"), last])
    with pytest.raises(RuntimeError) as excinfo:
        asyncio.run(retry_async(operation, sleep=_recording_sleep(delays)))
    assert excinfo.value is last
    assert operation.calls == 3
    assert delays == [1.0, 2.0]


def test_non_transient_error_is_not_retried() -> None:
    delays: list[float] = []
    operation = FlakyOperation([ValueError("400 bad request")])
    with pytest.raises(ValueError):
        asyncio.run(retry_async(operation, sleep=_recording_sleep(delays)))
    assert operation.calls == 1
    assert delays == []


def test_on_retry_callback_sees_each_scheduled_retry() -> None:
    seen: list[tuple[int, float]] = []
    operation = FlakyOperation([RuntimeError("500")])

    def _on_retry(attempt: int, delay: float, exc: BaseException) -> None:
        seen.append((attempt, delay))

    asyncio.run(retry_async(operation, sleep=_recording_sleep([]), on_retry=_on_retry))
    assert seen == [(1, 1.0)]
