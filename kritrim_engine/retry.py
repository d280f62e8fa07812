"""Async retry combinator with exponential backoff."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[Any]]
OnRetryFn = Callable[[int, float, BaseException], None]

TRANSIENT_ERROR_MARKERS = ("500", "INTERNAL")


def is_transient_error(exc: BaseException) -> bool:
    """Server-side failures worth another attempt (HTTP 500 / INTERNAL)."""
    message = str(exc)
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_s: float = 1.0
    multiplier: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Wait after the given 1-based failed attempt."""
        return self.base_delay_s * (self.multiplier ** (attempt - 1))


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    classifier: Callable[[BaseException], bool] = is_transient_error,
    sleep: SleepFn = asyncio.sleep,
    on_retry: OnRetryFn | None = None,
) -> T:
    """Run ``operation`` until it succeeds, a non-retriable error occurs or attempts run out.

    The last error is re-raised unchanged.
    """
    resolved = policy or RetryPolicy()
    max_attempts = max(1, int(resolved.max_attempts))
    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as exc:
            if attempt >= max_attempts or not classifier(exc):
                raise
            delay = resolved.delay_for(attempt)
            if on_retry is not None:
                on_retry(attempt, delay, exc)
            await sleep(delay)
            attempt += 1
