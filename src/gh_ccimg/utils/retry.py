# ABOUTME: Exponential backoff retry built on tenacity's AsyncRetrying
# ABOUTME: Shared by the image fetcher and the GitHub client with different base delays and caps

import random
from collections.abc import Callable
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)
from tenacity.wait import wait_base

DEFAULT_JITTER_RATIO = 0.25


def backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    jitter_ratio: float = DEFAULT_JITTER_RATIO,
    rand: Callable[[], float] = random.random,
) -> float:
    """Compute the sleep before retrying after a zero-based ``attempt``.

    The delay is ``base_delay * 2**attempt`` plus up to ``jitter_ratio`` of that
    value, capped at ``max_delay``.
    """
    delay = base_delay * (2**attempt)
    delay += delay * jitter_ratio * rand()
    return min(delay, max_delay)


class BackoffWait(wait_base):
    """Tenacity wait strategy wrapping :func:`backoff_delay`."""

    def __init__(self, base_delay: float, max_delay: float, jitter_ratio: float = DEFAULT_JITTER_RATIO):
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter_ratio = jitter_ratio

    def __call__(self, retry_state: RetryCallState) -> float:
        # attempt_number is 1-based and counts the attempt that just failed
        return backoff_delay(retry_state.attempt_number - 1, self.base_delay, self.max_delay, self.jitter_ratio)


def backoff_retrying(
    *,
    max_retries: int,
    base_delay: float,
    max_delay: float,
    retry_on: type[BaseException] | tuple[type[BaseException], ...],
    before_sleep: Callable[[RetryCallState], Any] | None = None,
) -> AsyncRetrying:
    """Build an AsyncRetrying that allows ``max_retries`` retries after the first attempt.

    Only exceptions matching ``retry_on`` are retried; anything else, and the last
    retryable failure, is re-raised unchanged.
    """
    retry_kwargs: dict[str, Any] = {
        "stop": stop_after_attempt(max_retries + 1),
        "wait": BackoffWait(base_delay, max_delay),
        "retry": retry_if_exception_type(retry_on),
        "reraise": True,
    }
    if before_sleep is not None:
        retry_kwargs["before_sleep"] = before_sleep
    return AsyncRetrying(**retry_kwargs)
