"""
Retry Logic for API Requests
"""

import random
import time
from dataclasses import dataclass, field
from functools import wraps
from typing import Callable, FrozenSet, Optional, Tuple, Type

import requests

from langfuse_cli.observability import mainLogger

RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})
# The only POST endpoint is the read-only metrics query. A write endpoint
# must not be added to a transport using this method set.
RETRY_METHODS = frozenset({"GET", "POST"})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry settings for transient failures

    Attributes:
        max_retries: Retries after the first attempt
        interval: Delay before the first retry, in seconds
        backoff_factor: Multiplier applied to the delay on each retry
        interval_randomness: Jitter as a fraction of interval, added on top
        max_retry_after: Longest Retry-After honoured, in seconds; longer
            server waits fall back to the backoff schedule
        retry_statuses: Response statuses that trigger a retry
        methods: HTTP methods eligible for retry
        retry_exceptions: Transport exceptions that trigger a retry
        sleep: Blocking sleep function (injectable for tests)
        random: Source of floats in [0, 1) for jitter (injectable for tests)
    """
    max_retries: int = 3
    interval: float = 0.5
    backoff_factor: float = 2.0
    interval_randomness: float = 0.5
    max_retry_after: float = 30.0
    retry_statuses: FrozenSet[int] = RETRY_STATUSES
    methods: FrozenSet[str] = RETRY_METHODS
    retry_exceptions: Tuple[Type[Exception], ...] = (requests.ConnectionError, requests.Timeout)
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)
    random: Callable[[], float] = field(default=random.random, compare=False)

    def get_retry_delay(self, retry_number: int, retry_after: Optional[float] = None) -> float:
        """
        Calculate the wait before a retry

        Args:
            retry_number: Retries already performed (0 for the first retry)
            retry_after: Server-provided wait, used as-is when present and
                not above max_retry_after

        Returns:
            Delay in seconds: interval * backoff_factor ** retry_number plus
            up to interval * interval_randomness of jitter
        """
        if retry_after is not None and retry_after <= self.max_retry_after:
            return retry_after
        delay = self.interval * (self.backoff_factor ** retry_number)
        jitter = self.random() * self.interval_randomness * self.interval
        return delay + jitter


NO_RETRY = RetryPolicy(max_retries=0)


def parse_retry_after(response) -> Optional[float]:
    """Seconds from a numeric Retry-After header, or None"""
    headers = getattr(response, "headers", None) or {}
    value = headers.get("Retry-After") or headers.get("retry-after")
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None


def retry_on_failure(policy: RetryPolicy):
    """
    Decorator to retry a raw send function on transient failures

    The wrapped function is called as func(method, path, **kwargs) and must
    return an object with status_code and headers attributes.

    Retry Strategy:
    - Methods outside policy.methods: single attempt
    - Statuses in policy.retry_statuses: retry with backoff, or wait for
      Retry-After when the server sends one; the last response is returned
      once retries are exhausted
    - policy.retry_exceptions: retry with backoff, re-raised once exhausted
    - Anything else: returned or raised immediately

    Args:
        policy: Retry settings

    Returns:
        Decorator producing the retrying send function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(method: str, path: str, **kwargs):
            if method.upper() not in policy.methods or policy.max_retries <= 0:
                return func(method, path, **kwargs)

            for attempt in range(policy.max_retries + 1):
                last_attempt = attempt == policy.max_retries
                try:
                    response = func(method, path, **kwargs)
                except policy.retry_exceptions as e:
                    if last_attempt:
                        mainLogger.error(
                            f"Failed after {policy.max_retries + 1} attempts: {type(e).__name__}: {e}",
                            method=method,
                            path=path,
                        )
                        raise
                    wait_time = policy.get_retry_delay(attempt)
                    mainLogger.warning(
                        f"Attempt {attempt + 1}/{policy.max_retries + 1} failed: {type(e).__name__}: {e}",
                        method=method,
                        path=path,
                    )
                else:
                    if response.status_code not in policy.retry_statuses or last_attempt:
                        return response
                    wait_time = policy.get_retry_delay(attempt, parse_retry_after(response))
                    mainLogger.warning(
                        f"Attempt {attempt + 1}/{policy.max_retries + 1} got HTTP {response.status_code}",
                        method=method,
                        path=path,
                    )

                mainLogger.info(f"Retrying in {wait_time:.2f} seconds...")
                policy.sleep(wait_time)

        return wrapper
    return decorator
