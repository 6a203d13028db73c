"""Retry classification and exponential backoff with jitter."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 5
    max_delay: float = 10.0
    backoff_base: float = 0.5

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.backoff_base < 0:
            raise ValueError("backoff_base must be >= 0")
        if self.max_delay < self.backoff_base:
            raise ValueError("max_delay must be >= backoff_base")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_POLICY = RetryPolicy()


def should_retry(response: Optional[httpx.Response], error: Optional[BaseException] = None) -> bool:
    """Transport failures, 429 and 5xx are transient; everything else is final."""
    if error is not None or response is None:
        return True
    return response.status_code == 429 or response.status_code >= 500


def backoff_ceiling(attempt: int, policy: RetryPolicy) -> float:
    if attempt < 0:
        raise ValueError("attempt must be >= 0")
    if policy.backoff_base == 0:
        return 0.0
    # Large attempts would overflow float math long before they matter.
    if attempt >= 64:
        return policy.max_delay
    return min(policy.backoff_base * (2 ** attempt), policy.max_delay)


def compute_delay(attempt: int, policy: RetryPolicy) -> float:
    ceiling = backoff_ceiling(attempt, policy)
    if ceiling <= 0:
        return 0.0
    return random.uniform(0, ceiling)


__all__ = ["RetryPolicy", "DEFAULT_RETRY_POLICY", "should_retry", "backoff_ceiling", "compute_delay"]
