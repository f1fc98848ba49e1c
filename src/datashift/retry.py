"""Retry policy for transient request failures."""

from __future__ import annotations

from pydantic import BaseModel


class RetryDecision(BaseModel):
    retry: bool
    delay: float = 0.0  # seconds


def is_retryable(status_code: int | None) -> bool:
    """No response at all, or a 5xx. Client errors are never retried."""
    if status_code is None:
        return True
    return 500 <= status_code < 600


def next_retry(
    attempt: int, status_code: int | None, *, max_retries: int, base_delay: float
) -> RetryDecision:
    """Decide whether attempt number ``attempt`` (0-based) should be retried.

    Backoff is pure exponential: ``base_delay * 2 ** attempt``, no jitter, no cap.
    """
    if not is_retryable(status_code) or attempt >= max_retries:
        return RetryDecision(retry=False)
    return RetryDecision(retry=True, delay=base_delay * 2**attempt)
