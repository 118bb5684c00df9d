"""
Opt-in retry for entropy reads.

The library never retries internally: a failed entropy read surfaces to the
caller as EntropyUnavailable. Callers that prefer to wait out a transient
outage can wrap generation with the decorator below.
"""

from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ksuid_kit.kernel.errors import EntropyUnavailable
from ksuid_kit.kernel.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def retry_on_entropy_unavailable(
    max_attempts: int = 3,
    min_wait_ms: int = 10,
    max_wait_ms: int = 250,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Retry decorator for entropy source failures.

    Only EntropyUnavailable is retried. Malformed input errors are never
    transient, so they propagate on the first attempt.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        min_wait_ms: Minimum wait time in milliseconds (default: 10)
        max_wait_ms: Maximum wait time in milliseconds (default: 250)

    Returns:
        Decorated function that retries on EntropyUnavailable

    Example:
        @retry_on_entropy_unavailable(max_attempts=5)
        def mint() -> Ksuid:
            return new_random()
    """
    return retry(
        retry=retry_if_exception_type(EntropyUnavailable),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=min_wait_ms / 1000.0,
            max=max_wait_ms / 1000.0,
        ),
        before_sleep=lambda retry_state: logger.warning(
            "Entropy source unavailable, retrying",
            attempt=retry_state.attempt_number,
            exception=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        ),
        reraise=True,
    )
