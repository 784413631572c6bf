"""
Retry with exponential backoff for async callables.
"""
import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from app.core.exceptions import GenerationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

BackoffFunction = Callable[[int, float], float]
SleepFunction = Callable[[float], Awaitable[None]]


def exponential_backoff(attempt: int, base_delay: float) -> float:
    """Delay after the given failed attempt (1-based): base * 2^(attempt-1)."""
    return base_delay * (2 ** (attempt - 1))


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    backoff: BackoffFunction = exponential_backoff,
    sleep: SleepFunction = asyncio.sleep,
    operation: str = "operation",
) -> T:
    """
    Await ``fn`` until it succeeds or ``max_attempts`` is exhausted.

    Every exception is retried the same way. Delays are in seconds.

    Raises:
        GenerationError: Wrapping the last failure once attempts run out
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[Exception] = None

    for attempt in range(1, max_attempts + 1):
        try:
            return await fn()
        except Exception as e:
            last_error = e
            logger.warning(
                "retry_attempt_failed",
                operation=operation,
                attempt=attempt,
                max_attempts=max_attempts,
                error_type=type(e).__name__,
                error=str(e),
            )

            if attempt < max_attempts:
                delay = backoff(attempt, base_delay)
                logger.info("retry_waiting", operation=operation, delay_seconds=delay)
                await sleep(delay)

    raise GenerationError(
        f"{operation} failed after {max_attempts} attempts: {last_error}",
        last_error=last_error,
    ) from last_error
