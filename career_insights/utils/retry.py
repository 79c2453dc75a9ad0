"""
Retry utilities with exponential backoff for LLM calls.

Only transient failures (connection drops, timeouts, rate limits, 5xx) are
retried; everything else propagates on the first attempt.
"""
import functools
import random
import time
from typing import Callable, Optional, Tuple, Type

import anthropic

from career_insights.utils.logger import log


# Default retryable exceptions (network/API errors)
DEFAULT_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    anthropic.APIConnectionError,  # Includes APITimeoutError
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


def calculate_backoff(
    attempt: int,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True
) -> float:
    """
    Calculate delay for exponential backoff.

    Args:
        attempt: Current attempt number (1-indexed)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay cap
        exponential_base: Base for exponential calculation
        jitter: Add 0-25% randomness to prevent thundering herd

    Returns:
        Delay in seconds
    """
    delay = base_delay * (exponential_base ** (attempt - 1))
    delay = min(delay, max_delay)

    if jitter:
        delay += delay * random.uniform(0, 0.25)

    return delay


def is_retryable_error(
    error: Exception,
    retryable_exceptions: Tuple[Type[Exception], ...] = DEFAULT_RETRYABLE_EXCEPTIONS,
) -> bool:
    """Check if an error is worth another attempt."""
    if isinstance(error, retryable_exceptions):
        return True

    error_str = str(error).lower()
    if "rate limit" in error_str or "overloaded" in error_str:
        return True
    if "timeout" in error_str or "timed out" in error_str:
        return True

    return False


def retry_sync(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    retryable_exceptions: Tuple[Type[Exception], ...] = DEFAULT_RETRYABLE_EXCEPTIONS,
    on_retry: Optional[Callable[[int, Exception, float], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
):
    """
    Decorator for retrying synchronous calls with exponential backoff.

    Usage:
        complete = retry_sync(max_attempts=2)(generator.complete)
        text = complete(prompt)
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, max_attempts + 1):
                try:
                    result = func(*args, **kwargs)
                    if attempt > 1:
                        log.info(f"{func.__name__} succeeded on attempt {attempt}")
                    return result

                except Exception as e:
                    if attempt >= max_attempts or not is_retryable_error(e, retryable_exceptions):
                        raise

                    delay = calculate_backoff(
                        attempt,
                        base_delay=base_delay,
                        max_delay=max_delay,
                        exponential_base=exponential_base
                    )
                    log.warning(
                        f"{func.__name__} attempt {attempt} failed: {e}. "
                        f"Retrying in {delay:.1f}s..."
                    )
                    if on_retry:
                        on_retry(attempt, e, delay)
                    sleep(delay)

            raise RuntimeError("Retry exhausted")

        return wrapper

    return decorator
