"""Retry utilities with exponential backoff for external API calls."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 3
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        ConnectionError,
        TimeoutError,
    )
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * (self.exponential_base**attempt), self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    operation_name: str = "operation",
    **kwargs: Any,
) -> T:
    """Execute an async function with retry logic and exponential backoff.

    Retryable exceptions and retryable HTTP status codes are retried up to
    ``config.max_retries`` times; the last exception is re-raised, and the last
    response is returned as-is so the caller can inspect its status.
    """
    for attempt in range(config.max_retries + 1):
        is_last = attempt == config.max_retries
        try:
            result = await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            if is_last:
                logger.error(f"{operation_name}: Failed after {config.max_retries + 1} attempts: {e}")
                raise
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
            )
            await asyncio.sleep(delay)
            continue

        if (
            isinstance(result, httpx.Response)
            and result.status_code in config.retryable_status_codes
            and not is_last
        ):
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: Got status {result.status_code}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
            )
            await asyncio.sleep(delay)
            continue

        return result

    raise AssertionError("unreachable")
