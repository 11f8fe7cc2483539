"""Retry with exponential backoff for outbound catalog calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 2
    base_delay: float = 0.5  # seconds
    max_delay: float = 8.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        httpx.RemoteProtocolError,
    )
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        """Backoff delay before the retry following ``attempt`` (0-based)."""
        return min(self.base_delay * (self.exponential_base**attempt), self.max_delay)


async def retry_async(
    func: Callable[[], Awaitable[httpx.Response]],
    config: RetryConfig,
    operation_name: str = "request",
) -> httpx.Response | None:
    """Run an HTTP call, retrying transport errors and retryable statuses.

    Args:
        func: Zero-argument coroutine factory performing the request
        config: Retry configuration
        operation_name: Name of the operation for logging

    Returns:
        The last response, or None if every attempt failed. Non-retryable
        exceptions propagate.
    """
    attempts = config.max_retries + 1

    for attempt in range(attempts):
        try:
            response = await func()
        except config.retryable_exceptions as e:
            if attempt + 1 >= attempts:
                logger.error(f"{operation_name}: failed after {attempts} attempts: {e}")
                return None
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{attempts})"
            )
            await asyncio.sleep(delay)
            continue

        if response.status_code in config.retryable_status_codes and attempt + 1 < attempts:
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: got status {response.status_code}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{attempts})"
            )
            await asyncio.sleep(delay)
            continue

        return response

    return None
