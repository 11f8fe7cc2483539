"""Utility modules for the GoodBooks application."""

from goodbooks.utils.logging import LogContext, get_logger, setup_logging
from goodbooks.utils.retry import RetryConfig, retry_async

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Retry
    "retry_async",
    "RetryConfig",
]
