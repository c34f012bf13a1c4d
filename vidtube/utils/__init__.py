"""Utility modules for the VidTube application."""

from vidtube.utils.logging import LogContext, get_logger, setup_logging
from vidtube.utils.retry import RetryConfig, retry_async

__all__ = [
    "LogContext",
    "RetryConfig",
    "get_logger",
    "retry_async",
    "setup_logging",
]
