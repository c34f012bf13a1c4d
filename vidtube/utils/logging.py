"""Logging setup and context-prefixed loggers."""

import logging
import sys

from vidtube.config import Settings

_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine", "multipart", "aiosqlite")


def _default_level(settings: Settings) -> int:
    if settings.is_production:
        return logging.INFO
    if settings.app_env == "test":
        return logging.WARNING
    return logging.DEBUG


def setup_logging(settings: Settings, level: int | None = None) -> None:
    """Configure the root logger once at startup.

    Args:
        settings: Application settings; ``app_env`` picks the default level
        level: Explicit override of that level
    """
    logging.basicConfig(
        level=level if level is not None else _default_level(settings),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that prefixes each message with ``[key=value]`` pairs.

    >>> log = LogContext(logger, user=user_id, video=video_id)
    >>> log.info("Thumbnail replaced")   # "[user=...] [video=...] Thumbnail replaced"
    """

    def __init__(self, logger: logging.Logger, **context: object) -> None:
        self.logger = logger
        self.context = context
        self.prefix = " ".join(f"[{key}={value}]" for key, value in context.items())

    def bind(self, **context: object) -> "LogContext":
        """Return a new context with extra pairs appended."""
        return LogContext(self.logger, **self.context, **context)

    def _log(self, level: int, msg: str, *args, **kwargs) -> None:
        self.logger.log(level, f"{self.prefix} {msg}", *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        self.logger.exception(f"{self.prefix} {msg}", *args, **kwargs)
