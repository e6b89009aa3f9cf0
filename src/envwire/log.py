"""Logging configuration built on loguru."""

import sys
import typing as t

from loguru import logger

from envwire.config import LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

_configured = False


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    serialize: bool = False,
    sink: t.Any = None,
) -> None:
    """Replace loguru's handlers with a single handler at ``level``.

    ``serialize`` emits JSON records instead of the human readable format.
    """
    global _configured
    logger.remove()
    logger.add(
        sink or sys.stderr,
        level=LogLevel(level).value,
        format=_FORMAT,
        serialize=serialize,
        backtrace=False,
        diagnose=False,
    )
    _configured = True


def setup_logging(settings: Settings) -> None:
    configure_logger(level=settings.log_level)


def get_logger(name: str) -> "loguru.Logger":
    """Return the shared logger bound to ``name``, configuring defaults on first use."""
    if not _configured:
        configure_logger()
    return logger.bind(module=name)


def reset_logging() -> None:
    global _configured
    logger.remove()
    _configured = False


def is_configured() -> bool:
    return _configured
