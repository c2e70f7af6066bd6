"""
Loguru setup.

Records go to stderr so `ghactivity export` can keep stdout for JSON, and
the configured GitHub token never reaches a sink.
"""

import sys
from pathlib import Path

from loguru import logger

from ghactivity.core.config import settings

PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

REDACTED = "[redacted]"


def _scrub(value, token: str):
    if isinstance(value, str):
        return value.replace(token, REDACTED)
    if isinstance(value, dict):
        return {key: _scrub(item, token) for key, item in value.items()}
    return value


def _redact_token(record) -> None:
    token = settings.GITHUB_TOKEN
    if token:
        record["message"] = _scrub(record["message"], token)
        record["extra"].update(_scrub(record["extra"], token))


def setup_logging() -> None:
    """Route logs to stderr (json or pretty) and, with LOG_DIR, to a daily file."""
    logger.remove()
    logger.configure(
        extra={"name": "ghactivity", "github_user": settings.GITHUB_USERNAME or None},
        patcher=_redact_token,
    )

    serialize = settings.LOG_FORMAT == "json"

    logger.add(
        sys.stderr,
        format="{message}" if serialize else PRETTY_FORMAT,
        serialize=serialize,
        level=settings.LOG_LEVEL,
        colorize=not serialize,
        backtrace=True,
        diagnose=False,
    )

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        # always JSON on disk
        logger.add(
            log_dir / "ghactivity_{time:YYYY-MM-DD}.log",
            serialize=True,
            level=settings.LOG_LEVEL,
            rotation="00:00",
            retention="7 days",
            compression="zip",
            diagnose=False,
        )

    logger.info(
        "Logging initialized",
        extra={
            "log_level": settings.LOG_LEVEL,
            "log_format": settings.LOG_FORMAT,
            "log_dir": settings.LOG_DIR,
            "authenticated": bool(settings.GITHUB_TOKEN),
        },
    )


def get_logger(name: str):
    """Get a logger with the given name."""
    return logger.bind(name=name)
