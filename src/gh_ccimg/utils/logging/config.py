# ABOUTME: Logging configuration using loguru sinks with structlog event rendering
# ABOUTME: Dual-mode operation: interactive stderr text vs production JSON lines

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

# stdout carries base64 image output, so every sink writes to stderr
_state: dict[str, Any] = {
    "mode": None,
    "log_level": None,
    "log_file": None,
}

QUIETED_LOGGERS = ["httpx", "httpcore", "asyncio", "urllib3"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("GH_CCIMG_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stderr.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Keep HTTP client chatter out of the CLI output."""
    for logger_name in QUIETED_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _configure_structlog(numeric_level: int) -> None:
    """Render structlog events to text and forward them to loguru."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False, pad_event=0),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=lambda *args: logger.opt(depth=2),
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path; adds a rotating file sink when set
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()

    log_level = log_level.upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    logger.remove()
    _configure_structlog(numeric_level)

    if mode == LoggingMode.INTERACTIVE:
        logger.add(
            sys.stderr,
            level=log_level,
            format="<level>{level: <8}</level> | {message}",
            colorize=True,
        )
    else:
        logger.add(sys.stderr, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="7 days",
        )

    _state.update({"mode": mode, "log_level": log_level, "log_file": log_file})


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = _state["mode"] or detect_logging_mode()

    return {
        "mode": mode,
        "configured": _state["mode"] is not None,
        "log_level": _state["log_level"] or "INFO",
        "sinks": {
            "stderr": "text" if mode == LoggingMode.INTERACTIVE else "json",
            "file": _state["log_file"],
        },
        "third_party_suppressed": list(QUIETED_LOGGERS),
    }
