# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks, structlog loggers and pipeline context binding

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import LogContext, generate_operation_id, get_logger, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "generate_operation_id",
    "get_logger",
    "with_pipeline_context",
]
