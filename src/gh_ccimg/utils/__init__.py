# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, errors, retry, subprocess and path safety helpers

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and structured loggers
- Application error taxonomy and exit codes
- Exponential backoff retry helpers
- Subprocess execution and output path guards

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
