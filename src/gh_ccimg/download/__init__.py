# ABOUTME: Guarded concurrent image downloading
# ABOUTME: Pipeline Stage 2: image URLs → fetched bytes with content type

"""
Download Layer: Fetch image bytes under size, time and content-type guards

This layer handles:
- Bounded-concurrency fetching with retry and exponential backoff
- Content-Type validation and extension mapping
- Progress reporting for download batches

Data Flow: extraction/ URLs → FetchResult list → storage/
"""

from .errors import (
    EmptyResponseError,
    FetchCancelledError,
    FetchError,
    FileTooLargeError,
    HTTPStatusFetchError,
    InvalidContentTypeError,
    RequestBuildError,
    TransientFetchError,
)
from .fetcher import Fetcher, FetchResult
from .progress import ConsoleReporter, NoOpReporter, ProgressReporter
from .validator import get_extension_from_content_type, validate_content_type

__all__ = [
    "ConsoleReporter",
    "EmptyResponseError",
    "FetchCancelledError",
    "FetchError",
    "FetchResult",
    "Fetcher",
    "FileTooLargeError",
    "HTTPStatusFetchError",
    "InvalidContentTypeError",
    "NoOpReporter",
    "ProgressReporter",
    "RequestBuildError",
    "TransientFetchError",
    "get_extension_from_content_type",
    "validate_content_type",
]
