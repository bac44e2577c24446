# ABOUTME: Storage backends for downloaded images
# ABOUTME: Pipeline Stage 3: fetched bytes → base64 strings or files on disk

"""
Storage Layer: Keep downloaded images in memory or on disk

This layer handles:
- Base64 encoding for in-memory hand-off
- Sequential file naming with overwrite protection
- Extension resolution from content type and URL

Data Flow: download/ FetchResult list → stored handles → core/ pipeline output
"""

from .base import FileAlreadyExistsError, ImageStorage, StorageError
from .disk import DiskStorage
from .memory import MemoryStorage
from .naming import determine_extension, extract_extension_from_url, generate_filename

__all__ = [
    "DiskStorage",
    "FileAlreadyExistsError",
    "ImageStorage",
    "MemoryStorage",
    "StorageError",
    "determine_extension",
    "extract_extension_from_url",
    "generate_filename",
]
