# ABOUTME: Shared storage contract and errors for downloaded image bytes
# ABOUTME: Memory and disk backends both satisfy the ImageStorage protocol

from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Raised when image bytes cannot be stored, read back or cleaned up."""


class FileAlreadyExistsError(StorageError):
    """Raised when a destination file exists and overwriting was not requested."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file {path} already exists (use --force to overwrite)")


@runtime_checkable
class ImageStorage(Protocol):
    """Sink for downloaded images.

    Backends are not safe for concurrent ``store`` calls; fetch concurrently,
    then store sequentially.
    """

    def store(self, data: bytes, content_type: str, url: str) -> str:
        """Persist ``data`` and return its handle (a path or an encoded string)."""
        ...

    def count(self) -> int: ...
