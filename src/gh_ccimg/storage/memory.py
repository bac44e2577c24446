# ABOUTME: In-memory image storage as base64 strings
# ABOUTME: Used when images are printed or forwarded rather than written to disk

import base64
import binascii

from gh_ccimg.storage.base import StorageError


class MemoryStorage:
    """Keeps stored images as base64 strings in insertion order."""

    def __init__(self) -> None:
        self._images: list[str] = []

    def store(self, data: bytes, content_type: str = "", url: str = "") -> str:
        if not data:
            raise StorageError("cannot store empty data")

        encoded = base64.b64encode(data).decode("ascii")
        self._images.append(encoded)
        return encoded

    def get_images(self) -> list[str]:
        return list(self._images)

    def count(self) -> int:
        return len(self._images)

    def clear(self) -> None:
        self._images.clear()

    def get_image_data(self, encoded: str) -> bytes:
        """Decode a string previously returned by ``store``."""
        if not encoded:
            raise StorageError("encoded string cannot be empty")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise StorageError(f"failed to decode base64 string: {e}") from e

    def estimate_memory_usage(self) -> int:
        """Approximate original byte size of everything stored."""
        return sum(len(encoded) * 3 // 4 for encoded in self._images)
