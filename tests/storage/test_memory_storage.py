# ABOUTME: Tests for in-memory base64 image storage
# ABOUTME: Covers empty-data rejection, copy-on-read accessors and decoding

import base64

import pytest

from gh_ccimg.storage import ImageStorage, MemoryStorage, StorageError


class TestMemoryStorage:
    def test_store_returns_base64(self):
        storage = MemoryStorage()

        encoded = storage.store(b"\x89PNG data", "image/png", "https://example.com/a.png")

        assert encoded == base64.b64encode(b"\x89PNG data").decode("ascii")
        assert storage.count() == 1
        assert storage.get_images() == [encoded]

    def test_empty_data_is_rejected_without_counting(self):
        storage = MemoryStorage()

        with pytest.raises(StorageError, match="empty"):
            storage.store(b"", "image/png", "https://example.com/a.png")

        assert storage.count() == 0

    def test_get_images_returns_copy(self):
        storage = MemoryStorage()
        storage.store(b"one")

        images = storage.get_images()
        images.append("tampered")

        assert storage.get_images() == [base64.b64encode(b"one").decode("ascii")]

    def test_clear(self):
        storage = MemoryStorage()
        storage.store(b"one")
        storage.store(b"two")

        storage.clear()

        assert storage.count() == 0
        assert storage.estimate_memory_usage() == 0

    def test_estimate_memory_usage(self):
        storage = MemoryStorage()
        storage.store(b"abc")  # 4 base64 chars
        storage.store(b"abcdef")  # 8 base64 chars

        assert storage.estimate_memory_usage() == 3 + 6

    def test_get_image_data_round_trip(self):
        storage = MemoryStorage()
        encoded = storage.store(b"pixels")

        assert storage.get_image_data(encoded) == b"pixels"

    def test_get_image_data_rejects_bad_input(self):
        storage = MemoryStorage()

        with pytest.raises(StorageError, match="empty"):
            storage.get_image_data("")
        with pytest.raises(StorageError, match="decode"):
            storage.get_image_data("not base64!!")

    def test_satisfies_protocol(self):
        assert isinstance(MemoryStorage(), ImageStorage)
