# ABOUTME: Disk image storage with sequential naming and overwrite protection
# ABOUTME: Writes img-01.ext, img-02.ext, ... into a single output directory

from pathlib import Path

from gh_ccimg.storage.base import FileAlreadyExistsError, StorageError
from gh_ccimg.storage.naming import determine_extension, generate_filename


class DiskStorage:
    """Writes images into ``output_dir``.

    Names come from a counter owned by this instance, never from scanning the
    directory. Without ``force`` an existing file at the next name is an error,
    whoever created it.
    """

    def __init__(self, output_dir: str | Path, force: bool = False):
        if not str(output_dir):
            raise StorageError("output directory cannot be empty")

        directory = Path(output_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create output directory {directory}: {e}") from e

        self._output_dir = directory
        self.force = force
        self._files: list[Path] = []
        self._next_index = 0

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def store(self, data: bytes, content_type: str = "", url: str = "") -> str:
        if not data:
            raise StorageError("cannot store empty data")

        filename = generate_filename(self._next_index, determine_extension(content_type, url))
        path = self._output_dir / filename

        if not self.force and path.exists():
            raise FileAlreadyExistsError(str(path))

        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"failed to write file {path}: {e}") from e

        self._files.append(path)
        self._next_index += 1
        return str(path)

    def get_files(self) -> list[str]:
        return [str(path) for path in self._files]

    def count(self) -> int:
        return len(self._files)

    def exists(self, filename: str) -> bool:
        return (self._output_dir / filename).exists()

    def get_total_size(self) -> int:
        """Sum the current on-disk size of every tracked file."""
        total = 0
        for path in self._files:
            try:
                total += path.stat().st_size
            except OSError as e:
                raise StorageError(f"failed to stat file {path}: {e}") from e
        return total

    def cleanup(self) -> None:
        """Delete every tracked file.

        All files are attempted and tracking is reset afterwards, even when
        some removals fail. The first failure is reported.
        """
        errors: list[str] = []

        for path in self._files:
            try:
                path.unlink()
            except OSError as e:
                errors.append(f"failed to remove {path}: {e}")

        self._files = []
        self._next_index = 0

        if errors:
            raise StorageError(f"cleanup failed with {len(errors)} errors: {errors[0]}")
