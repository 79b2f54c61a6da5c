"""Artifact store — physical file bytes on disk, keyed by storage key."""

from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from config import CHUNK_SIZE
from errors import StorageIOError


class ArtifactStore:
    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path(self, key: str) -> Path:
        # Keys are single path components; anything else could escape the root
        if not key or key in (".", "..") or Path(key).name != key or "\\" in key:
            raise StorageIOError(f"Invalid storage key: {key!r}")
        return self.root / key

    def exists(self, key: str) -> bool:
        return self.path(key).is_file()

    def delete(self, key: str) -> None:
        """Remove an artifact. Deleting a missing key is not an error."""
        try:
            self.path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageIOError(f"Could not delete {key}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        try:
            self.path(key).write_bytes(data)
        except OSError as e:
            raise StorageIOError(f"Could not write {key}: {e}") from e

    @contextmanager
    def open_write(self, key: str) -> Iterator[BinaryIO]:
        try:
            with open(self.path(key), "wb") as f:
                yield f
        except OSError as e:
            raise StorageIOError(f"Could not write {key}: {e}") from e

    def read(self, key: str) -> bytes:
        try:
            return self.path(key).read_bytes()
        except OSError as e:
            raise StorageIOError(f"Could not read {key}: {e}") from e

    def size(self, key: str) -> int:
        try:
            return self.path(key).stat().st_size
        except OSError as e:
            raise StorageIOError(f"Could not stat {key}: {e}") from e

    def iter_chunks(self, key: str, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        with open(self.path(key), "rb") as f:
            while chunk := f.read(chunk_size):
                yield chunk
