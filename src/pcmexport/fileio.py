"""Binary file handle used by the writers."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Protocol, Union

__all__ = ["FileHandle", "Opener", "BinaryFile"]


class FileHandle(Protocol):
    """Sequential append plus positioned overwrite, as the writers need it."""

    def write(self, data: bytes) -> int:  # pragma: no cover - protocol
        ...

    def write_at(self, data: bytes, offset: int) -> int:  # pragma: no cover - protocol
        ...

    def close(self) -> None:  # pragma: no cover - protocol
        ...


Opener = Callable[[Path], FileHandle]


class BinaryFile:
    """Thin wrapper around a binary file object opened for writing."""

    def __init__(self, fh: BinaryIO) -> None:
        self._fh = fh

    @classmethod
    def create(cls, path: Union[str, Path]) -> "BinaryFile":
        """
        Create (or truncate) ``path`` for writing.

        Directories are created as needed.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(path.open("wb"))

    def write(self, data: bytes) -> int:
        written = self._fh.write(data)
        return len(data) if written is None else written

    def write_at(self, data: bytes, offset: int) -> int:
        """Overwrite bytes at ``offset`` and return to the previous position."""
        position = self._fh.tell()
        self._fh.seek(offset)
        try:
            return self.write(data)
        finally:
            self._fh.seek(position)

    def close(self) -> None:
        self._fh.close()

    @property
    def closed(self) -> bool:
        return self._fh.closed
