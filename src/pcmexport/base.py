"""Common capability interface implemented by every container writer."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional, Protocol, Union

from .description import AudioDescription

__all__ = ["AudioFile", "WriterState", "PathLike"]

PathLike = Union[str, Path]


class WriterState(enum.Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class AudioFile(Protocol):
    """open -> write_bytes / write_channels (any number of times) -> close."""

    def open(self, path: PathLike, description: AudioDescription) -> None:  # pragma: no cover - protocol
        ...

    def write_bytes(self, data: bytes) -> None:  # pragma: no cover - protocol
        ...

    def write_channels(self, *channels) -> None:  # pragma: no cover - protocol
        ...

    def close(self) -> None:  # pragma: no cover - protocol
        ...

    @property
    def description(self) -> Optional[AudioDescription]:  # pragma: no cover - protocol
        ...

    @property
    def bytes_written(self) -> int:  # pragma: no cover - protocol
        ...
