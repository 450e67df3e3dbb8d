"""Pick a writer by format name or file suffix."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Type, Union

from .aifffile import AiffWriter
from .base import PathLike
from .description import AudioDescription
from .fileio import BinaryFile, Opener
from .wavefile import WaveWriter

WriterType = Union[Type[WaveWriter], Type[AiffWriter]]

FORMATS: Dict[str, WriterType] = {
    "wave": WaveWriter,
    "aiff": AiffWriter,
}

_ALIASES = {"wav": "wave", "aif": "aiff"}

_SUFFIXES = {
    ".wav": "wave",
    ".wave": "wave",
    ".aif": "aiff",
    ".aiff": "aiff",
}


def normalize_format(name: str) -> str:
    key = str(name).strip().lower().lstrip(".")
    key = _ALIASES.get(key, key)
    if key not in FORMATS:
        raise ValueError(f"Unknown audio format {name!r}; expected one of {sorted(FORMATS)}")
    return key


def writer_class_for(name: str) -> WriterType:
    return FORMATS[normalize_format(name)]


def format_for_path(path: PathLike) -> str:
    """Infer the container format from the file suffix (case-insensitive)."""
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIXES[suffix]
    except KeyError:
        raise ValueError(f"Cannot infer audio format from suffix {suffix!r} of {path}") from None


def open_writer(
    path: PathLike,
    description: AudioDescription,
    fmt: Optional[str] = None,
    opener: Opener = BinaryFile.create,
) -> Union[WaveWriter, AiffWriter]:
    """
    Open a writer for ``path``.

    ``fmt`` overrides the format implied by the suffix.
    """
    key = normalize_format(fmt) if fmt else format_for_path(path)
    return FORMATS[key].create(path, description, opener=opener)


__all__ = ["FORMATS", "normalize_format", "writer_class_for", "format_for_path", "open_writer"]
