"""Streaming writer for uncompressed RIFF/WAVE files.

Layout (little-endian)::

    0   "RIFF"      4   riff size (patched: payload + 36)   8   "WAVE"
    12  "fmt "      16  16    20 format tag (1 = PCM)    22 channels
    24  sample rate 28  byte rate   32 block align   34 bits per sample
    36  "data"      40  data size (patched: payload)
    44  sample payload
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import List, Optional

from .base import PathLike, WriterState
from .description import AudioDescription
from .encoding import LITTLE_ENDIAN, interleave, split_frames
from .errors import IoFailure, PcmExportError, WriterStateError
from .fileio import BinaryFile, Opener
from .stream import Patch, StreamWriter

__all__ = ["WaveWriter", "build_wave_header", "wave_patches"]

logger = logging.getLogger(__name__)

WAVE_FORMAT_PCM = 1
FMT_CHUNK_SIZE = 16

RIFF_SIZE_OFFSET = 4
DATA_SIZE_OFFSET = 40
HEADER_SIZE = 44

# Bytes counted by the RIFF size field on top of the sample payload.
RIFF_SIZE_OVERHEAD = HEADER_SIZE - 8

MAX_PAYLOAD = 0xFFFFFFFF - RIFF_SIZE_OVERHEAD


def build_wave_header(description: AudioDescription) -> bytes:
    """Provisional header with zeroed size fields."""
    riff = b"RIFF" + struct.pack("<I", 0) + b"WAVE"
    fmt = b"fmt " + struct.pack(
        "<IHHIIHH",
        FMT_CHUNK_SIZE,
        WAVE_FORMAT_PCM,
        description.channels,
        description.sample_rate,
        description.byte_rate,
        description.block_align,
        description.bits_per_sample,
    )
    data = b"data" + struct.pack("<I", 0)
    return riff + fmt + data


def wave_patches(payload_bytes: int) -> List[Patch]:
    """Header fields to overwrite once the payload size is known."""
    return [
        (DATA_SIZE_OFFSET, struct.pack("<I", payload_bytes)),
        (RIFF_SIZE_OFFSET, struct.pack("<I", payload_bytes + RIFF_SIZE_OVERHEAD)),
    ]


class WaveWriter:
    """
    Writes an uncompressed ``.wav`` file incrementally.

    Call :meth:`open`, then :meth:`write_channels` / :meth:`write_bytes` as
    often as needed, then :meth:`close` to fill in the header sizes. A writer
    is single use: once closed it cannot be reopened.
    """

    def __init__(self, opener: Opener = BinaryFile.create) -> None:
        self._opener = opener
        self._state = WriterState.UNOPENED
        self._stream: Optional[StreamWriter] = None
        self._description: Optional[AudioDescription] = None
        self._path: Optional[Path] = None
        self._bytes_written = 0

    @classmethod
    def create(
        cls, path: PathLike, description: AudioDescription, opener: Opener = BinaryFile.create
    ) -> "WaveWriter":
        """Construct and open a writer in one step."""
        writer = cls(opener=opener)
        writer.open(path, description)
        return writer

    # ------------------------------------------------------------------ properties
    @property
    def description(self) -> Optional[AudioDescription]:
        return self._description

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def bytes_written(self) -> int:
        if self._stream is not None:
            return self._stream.bytes_written
        return self._bytes_written

    @property
    def frames_written(self) -> int:
        if self._description is None:
            return 0
        return self.bytes_written // self._description.block_align

    @property
    def is_open(self) -> bool:
        return self._state is WriterState.OPEN

    @property
    def is_closed(self) -> bool:
        return self._state is WriterState.CLOSED

    # ------------------------------------------------------------------ lifecycle
    def open(self, path: PathLike, description: AudioDescription) -> None:
        """Create ``path`` and write the provisional header."""
        if self._state is not WriterState.UNOPENED:
            raise WriterStateError(f"open() is not allowed on a {self._state.value} writer")
        description.validate()

        path = Path(path)
        header = build_wave_header(description)
        try:
            handle = self._opener(path)
        except OSError as exc:
            raise IoFailure(f"Could not create {path}: {exc}", exc) from exc

        stream = StreamWriter(handle, path, MAX_PAYLOAD)
        try:
            stream.write_header(header)
        except IoFailure:
            stream.abort()
            self._state = WriterState.CLOSED
            raise

        self._stream = stream
        self._description = description
        self._path = path
        self._bytes_written = 0
        self._state = WriterState.OPEN
        logger.debug(
            "Opened %s (%d ch, %d Hz, %d-bit)",
            path,
            description.channels,
            description.sample_rate,
            description.bits_per_sample,
        )

    def write_bytes(self, data: bytes) -> None:
        """
        Append already-muxed sample bytes.

        ``data`` must support the buffer protocol (bytes, bytearray, numpy
        arrays). Only bytes the file actually accepted are counted, even when
        the write fails part way.
        """
        stream = self._require_open("write_bytes")
        stream.write(memoryview(data).tobytes())

    def write_channels(self, *channels) -> None:
        """
        Quantize, interleave and append one sequence per channel.

        Values are nominally in [-1.0, 1.0]; anything outside is clipped.
        Nothing is written when the channel count or lengths do not match.
        """
        stream = self._require_open("write_channels")
        assert self._description is not None
        stream.write(interleave(channels, self._description, LITTLE_ENDIAN))

    def write_frames(self, frames) -> None:
        """Append a ``(frames, channels)`` block of normalized samples."""
        self._require_open("write_frames")
        assert self._description is not None
        self.write_channels(*split_frames(frames, self._description.channels))

    def close(self) -> None:
        """Patch the RIFF and data sizes and release the file."""
        stream = self._require_open("close")
        self._bytes_written = stream.bytes_written
        self._state = WriterState.CLOSED
        self._stream = None
        try:
            stream.finalize(wave_patches(self._bytes_written))
        except PcmExportError:
            logger.debug("Closing %s failed; the file may be malformed", self._path)
            raise
        logger.debug("Closed %s after %d payload bytes", self._path, self._bytes_written)

    # ------------------------------------------------------------------ helpers
    def _require_open(self, operation: str) -> StreamWriter:
        if self._state is not WriterState.OPEN or self._stream is None:
            raise WriterStateError(f"{operation}() requires an open writer (state: {self._state.value})")
        return self._stream

    def __enter__(self) -> "WaveWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.is_open:
            return
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except PcmExportError as close_exc:
            logger.warning("Failed to finalize %s while handling %s: %s", self._path, exc_type.__name__, close_exc)
