"""Streaming writer for uncompressed AIFF files.

Layout (big-endian)::

    0   "FORM"   4   form size (patched: payload + 46)   8   "AIFF"
    12  "COMM"   16  18   20 channels   22 sample frames (patched)
    26  bits per sample   28 sample rate, 80-bit extended
    38  "SSND"   42  ssnd size (patched: payload + 8)
    46  offset (0)   50  block size (0)
    54  sample payload
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Dict, List, Optional

from .base import PathLike, WriterState
from .description import (
    SAMPLE_RATE_32K,
    SAMPLE_RATE_44_1K,
    SAMPLE_RATE_48K,
    SAMPLE_RATE_96K,
    SAMPLE_RATE_192K,
    AudioDescription,
)
from .encoding import BIG_ENDIAN, interleave, split_frames
from .errors import IoFailure, PcmExportError, UnsupportedSampleRate, WriterStateError
from .fileio import BinaryFile, Opener
from .stream import Patch, StreamWriter

__all__ = ["AiffWriter", "EXTENDED_SAMPLE_RATES", "build_aiff_header", "aiff_patches"]

logger = logging.getLogger(__name__)

COMM_CHUNK_SIZE = 18

FORM_SIZE_OFFSET = 4
SAMPLE_FRAMES_OFFSET = 22
SSND_SIZE_OFFSET = 42
HEADER_SIZE = 54

FORM_SIZE_OVERHEAD = 46
# offset + block size words live inside the SSND chunk ahead of the samples
SSND_SIZE_OVERHEAD = 8

MAX_PAYLOAD = 0xFFFFFFFF - FORM_SIZE_OVERHEAD

# IEEE 754 80-bit extended encodings of the supported rates.
EXTENDED_SAMPLE_RATES: Dict[int, bytes] = {
    SAMPLE_RATE_32K: bytes([0x40, 0x0D, 0xFA, 0x00, 0, 0, 0, 0, 0, 0]),
    SAMPLE_RATE_44_1K: bytes([0x40, 0x0E, 0xAC, 0x44, 0, 0, 0, 0, 0, 0]),
    SAMPLE_RATE_48K: bytes([0x40, 0x0E, 0xBB, 0x80, 0, 0, 0, 0, 0, 0]),
    SAMPLE_RATE_96K: bytes([0x40, 0x0F, 0xBB, 0x80, 0, 0, 0, 0, 0, 0]),
    SAMPLE_RATE_192K: bytes([0x40, 0x10, 0xBB, 0x80, 0, 0, 0, 0, 0, 0]),
}


def extended_sample_rate(sample_rate: int) -> bytes:
    try:
        return EXTENDED_SAMPLE_RATES[sample_rate]
    except KeyError:
        supported = ", ".join(str(rate) for rate in EXTENDED_SAMPLE_RATES)
        raise UnsupportedSampleRate(sample_rate, f"AIFF supports {supported}") from None


def build_aiff_header(description: AudioDescription) -> bytes:
    """Provisional header with zeroed size and frame-count fields."""
    form = b"FORM" + struct.pack(">I", 0) + b"AIFF"
    comm = (
        b"COMM"
        + struct.pack(">IHIH", COMM_CHUNK_SIZE, description.channels, 0, description.bits_per_sample)
        + extended_sample_rate(description.sample_rate)
    )
    ssnd = b"SSND" + struct.pack(">III", 0, 0, 0)
    return form + comm + ssnd


def aiff_patches(payload_bytes: int, bits_per_sample: int) -> List[Patch]:
    """Header fields to overwrite once the payload size is known."""
    sample_frames = payload_bytes // (bits_per_sample // 8)
    return [
        (SSND_SIZE_OFFSET, struct.pack(">I", payload_bytes + SSND_SIZE_OVERHEAD)),
        (SAMPLE_FRAMES_OFFSET, struct.pack(">I", sample_frames)),
        (FORM_SIZE_OFFSET, struct.pack(">I", payload_bytes + FORM_SIZE_OVERHEAD)),
    ]


class AiffWriter:
    """
    Writes an uncompressed ``.aiff`` file incrementally.

    Only the sample rates in :data:`EXTENDED_SAMPLE_RATES` can be written;
    anything else fails in :meth:`open` before the file is created.
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
    ) -> "AiffWriter":
        writer = cls(opener=opener)
        writer.open(path, description)
        return writer

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

    def open(self, path: PathLike, description: AudioDescription) -> None:
        if self._state is not WriterState.UNOPENED:
            raise WriterStateError(f"open() is not allowed on a {self._state.value} writer")
        description.validate()

        path = Path(path)
        header = build_aiff_header(description)
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
        """Append already-muxed big-endian sample bytes."""
        stream = self._require_open("write_bytes")
        stream.write(memoryview(data).tobytes())

    def write_channels(self, *channels) -> None:
        stream = self._require_open("write_channels")
        assert self._description is not None
        stream.write(interleave(channels, self._description, BIG_ENDIAN))

    def write_frames(self, frames) -> None:
        self._require_open("write_frames")
        assert self._description is not None
        self.write_channels(*split_frames(frames, self._description.channels))

    def close(self) -> None:
        """Patch the SSND size, frame count and FORM size, then release the file."""
        stream = self._require_open("close")
        assert self._description is not None
        self._bytes_written = stream.bytes_written
        self._state = WriterState.CLOSED
        self._stream = None
        try:
            stream.finalize(aiff_patches(self._bytes_written, self._description.bits_per_sample))
        except PcmExportError:
            logger.debug("Closing %s failed; the file may be malformed", self._path)
            raise
        logger.debug("Closed %s after %d payload bytes", self._path, self._bytes_written)

    def _require_open(self, operation: str) -> StreamWriter:
        if self._state is not WriterState.OPEN or self._stream is None:
            raise WriterStateError(f"{operation}() requires an open writer (state: {self._state.value})")
        return self._stream

    def __enter__(self) -> "AiffWriter":
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
