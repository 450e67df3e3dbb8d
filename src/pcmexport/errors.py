"""Exception hierarchy raised by the PCM writers."""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = [
    "PcmExportError",
    "IoFailure",
    "ChannelCountMismatch",
    "ChannelLengthMismatch",
    "UnsupportedBitDepth",
    "UnsupportedSampleRate",
    "InvalidChannelCount",
    "WriterStateError",
    "SizeLimitExceeded",
]


class PcmExportError(Exception):
    """Base class for every error raised by :mod:`pcmexport`."""


class IoFailure(PcmExportError):
    """
    The underlying file could not be created, written, patched or closed.

    The original :class:`OSError` is chained as ``__cause__`` and also kept on
    :attr:`cause`. It is ``None`` for short writes that did not raise.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ChannelCountMismatch(PcmExportError, ValueError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Description has {expected} channel(s) but {actual} stream(s) were supplied"
        )
        self.expected = expected
        self.actual = actual


class ChannelLengthMismatch(PcmExportError, ValueError):
    def __init__(self, lengths: Sequence[int]) -> None:
        super().__init__(f"Channels have different amounts of audio data: {list(lengths)}")
        self.lengths = tuple(lengths)


class UnsupportedBitDepth(PcmExportError, ValueError):
    def __init__(self, bits_per_sample: int) -> None:
        super().__init__(f"Unsupported bit depth: {bits_per_sample} (expected 8, 16 or 32)")
        self.bits_per_sample = bits_per_sample


class UnsupportedSampleRate(PcmExportError, ValueError):
    def __init__(self, sample_rate: int, reason: str = "unsupported") -> None:
        super().__init__(f"Unsupported sample rate {sample_rate} Hz: {reason}")
        self.sample_rate = sample_rate


class InvalidChannelCount(PcmExportError, ValueError):
    def __init__(self, channels: int) -> None:
        super().__init__(f"Channel count must be between 1 and 65535, got {channels}")
        self.channels = channels


class WriterStateError(PcmExportError, RuntimeError):
    """Operation called while the writer is in the wrong lifecycle state."""


class SizeLimitExceeded(PcmExportError, ValueError):
    """Payload would no longer fit the container's 32-bit size fields."""

    def __init__(self, requested: int, limit: int) -> None:
        super().__init__(f"Payload of {requested} bytes exceeds the {limit} byte container limit")
        self.requested = requested
        self.limit = limit
