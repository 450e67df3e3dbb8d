"""Streaming writers for uncompressed PCM audio containers.

Two independent writers share one protocol (:class:`~pcmexport.base.AudioFile`):
- :class:`WaveWriter` emits little-endian RIFF/WAVE files.
- :class:`AiffWriter` emits big-endian AIFF files.

Both write a provisional header at ``open``, append samples with
``write_channels``/``write_bytes`` and patch the size fields at ``close``.
"""

from .aifffile import AiffWriter
from .base import AudioFile, WriterState
from .description import (
    BPS8,
    BPS16,
    BPS32,
    SAMPLE_RATE_32K,
    SAMPLE_RATE_44_1K,
    SAMPLE_RATE_48K,
    SAMPLE_RATE_96K,
    SAMPLE_RATE_192K,
    STANDARD_SAMPLE_RATES,
    SUPPORTED_BIT_DEPTHS,
    AudioDescription,
)
from .encoding import encode_samples, interleave
from .errors import (
    ChannelCountMismatch,
    ChannelLengthMismatch,
    InvalidChannelCount,
    IoFailure,
    PcmExportError,
    SizeLimitExceeded,
    UnsupportedBitDepth,
    UnsupportedSampleRate,
    WriterStateError,
)
from .factory import open_writer
from .wavefile import WaveWriter

__all__ = [
    "AiffWriter",
    "WaveWriter",
    "AudioFile",
    "WriterState",
    "AudioDescription",
    "open_writer",
    "encode_samples",
    "interleave",
    "BPS8",
    "BPS16",
    "BPS32",
    "SUPPORTED_BIT_DEPTHS",
    "SAMPLE_RATE_32K",
    "SAMPLE_RATE_44_1K",
    "SAMPLE_RATE_48K",
    "SAMPLE_RATE_96K",
    "SAMPLE_RATE_192K",
    "STANDARD_SAMPLE_RATES",
    "PcmExportError",
    "IoFailure",
    "ChannelCountMismatch",
    "ChannelLengthMismatch",
    "UnsupportedBitDepth",
    "UnsupportedSampleRate",
    "InvalidChannelCount",
    "SizeLimitExceeded",
    "WriterStateError",
]
