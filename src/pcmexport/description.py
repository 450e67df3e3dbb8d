"""Audio format description shared by the WAVE and AIFF writers."""

from __future__ import annotations

import numbers
from dataclasses import dataclass

from .errors import InvalidChannelCount, UnsupportedBitDepth, UnsupportedSampleRate

# Most common sample rates. 48 kHz is a sensible default for generic output.
SAMPLE_RATE_32K = 32000
SAMPLE_RATE_44_1K = 44100
SAMPLE_RATE_48K = 48000
SAMPLE_RATE_96K = 96000
SAMPLE_RATE_192K = 192000

STANDARD_SAMPLE_RATES = (
    SAMPLE_RATE_32K,
    SAMPLE_RATE_44_1K,
    SAMPLE_RATE_48K,
    SAMPLE_RATE_96K,
    SAMPLE_RATE_192K,
)

BPS8 = 8
BPS16 = 16
BPS32 = 32

SUPPORTED_BIT_DEPTHS = (BPS8, BPS16, BPS32)

MAX_CHANNELS = 0xFFFF
MAX_SAMPLE_RATE = 0xFFFFFFFF


def _is_int(value) -> bool:
    # bool is an Integral too; numpy integer scalars are accepted
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class AudioDescription:
    """
    Channel count, sample rate and bit depth of the PCM stream.

    Instances are plain values; :meth:`validate` is called by the writers at
    open time, before anything touches the disk.
    """

    channels: int
    sample_rate: int
    bits_per_sample: int

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def block_align(self) -> int:
        """Bytes per sample frame (one sample from every channel)."""
        return self.channels * self.bytes_per_sample

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    def validate(self) -> None:
        """Reject descriptions the writers cannot encode; only exact integers pass."""
        if not _is_int(self.channels) or not 1 <= self.channels <= MAX_CHANNELS:
            raise InvalidChannelCount(self.channels)
        if not _is_int(self.bits_per_sample) or self.bits_per_sample not in SUPPORTED_BIT_DEPTHS:
            raise UnsupportedBitDepth(self.bits_per_sample)
        if not _is_int(self.sample_rate) or not 0 < self.sample_rate <= MAX_SAMPLE_RATE:
            raise UnsupportedSampleRate(self.sample_rate, "must be a positive 32-bit integer")


__all__ = [
    "AudioDescription",
    "SAMPLE_RATE_32K",
    "SAMPLE_RATE_44_1K",
    "SAMPLE_RATE_48K",
    "SAMPLE_RATE_96K",
    "SAMPLE_RATE_192K",
    "STANDARD_SAMPLE_RATES",
    "BPS8",
    "BPS16",
    "BPS32",
    "SUPPORTED_BIT_DEPTHS",
]
