"""Quantization and interleaving of normalized float samples."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .description import BPS8, BPS16, BPS32, AudioDescription
from .errors import ChannelCountMismatch, ChannelLengthMismatch, UnsupportedBitDepth

__all__ = [
    "LITTLE_ENDIAN",
    "BIG_ENDIAN",
    "ZERO_POINTS",
    "encode_samples",
    "interleave",
    "split_frames",
]

LITTLE_ENDIAN = "<"
BIG_ENDIAN = ">"

# (scale, offset, numpy type code) per bit depth; 8-bit PCM is unsigned.
_QUANTIZATION = {
    BPS8: (127.0, 127.0, "u1"),
    BPS16: (32767.0, 0.0, "i2"),
    BPS32: (2147483647.0, 0.0, "i4"),
}

ZERO_POINTS = {BPS8: 127, BPS16: 0, BPS32: 0}


def encode_samples(values, bits_per_sample: int, byteorder: str = LITTLE_ENDIAN) -> np.ndarray:
    """
    Quantize normalized samples to fixed-width integers.

    ``value`` maps to ``rint(value * scale + offset)`` with ``scale`` 127,
    32767 or 2147483647 and ``offset`` 127 for 8-bit data, 0 otherwise.

    Inputs are clipped to [-1.0, 1.0] first so out-of-range values saturate
    instead of wrapping around the integer type. NaN encodes as the zero
    point. The returned array keeps the shape of ``values``.
    """
    try:
        scale, offset, code = _QUANTIZATION[bits_per_sample]
    except KeyError:
        raise UnsupportedBitDepth(bits_per_sample) from None

    data = np.asarray(values, dtype=np.float64)
    data = np.nan_to_num(data, nan=0.0, posinf=1.0, neginf=-1.0)
    data = np.clip(data, -1.0, 1.0)
    quantized = np.rint(data * scale + offset)
    return quantized.astype(np.dtype(byteorder + code))


def interleave(
    channels: Sequence,
    description: AudioDescription,
    byteorder: str = LITTLE_ENDIAN,
) -> bytes:
    """
    Encode ``channels`` and mux them frame by frame into one byte string.

    Sample ``i`` of every channel (in channel order) precedes sample ``i + 1``
    of the first channel. All checks run before any encoding happens.
    """
    if len(channels) != description.channels:
        raise ChannelCountMismatch(description.channels, len(channels))

    arrays: List[np.ndarray] = [np.asarray(ch, dtype=np.float64).reshape(-1) for ch in channels]
    lengths = [arr.size for arr in arrays]
    if len(set(lengths)) > 1:
        raise ChannelLengthMismatch(lengths)
    if description.bits_per_sample not in _QUANTIZATION:
        raise UnsupportedBitDepth(description.bits_per_sample)

    if not arrays or lengths[0] == 0:
        return b""

    # Row-major (frames, channels) layout is already the interleaved order.
    frames = np.stack(arrays, axis=1)
    return encode_samples(frames, description.bits_per_sample, byteorder).tobytes()


def split_frames(frames, channels: int) -> List[np.ndarray]:
    """Turn a ``(frames, channels)`` block into a list of per-channel arrays."""
    block = np.asarray(frames, dtype=np.float64)
    if block.ndim == 1:
        if channels != 1:
            raise ChannelCountMismatch(channels, 1)
        return [block]
    if block.ndim != 2:
        raise ValueError(f"Expected a 1-D or 2-D frame block, got {block.ndim} dimensions")
    return [block[:, idx] for idx in range(block.shape[1])]
