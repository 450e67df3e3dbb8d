import pathlib
import sys
import unittest

import numpy as np

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pcmexport.description import AudioDescription  # noqa: E402
from pcmexport.encoding import (  # noqa: E402
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    ZERO_POINTS,
    encode_samples,
    interleave,
    split_frames,
)
from pcmexport.errors import (  # noqa: E402
    ChannelCountMismatch,
    ChannelLengthMismatch,
    UnsupportedBitDepth,
)


class EncodeSamplesTest(unittest.TestCase):
    def test_zero_maps_to_zero_point(self):
        for bits, zero in ZERO_POINTS.items():
            encoded = encode_samples([0.0], bits)
            self.assertEqual(int(encoded[0]), zero, msg=f"{bits}-bit")
        self.assertEqual(ZERO_POINTS, {8: 127, 16: 0, 32: 0})

    def test_full_scale_16_bit(self):
        encoded = encode_samples([1.0, -1.0, 0.5], 16)
        self.assertEqual(encoded.tolist(), [32767, -32767, 16384])
        self.assertEqual(encoded.dtype, np.dtype("<i2"))

    def test_full_scale_8_bit_is_unsigned(self):
        encoded = encode_samples([1.0, -1.0, 0.0], 8)
        self.assertEqual(encoded.tolist(), [254, 0, 127])
        self.assertEqual(encoded.dtype, np.uint8)

    def test_full_scale_32_bit(self):
        encoded = encode_samples([1.0, -1.0], 32, BIG_ENDIAN)
        self.assertEqual(encoded.tolist(), [2147483647, -2147483647])
        self.assertEqual(encoded.dtype, np.dtype(">i4"))

    def test_out_of_range_values_are_clipped(self):
        self.assertEqual(encode_samples([2.0, -3.0], 16).tolist(), [32767, -32767])
        self.assertEqual(encode_samples([1.5, -1.5], 8).tolist(), [254, 0])

    def test_nan_encodes_as_zero_point(self):
        self.assertEqual(encode_samples([float("nan")], 8).tolist(), [127])
        self.assertEqual(encode_samples([float("nan")], 16).tolist(), [0])

    def test_unsupported_bit_depth(self):
        with self.assertRaises(UnsupportedBitDepth) as ctx:
            encode_samples([0.0], 24)
        self.assertEqual(ctx.exception.bits_per_sample, 24)


class InterleaveTest(unittest.TestCase):
    def test_frames_are_interleaved_in_channel_order(self):
        desc = AudioDescription(channels=3, sample_rate=48000, bits_per_sample=8)
        data = interleave([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]], desc)
        self.assertEqual(list(data), [254, 0, 127, 127, 127, 254])

    def test_stereo_16_bit_little_endian(self):
        desc = AudioDescription(channels=2, sample_rate=48000, bits_per_sample=16)
        data = interleave([[0.5], [-0.5]], desc, LITTLE_ENDIAN)
        self.assertEqual(data, b"\x00\x40\x00\xc0")

    def test_stereo_16_bit_big_endian(self):
        desc = AudioDescription(channels=2, sample_rate=48000, bits_per_sample=16)
        data = interleave([[0.5], [-0.5]], desc, BIG_ENDIAN)
        self.assertEqual(data, b"\x40\x00\xc0\x00")

    def test_numpy_channels_are_accepted(self):
        desc = AudioDescription(channels=1, sample_rate=48000, bits_per_sample=32)
        data = interleave([np.zeros(4, dtype=np.float32)], desc)
        self.assertEqual(data, b"\x00" * 16)

    def test_empty_channels_produce_no_bytes(self):
        desc = AudioDescription(channels=2, sample_rate=48000, bits_per_sample=16)
        self.assertEqual(interleave([[], []], desc), b"")

    def test_channel_count_mismatch(self):
        desc = AudioDescription(channels=2, sample_rate=48000, bits_per_sample=16)
        with self.assertRaises(ChannelCountMismatch) as ctx:
            interleave([[0.0, 0.1]], desc)
        self.assertEqual((ctx.exception.expected, ctx.exception.actual), (2, 1))

    def test_channel_length_mismatch(self):
        desc = AudioDescription(channels=2, sample_rate=48000, bits_per_sample=16)
        with self.assertRaises(ChannelLengthMismatch) as ctx:
            interleave([[0.0, 0.1], [0.0]], desc)
        self.assertEqual(ctx.exception.lengths, (2, 1))

    def test_split_frames_returns_columns(self):
        block = np.array([[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]])
        left, right = split_frames(block, 2)
        np.testing.assert_array_equal(left, [0.1, 0.3, 0.5])
        np.testing.assert_array_equal(right, [0.2, 0.4, 0.6])

    def test_split_frames_mono_vector(self):
        (mono,) = split_frames([0.1, 0.2], 1)
        np.testing.assert_array_equal(mono, [0.1, 0.2])
        with self.assertRaises(ChannelCountMismatch):
            split_frames([0.1, 0.2], 2)


if __name__ == "__main__":
    unittest.main()
