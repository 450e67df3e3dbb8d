from __future__ import annotations

import pytest

from pcmexport import AiffWriter, AudioDescription, WaveWriter, open_writer
from pcmexport.factory import format_for_path, normalize_format, writer_class_for


@pytest.mark.parametrize(
    "name, expected",
    [("wave", "wave"), ("WAV", "wave"), (".aif", "aiff"), ("aiff", "aiff")],
)
def test_normalize_format(name: str, expected: str) -> None:
    assert normalize_format(name) == expected


def test_writer_class_for() -> None:
    assert writer_class_for("wav") is WaveWriter
    assert writer_class_for("aiff") is AiffWriter
    with pytest.raises(ValueError):
        writer_class_for("mp3")


def test_format_for_path() -> None:
    assert format_for_path("a/b/take.WAV") == "wave"
    assert format_for_path("take.aif") == "aiff"
    with pytest.raises(ValueError):
        format_for_path("take.ogg")


def test_open_writer_picks_by_suffix(tmp_path) -> None:
    desc = AudioDescription(1, 48000, 16)
    with open_writer(tmp_path / "a.aiff", desc) as writer:
        assert isinstance(writer, AiffWriter)
        assert writer.is_open
    assert (tmp_path / "a.aiff").read_bytes()[:4] == b"FORM"


def test_open_writer_format_overrides_suffix(tmp_path) -> None:
    desc = AudioDescription(1, 48000, 16)
    with open_writer(tmp_path / "a.bin", desc, fmt="wav") as writer:
        assert isinstance(writer, WaveWriter)
    assert (tmp_path / "a.bin").read_bytes()[:4] == b"RIFF"
