from __future__ import annotations

import struct

from pcmexport.config import ExportConfig
from pcmexport.tools.tone import main, render_tone


def test_render_tone_writes_every_frame(tmp_path) -> None:
    cfg = ExportConfig(channels=1, sample_rate=48000, bits_per_sample=16).sanitized()
    path = tmp_path / "tone.wav"

    frames = render_tone(path, cfg, frequency=1000.0, seconds=0.2)

    assert frames == 9600
    data = path.read_bytes()
    assert len(data) == 44 + 9600 * 2
    assert struct.unpack_from("<I", data, 40)[0] == 9600 * 2


def test_main_infers_format_from_suffix(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("PCMEXPORT_OUTPUT_DIR", raising=False)
    out = tmp_path / "tone.aiff"

    assert main(["--out", str(out), "--seconds", "0.01"]) == 0

    data = out.read_bytes()
    assert data[:4] == b"FORM"
    assert len(data) == 54 + 480 * 2 * 2


def test_main_uses_configured_output_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("PCMEXPORT_OUTPUT_DIR", str(tmp_path / "renders"))

    assert main(["--format", "wav", "--frequency", "220", "--seconds", "0.01"]) == 0

    assert (tmp_path / "renders" / "tone_220hz.wav").exists()


def test_main_reports_unsupported_rate(tmp_path) -> None:
    cfg = tmp_path / "export.yaml"
    cfg.write_text("format: aiff\nsample_rate: 22050\n", encoding="utf-8")
    out = tmp_path / "bad.aiff"

    assert main(["--config", str(cfg), "--out", str(out)]) == 1
    assert not out.exists()


def test_main_reports_malformed_yaml(tmp_path) -> None:
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("format: [wave\n", encoding="utf-8")
    out = tmp_path / "never.wav"

    assert main(["--config", str(cfg), "--out", str(out)]) == 1
    assert not out.exists()
