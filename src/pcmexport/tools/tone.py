#!/usr/bin/env python3
"""
Render a sine test tone with the configured export settings.

Examples::

    python -m pcmexport.tools.tone --out tone.wav --frequency 440 --seconds 2
    python -m pcmexport.tools.tone --config export.yaml --format aiff

Without ``--out`` the file lands in the configured output directory as
``tone_<frequency>hz`` with the suffix of the chosen format.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import yaml

from ..config import ExportConfig, load_config
from ..errors import PcmExportError
from ..factory import format_for_path, open_writer

logger = logging.getLogger(__name__)

# Frames rendered per write call.
BLOCK_FRAMES = 4096


def render_tone(
    path: Path,
    cfg: ExportConfig,
    frequency: float = 440.0,
    seconds: float = 1.0,
    amplitude: float = 0.5,
    fmt: Optional[str] = None,
) -> int:
    """Write a sine tone to every channel of ``path`` and return the frame count."""
    description = cfg.description()
    total_frames = int(round(seconds * description.sample_rate))
    step = 2.0 * np.pi * frequency / description.sample_rate

    with open_writer(path, description, fmt=fmt or cfg.format) as writer:
        for start in range(0, total_frames, BLOCK_FRAMES):
            n = min(BLOCK_FRAMES, total_frames - start)
            block = amplitude * np.sin(step * np.arange(start, start + n, dtype=np.float64))
            writer.write_channels(*([block] * description.channels))
        frames = writer.frames_written
    return frames


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a PCM sine tone to WAVE or AIFF.")
    parser.add_argument("-c", "--config", type=str, default=None, help="YAML file with export defaults")
    parser.add_argument("-o", "--out", type=str, default=None, help="Output file (default: <output_dir>/tone_<f>hz)")
    parser.add_argument(
        "-F",
        "--format",
        type=str,
        choices=["wave", "wav", "aiff", "aif"],
        default=None,
        help="Container format (default: from config)",
    )
    parser.add_argument("-f", "--frequency", type=float, default=440.0, help="Tone frequency in Hz (default: 440)")
    parser.add_argument("-s", "--seconds", type=float, default=1.0, help="Duration in seconds (default: 1)")
    parser.add_argument("-a", "--amplitude", type=float, default=0.5, help="Peak amplitude, 0..1 (default: 0.5)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (default: INFO)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not load config %s: %s", args.config, exc)
        return 1
    fmt = args.format
    if fmt is None and args.out:
        try:
            fmt = format_for_path(args.out)
        except ValueError:
            fmt = None

    out = Path(args.out) if args.out else cfg.output_path(f"tone_{int(args.frequency)}hz", fmt)
    try:
        frames = render_tone(out, cfg, args.frequency, args.seconds, args.amplitude, fmt)
    except PcmExportError as exc:
        logger.error("Failed to render %s: %s", out, exc)
        return 1

    logger.info("Wrote %d frames to %s", frames, out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
