"""Export defaults loaded from YAML."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..description import BPS16, SAMPLE_RATE_48K, AudioDescription
from ..factory import normalize_format

OUTPUT_DIR_ENV = "PCMEXPORT_OUTPUT_DIR"


@dataclass(slots=True)
class ExportConfig:
    """
    Defaults used when rendering audio to disk.

    ``PCMEXPORT_OUTPUT_DIR`` overrides ``output_dir`` when set.
    """

    format: str = "wave"
    channels: int = 2
    sample_rate: int = SAMPLE_RATE_48K
    bits_per_sample: int = BPS16
    output_dir: Path = Path("exports")

    def sanitized(self) -> ExportConfig:
        """Return a copy with normalized types and the env override applied."""
        env_dir = os.environ.get(OUTPUT_DIR_ENV)
        output_dir = Path(env_dir) if env_dir else Path(self.output_dir)
        return ExportConfig(
            format=normalize_format(self.format),
            channels=int(self.channels),
            sample_rate=int(self.sample_rate),
            bits_per_sample=int(self.bits_per_sample),
            output_dir=output_dir.expanduser(),
        )

    def description(self) -> AudioDescription:
        return AudioDescription(
            channels=int(self.channels),
            sample_rate=int(self.sample_rate),
            bits_per_sample=int(self.bits_per_sample),
        )

    def output_path(self, stem: str, fmt: str | None = None) -> Path:
        """``output_dir / stem`` with the suffix of ``fmt`` (default :attr:`format`)."""
        suffix = ".wav" if normalize_format(fmt or self.format) == "wave" else ".aiff"
        return Path(self.output_dir) / f"{stem}{suffix}"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> ExportConfig:
        """
        Construct an ExportConfig from a mapping such as ``export.yaml``.

        Keys may sit at the top level or inside an ``export`` block; the
        block wins when both are present. Unknown keys are ignored::

            export:
              format: aiff
              channels: 2
              sample_rate: 44100
              bits_per_sample: 16
              output_dir: ~/renders
        """
        payload: Mapping[str, Any] = mapping or {}
        block = payload.get("export")
        sources = [payload, block] if isinstance(block, Mapping) else [payload]

        values: dict[str, Any] = {}
        for source in sources:
            for key in _FIELD_NAMES:
                if key in source:
                    values[key] = source[key]
        return cls(**values).sanitized()


_FIELD_NAMES = tuple(f.name for f in fields(ExportConfig))


def config_from_mapping(data: Mapping[str, Any] | None) -> ExportConfig:
    """Shorthand for :meth:`ExportConfig.from_mapping`."""
    return ExportConfig.from_mapping(data)


def load_config(path: str | Path | None) -> ExportConfig:
    """
    Read ``path`` as YAML and build an :class:`ExportConfig`.

    ``None`` or a missing file yields the defaults. Malformed YAML raises
    :class:`yaml.YAMLError`; a document that is not a mapping raises
    :class:`ValueError`.
    """
    if path is None or not Path(path).exists():
        return ExportConfig.from_mapping(None)
    with Path(path).open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is not None and not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {path}, got {type(raw).__name__}")
    return ExportConfig.from_mapping(raw)


__all__ = ["ExportConfig", "config_from_mapping", "load_config", "OUTPUT_DIR_ENV"]
