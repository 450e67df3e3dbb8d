"""Configuration objects and helpers for pcmexport.

Export defaults (container format, channel layout, sample rate, bit depth and
output directory) are read from a small YAML file into the typed
:class:`ExportConfig` dataclass (see :mod:`export`).
"""

from .export import ExportConfig, config_from_mapping, load_config

__all__ = ["ExportConfig", "config_from_mapping", "load_config"]
