"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OutputFormat(str, Enum):
    """Supported plan output formats."""

    JSON = "json"
    YAML = "yaml"
    OUTLINE = "outline"


@dataclass(frozen=True)
class OutputSettings:
    """Where and how synthesized plans are written."""

    format: OutputFormat
    path: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema_paths: tuple[Path, ...]
    type_names: tuple[str, ...] | None
    output: OutputSettings
    debug: bool
