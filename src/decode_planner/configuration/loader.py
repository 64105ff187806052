"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, OutputFormat, OutputSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    return Configuration(
        path=path,
        schema_paths=_parse_schema_paths(parsed.get("schemas"), base_path),
        type_names=_parse_type_names(parsed.get("types")),
        output=_parse_output_section(parsed.get("output"), base_path),
        debug=_optional_bool(parsed.get("debug"), "debug"),
    )


def _parse_schema_paths(value: Any, base_path: Path) -> tuple[Path, ...]:
    entries = _normalize_string_sequence(value, "schemas")
    if not entries:
        raise ConfigurationError("schemas must list at least one schema file.")
    paths: list[Path] = []
    for entry in entries:
        schema_path = _resolve_path(base_path, entry)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        paths.append(schema_path)
    return tuple(paths)


def _parse_type_names(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    names = _normalize_string_sequence(value, "types")
    if not names:
        raise ConfigurationError("types must not be empty when given.")
    return names


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    if value is None:
        return OutputSettings(format=OutputFormat.JSON, path=None)
    if not isinstance(value, Mapping):
        raise ConfigurationError("Configuration section 'output' must be a mapping.")
    raw_format = _require_non_empty_string(value.get("format", "json"), "output.format").lower()
    try:
        output_format = OutputFormat(raw_format)
    except ValueError as exc:
        choices = ", ".join(item.value for item in OutputFormat)
        raise ConfigurationError(f"output.format must be one of: {choices}.") from exc
    raw_path = value.get("path")
    output_path = (
        None
        if raw_path is None
        else _resolve_path(base_path, _require_non_empty_string(raw_path, "output.path"))
    )
    return OutputSettings(format=output_format, path=output_path)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
