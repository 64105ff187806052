"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "decode-planner.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Synthesis configuration for decode-planner.
# Replace every <REQUIRED> placeholder before running synthesize.
# Remove <OPTIONAL> entries you do not need.

# Schema documents to register. Paths are relative to this file.
# Every type of every document is registered before synthesis starts.
schemas:
  - "<REQUIRED>"

# Types to synthesize. Omit to synthesize every registered type.
# types:
#   - "<OPTIONAL>"

output:
  # One of: json, yaml, outline.
  format: json
  # Omit to print plans on standard output.
  # path: "<OPTIONAL>"

# Log synthesis decisions and print plan outlines on standard error.
debug: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
