"""Synthesis run use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from decode_planner.configuration import ConfigurationError, OutputFormat, load_configuration
from decode_planner.plan_rendering import plan_to_dict, render_plan_outline
from decode_planner.plan_synthesis import ConfigError, Plan, synthesize_all
from decode_planner.schema_management import (
    RegistryError,
    Schema,
    SchemaDocumentError,
    build_registry,
    load_schema_file,
)

from .run_contracts import RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)


class SynthesisRunError(Exception):
    """Raised when a synthesis run cannot be completed."""


def execute_synthesis_run(request: RunRequest) -> RunOutcome:
    """Load the configuration, synthesize the selected types and write the output."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        raise SynthesisRunError(str(exc)) from exc

    output_format = request.output_format or configuration.output.format
    output_path = (
        Path(request.output_path) if request.output_path is not None else configuration.output.path
    )
    plans = synthesize_schema_files(configuration.schema_paths, configuration.type_names)
    rendered = render_plans(plans, output_format)
    if output_path is not None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            raise SynthesisRunError(f"Failed to write plans to {output_path}: {exc}") from exc
        output_path = output_path.resolve()
        _LOGGER.info("wrote %d plan(s) to %s", len(plans), output_path)

    debug = request.debug or configuration.debug
    return RunOutcome(
        plans=plans,
        rendered=rendered,
        output_path=output_path,
        debug_outline=render_plans(plans, OutputFormat.OUTLINE) if debug else None,
    )


def synthesize_schema_files(
    schema_paths: Sequence[Path | str], type_names: Sequence[str] | None = None
) -> tuple[Plan, ...]:
    """Register every type of every document, then synthesize the selected ones."""
    schemas: list[Schema] = []
    try:
        for schema_path in schema_paths:
            schemas.extend(load_schema_file(schema_path))
        registry = build_registry(schemas)
    except (SchemaDocumentError, RegistryError) as exc:
        raise SynthesisRunError(str(exc)) from exc
    _LOGGER.debug("registered %d type(s)", len(registry))

    try:
        return synthesize_all(registry, type_names)
    except ConfigError as exc:
        raise SynthesisRunError(str(exc)) from exc


def render_plans(plans: Sequence[Plan], output_format: OutputFormat) -> str:
    """Serialize plans in the requested output format."""
    if output_format is OutputFormat.OUTLINE:
        return "\n\n".join(render_plan_outline(plan) for plan in plans) + "\n"
    documents = [plan_to_dict(plan) for plan in plans]
    if output_format is OutputFormat.YAML:
        return yaml.safe_dump(documents, sort_keys=False)
    return json.dumps(documents, indent=2) + "\n"
