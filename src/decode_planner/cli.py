"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from decode_planner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    OutputFormat,
    write_placeholder_configuration,
)
from decode_planner.synthesis_run import (
    RunRequest,
    SynthesisRunError,
    execute_synthesis_run,
    render_plans,
    synthesize_schema_files,
)

_FORMAT_CHOICE = click.Choice([item.value for item in OutputFormat], case_sensitive=False)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="decode-planner")
def cli() -> None:
    """Synthesize binary decoding plans from record and union schemas."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="plan")
@click.option(
    "--schema",
    "schema_paths",
    required=True,
    multiple=True,
    type=click.Path(path_type=str),
    help="Schema document to register (repeatable)",
)
@click.option(
    "--type",
    "type_names",
    multiple=True,
    help="Type to synthesize (repeatable); defaults to every registered type",
)
@click.option(
    "--format",
    "output_format",
    default=OutputFormat.OUTLINE.value,
    show_default=True,
    type=_FORMAT_CHOICE,
    help="Output format for the synthesized plans",
)
@click.option("--debug", is_flag=True, default=False, help="Log synthesis decisions on stderr.")
def plan(
    schema_paths: tuple[str, ...], type_names: tuple[str, ...], output_format: str, debug: bool
) -> None:
    """Synthesize plans directly from schema documents and print them."""
    _configure_logging(debug)
    try:
        plans = synthesize_schema_files(schema_paths, type_names or None)
    except SynthesisRunError as exc:
        raise CliError(str(exc)) from exc
    click.echo(render_plans(plans, OutputFormat(output_format.lower())), nl=False)


@cli.command(name="synthesize")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write plans here instead of the configured output path",
)
@click.option(
    "--format",
    "output_format",
    required=False,
    type=_FORMAT_CHOICE,
    help="Override the configured output format",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log synthesis decisions and print plan outlines on stderr.",
)
def synthesize(
    config_path: str, output_path: str | None, output_format: str | None, debug: bool
) -> None:
    """Synthesize the plans selected by a configuration file."""
    _configure_logging(debug)
    try:
        outcome = execute_synthesis_run(
            RunRequest(
                config_path=config_path,
                output_path=output_path,
                output_format=OutputFormat(output_format.lower()) if output_format else None,
                debug=debug,
            )
        )
    except SynthesisRunError as exc:
        raise CliError(str(exc)) from exc
    if outcome.debug_outline is not None:
        click.echo(outcome.debug_outline, err=True, nl=False)
    if outcome.output_path is None:
        click.echo(outcome.rendered, nl=False)
    else:
        click.echo(str(outcome.output_path))


class _ClickEchoHandler(logging.Handler):
    """Logging handler writing through click so redirected stderr is honored."""

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(self.format(record), err=True)


def _configure_logging(debug: bool) -> None:
    logger = logging.getLogger("decode_planner")
    logger.setLevel(logging.DEBUG if debug else logging.NOTSET)
    if not debug or any(isinstance(handler, _ClickEchoHandler) for handler in logger.handlers):
        return
    handler = _ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
