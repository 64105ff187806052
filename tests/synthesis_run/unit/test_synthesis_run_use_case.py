"""Synthesis run use-case tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from decode_planner.configuration.runtime_settings import OutputFormat
from decode_planner.synthesis_run import (
    RunRequest,
    SynthesisRunError,
    execute_synthesis_run,
    synthesize_schema_files,
)

_HEADER_DOCUMENT = """
types:
  - record: Header
    fields:
      - name: length
        type: u16
      - name: body
        type: Body
"""

_BODY_DOCUMENT = """
types:
  - union: Body
    directives: {repr: u16}
    variants:
      - name: Empty
      - name: Full
"""


def _write_schemas(tmp_path: Path) -> tuple[Path, Path]:
    header_path = tmp_path / "header.yaml"
    body_path = tmp_path / "body.yaml"
    header_path.write_text(_HEADER_DOCUMENT, encoding="utf-8")
    body_path.write_text(_BODY_DOCUMENT, encoding="utf-8")
    return header_path, body_path


def _write_config(tmp_path: Path, extra: str = "") -> Path:
    _write_schemas(tmp_path)
    config_path = tmp_path / "decode-planner.yaml"
    config_path.write_text(f"schemas: [header.yaml, body.yaml]\n{extra}", encoding="utf-8")
    return config_path


def test_types_from_later_documents_resolve(tmp_path: Path) -> None:
    plans = synthesize_schema_files(_write_schemas(tmp_path))

    assert [plan.type_name for plan in plans] == ["Header", "Body"]


def test_unresolved_reference_becomes_run_error(tmp_path: Path) -> None:
    header_path, _ = _write_schemas(tmp_path)

    with pytest.raises(SynthesisRunError, match="Header.body: type 'Body' is not registered"):
        synthesize_schema_files([header_path])


def test_duplicate_type_across_documents_becomes_run_error(tmp_path: Path) -> None:
    header_path, _ = _write_schemas(tmp_path)

    with pytest.raises(SynthesisRunError, match="more than once"):
        synthesize_schema_files([header_path, header_path])


def test_run_renders_json_to_stdout_by_default(tmp_path: Path) -> None:
    outcome = execute_synthesis_run(RunRequest(config_path=str(_write_config(tmp_path))))

    assert outcome.output_path is None
    assert outcome.type_names == ("Header", "Body")
    assert outcome.debug_outline is None
    documents = json.loads(outcome.rendered)
    assert documents[1]["arms"][1] == {
        "variant": "Full",
        "pattern": 1,
        "wildcard": False,
        "plan": {"kind": "record", "type": "Body.Full", "construction": "unit", "fields": []},
    }


def test_run_writes_configured_output(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path, "types: [Body]\noutput:\n  format: yaml\n  path: out/plans.yaml\n"
    )

    outcome = execute_synthesis_run(RunRequest(config_path=str(config_path)))

    assert outcome.output_path == (tmp_path / "out" / "plans.yaml").resolve()
    documents = yaml.safe_load(outcome.output_path.read_text(encoding="utf-8"))
    assert [document["type"] for document in documents] == ["Body"]


def test_request_overrides_configuration(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "output: {format: yaml}\n")
    output_path = tmp_path / "plans.txt"

    outcome = execute_synthesis_run(
        RunRequest(
            config_path=str(config_path),
            output_path=str(output_path),
            output_format=OutputFormat.OUTLINE,
            debug=True,
        )
    )

    text = output_path.read_text(encoding="utf-8")
    assert text.startswith("record Header (named)\n")
    assert "union Body (fieldless, discriminant u16 read as be_u16)" in text
    assert outcome.debug_outline == text


def test_invalid_configuration_becomes_run_error(tmp_path: Path) -> None:
    with pytest.raises(SynthesisRunError, match="Configuration file not found"):
        execute_synthesis_run(RunRequest(config_path=str(tmp_path / "missing.yaml")))
