"""Synthesis run domain exports."""

from .run_contracts import RunOutcome, RunRequest
from .synthesis_run_use_case import (
    SynthesisRunError,
    execute_synthesis_run,
    render_plans,
    synthesize_schema_files,
)

__all__ = [
    "RunRequest",
    "RunOutcome",
    "SynthesisRunError",
    "execute_synthesis_run",
    "render_plans",
    "synthesize_schema_files",
]
