"""Synthesis run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from decode_planner.configuration.runtime_settings import OutputFormat
from decode_planner.plan_synthesis.plan_models import Plan


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one configured run."""

    config_path: str
    output_path: str | None = None
    output_format: OutputFormat | None = None
    debug: bool = False


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    plans: tuple[Plan, ...]
    rendered: str
    output_path: Path | None
    debug_outline: str | None = None

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(plan.type_name for plan in self.plans)
