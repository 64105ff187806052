"""Plan serialization for the code emitter and for debug output."""

from __future__ import annotations

from typing import Any

from decode_planner.plan_synthesis.plan_models import (
    CondWrapper,
    DecodeExplicit,
    DecodeNested,
    DecodeOptional,
    DecodePrimitive,
    DecodeSequence,
    ExactCount,
    Plan,
    RecordPlan,
    Step,
    VerifyWrapper,
)

_INDENT = "  "


def plan_to_dict(plan: Plan) -> dict[str, Any]:
    """Return a JSON/YAML-friendly mapping describing the plan."""
    if isinstance(plan, RecordPlan):
        return _record_to_dict(plan)
    decoder = plan.discriminant.decoder
    return {
        "kind": "union",
        "type": plan.type_name,
        "mode": plan.mode.value,
        "discriminant": {
            "type": plan.discriminant.type_expression,
            "decoder": None if decoder is None else step_to_dict(decoder),
        },
        "arms": [
            {
                "variant": arm.variant,
                "pattern": arm.pattern,
                "wildcard": arm.is_wildcard,
                "plan": _record_to_dict(arm.plan),
            }
            for arm in plan.arms
        ],
        "fallback": None if plan.fallback is None else {"error": plan.fallback.failure.value},
    }


def step_to_dict(step: Step) -> dict[str, Any]:
    """Return a mapping describing one step and its wrapped steps."""
    if isinstance(step, DecodePrimitive):
        return {
            "op": "primitive",
            "parser": step.parser_name,
            "width": step.width,
            "signed": step.signed,
            "byte_order": step.byte_order.value,
            "on_failure": step.failure.value,
        }
    if isinstance(step, DecodeOptional):
        return {"op": "optional", "inner": step_to_dict(step.inner)}
    if isinstance(step, DecodeSequence):
        count: dict[str, Any] = (
            {"policy": "exact", "expression": step.count.expression}
            if isinstance(step.count, ExactCount)
            else {"policy": "unbounded"}
        )
        return {"op": "sequence", "count": count, "inner": step_to_dict(step.inner)}
    if isinstance(step, DecodeNested):
        return {"op": "nested", "type": step.type_id}
    if isinstance(step, DecodeExplicit):
        return {"op": "explicit", "expression": step.expression}
    if isinstance(step, VerifyWrapper):
        return {
            "op": "verify",
            "predicate": step.predicate,
            "on_failure": step.failure.value,
            "inner": step_to_dict(step.inner),
        }
    if isinstance(step, CondWrapper):
        return {"op": "cond", "guard": step.guard, "inner": step_to_dict(step.inner)}
    raise TypeError(f"Unsupported step: {step!r}")


def render_plan_outline(plan: Plan) -> str:
    """Render an indented, human-readable outline of the plan."""
    lines: list[str] = []
    if isinstance(plan, RecordPlan):
        _outline_record(plan, lines, depth=0)
        return "\n".join(lines)

    discriminant = plan.discriminant.type_expression
    if plan.discriminant.decoder is not None:
        discriminant = f"{discriminant} read as {plan.discriminant.decoder.parser_name}"
    lines.append(f"union {plan.type_name} ({plan.mode.value}, discriminant {discriminant})")
    for arm in plan.arms:
        lines.append(f"{_INDENT}{arm.pattern} => {arm.variant}")
        _outline_record(arm.plan, lines, depth=2, header=False)
    if plan.fallback is not None:
        lines.append(f"{_INDENT}otherwise => fail {plan.fallback.failure.value}")
    return "\n".join(lines)


def _record_to_dict(plan: RecordPlan) -> dict[str, Any]:
    return {
        "kind": "record",
        "type": plan.type_name,
        "construction": plan.construction.value,
        "fields": [
            {"binding": field_step.binding, "step": step_to_dict(field_step.step)}
            for field_step in plan.steps
        ],
    }


def _outline_record(
    plan: RecordPlan, lines: list[str], *, depth: int, header: bool = True
) -> None:
    if header:
        lines.append(f"{_INDENT * depth}record {plan.type_name} ({plan.construction.value})")
        depth += 1
    for field_step in plan.steps:
        _outline_step(field_step.step, lines, depth=depth, label=f"{field_step.binding}: ")


def _outline_step(step: Step, lines: list[str], *, depth: int, label: str = "") -> None:
    prefix = f"{_INDENT * depth}{label}"
    if isinstance(step, DecodePrimitive):
        lines.append(f"{prefix}{step.parser_name}")
    elif isinstance(step, DecodeNested):
        lines.append(f"{prefix}nested {step.type_id}")
    elif isinstance(step, DecodeExplicit):
        lines.append(f"{prefix}explicit {step.expression}")
    elif isinstance(step, DecodeOptional):
        lines.append(f"{prefix}optional")
        _outline_step(step.inner, lines, depth=depth + 1)
    elif isinstance(step, DecodeSequence):
        policy = (
            f"exactly {step.count.expression}"
            if isinstance(step.count, ExactCount)
            else "until failure"
        )
        lines.append(f"{prefix}sequence ({policy})")
        _outline_step(step.inner, lines, depth=depth + 1)
    elif isinstance(step, VerifyWrapper):
        lines.append(f"{prefix}verify {step.predicate}")
        _outline_step(step.inner, lines, depth=depth + 1)
    elif isinstance(step, CondWrapper):
        lines.append(f"{prefix}if {step.guard}")
        _outline_step(step.inner, lines, depth=depth + 1)
    else:
        raise TypeError(f"Unsupported step: {step!r}")
