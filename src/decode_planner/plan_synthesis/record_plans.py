"""Record plan building: field steps in declaration order."""

from __future__ import annotations

import re
from collections.abc import Mapping

from decode_planner.schema_management.schema_models import (
    Field,
    Named,
    RecordSchema,
    Schema,
)

from .directive_models import FIELD_DIRECTIVES, DirectiveKind
from .directive_resolver import resolve_directives
from .field_plans import build_field_step
from .plan_models import ConstructionKind, FieldStep, RecordPlan
from .synthesis_errors import UnboundedRecursion, UnboundFieldReference

_QUOTED = re.compile(r"'[^']*'|\"[^\"]*\"")
_REFERENCE = re.compile(r"(?<![\w.])[A-Za-z_]\w*")


def build_record_plan(record: RecordSchema, registry: Mapping[str, Schema]) -> RecordPlan:
    """Build the plan for one record, checking that guards only look backwards."""
    _check_by_value_recursion(record, registry)

    siblings = {field.binding for field in record.fields}
    bound: set[str] = set()
    steps: list[FieldStep] = []
    for field in record.fields:
        directives = resolve_directives(
            field.attributes,
            allowed=FIELD_DIRECTIVES,
            type_name=record.name,
            location=field.binding,
        )
        for kind, expression in (
            (DirectiveKind.COND, directives.cond),
            (DirectiveKind.COUNT, directives.count),
        ):
            if expression is None:
                continue
            unbound = sorted((referenced_names(expression) & siblings) - bound)
            if unbound:
                raise UnboundFieldReference(
                    f"'{kind.value}' expression {expression!r} references "
                    f"{', '.join(unbound)} before it is decoded",
                    type_name=record.name,
                    location=field.binding,
                )
        steps.append(
            FieldStep(
                binding=field.binding,
                step=build_field_step(field, directives, registry, type_name=record.name),
            )
        )
        bound.add(field.binding)

    return RecordPlan(
        type_name=record.name,
        steps=tuple(steps),
        construction=_construction_kind(record),
    )


def referenced_names(expression: str) -> set[str]:
    """Return bare identifiers used in an expression, ignoring quoted text and attributes."""
    return set(_REFERENCE.findall(_QUOTED.sub("", expression)))


def _construction_kind(record: RecordSchema) -> ConstructionKind:
    if not record.fields:
        return ConstructionKind.UNIT
    if record.positional:
        return ConstructionKind.POSITIONAL
    return ConstructionKind.NAMED


def _check_by_value_recursion(record: RecordSchema, registry: Mapping[str, Schema]) -> None:
    visited: set[str] = set()
    stack = _named_edges(record, registry)
    while stack:
        target, origin = stack.pop()
        if target.name == record.name:
            raise UnboundedRecursion(
                "record contains itself by value",
                type_name=record.name,
                location=origin,
            )
        if target.name in visited:
            continue
        visited.add(target.name)
        stack.extend((nested, origin) for nested, _ in _named_edges(target, registry))


def _named_edges(
    record: RecordSchema, registry: Mapping[str, Schema]
) -> list[tuple[RecordSchema, str]]:
    edges: list[tuple[RecordSchema, str]] = []
    for field in _by_value_fields(record):
        assert isinstance(field.declared_type, Named)
        target = registry.get(field.declared_type.type_id)
        if isinstance(target, RecordSchema):
            edges.append((target, field.binding))
    return edges


def _by_value_fields(record: RecordSchema) -> list[Field]:
    return [
        field
        for field in record.fields
        if isinstance(field.declared_type, Named)
        and not any(
            attribute.name == DirectiveKind.EXPLICIT_DECODER.value
            for attribute in field.attributes
        )
    ]
