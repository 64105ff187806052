"""Directive resolution: raw attribute lists to keyed directive sets."""

from __future__ import annotations

from collections.abc import Iterable, Set
from typing import Any

from decode_planner.schema_management.schema_models import (
    INTEGER_TYPE_NAMES,
    Primitive,
    RawDirective,
)

from .directive_models import DirectiveKind, DirectiveSet
from .synthesis_errors import DuplicateDirective, MisplacedDirective, UnsupportedLiteral

_ATTRIBUTE_NAMES = {kind.value: kind for kind in DirectiveKind}
_SLOTS = {
    DirectiveKind.EXPLICIT_DECODER: "explicit_decoder",
    DirectiveKind.VERIFY: "verify",
    DirectiveKind.COND: "cond",
    DirectiveKind.COUNT: "count",
    DirectiveKind.SELECTOR: "selector",
    DirectiveKind.REPRESENTATION: "representation",
}


def resolve_directives(
    attributes: Iterable[RawDirective],
    *,
    allowed: Set[DirectiveKind],
    type_name: str,
    location: str | None = None,
) -> DirectiveSet:
    """Pick the recognized directives out of an attribute list.

    Attributes with unrecognized names are ignored. Order does not matter,
    but each kind may appear only once and only where ``allowed`` permits.
    """
    payloads: dict[str, Any] = {}
    for attribute in attributes:
        kind = _ATTRIBUTE_NAMES.get(attribute.name)
        if kind is None:
            continue
        if kind not in allowed:
            raise MisplacedDirective(
                f"directive '{kind.value}' is not allowed here",
                type_name=type_name,
                location=location,
            )
        slot = _SLOTS[kind]
        if slot in payloads:
            raise DuplicateDirective(
                f"directive '{kind.value}' is given more than once",
                type_name=type_name,
                location=location,
            )
        payloads[slot] = _parse_payload(kind, attribute.value, type_name, location)
    return DirectiveSet(**payloads)


def _parse_payload(
    kind: DirectiveKind, value: object, type_name: str, location: str | None
) -> str | Primitive:
    if not isinstance(value, str) or not value.strip():
        raise UnsupportedLiteral(
            f"directive '{kind.value}' expects a non-empty string literal, got {value!r}",
            type_name=type_name,
            location=location,
        )
    literal = value.strip()
    if kind is DirectiveKind.REPRESENTATION:
        if literal not in INTEGER_TYPE_NAMES:
            raise UnsupportedLiteral(
                f"representation must be one of {', '.join(INTEGER_TYPE_NAMES)}, got {literal!r}",
                type_name=type_name,
                location=location,
            )
        width, signed = INTEGER_TYPE_NAMES[literal]
        return Primitive(width=width, signed=signed)
    return literal
