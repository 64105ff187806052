"""Default decoding strategy inferred from a declared type."""

from __future__ import annotations

from collections.abc import Mapping

from decode_planner.schema_management.schema_models import (
    DeclaredType,
    Named,
    OptionalOf,
    Primitive,
    Schema,
    SequenceOf,
)

from .plan_models import (
    DecodeNested,
    DecodeOptional,
    DecodePrimitive,
    DecodeSequence,
    Step,
    UnboundedCount,
)
from .synthesis_errors import UnresolvedNamedType


def infer_step(
    declared_type: DeclaredType,
    registry: Mapping[str, Schema],
    *,
    type_name: str,
    location: str | None = None,
) -> Step:
    """Return the default step for a declared type.

    Named references are only checked against the registry; the referenced
    plan is resolved later by the emitter.
    """
    if isinstance(declared_type, Primitive):
        return DecodePrimitive(width=declared_type.width, signed=declared_type.signed)
    if isinstance(declared_type, OptionalOf):
        return DecodeOptional(
            infer_step(declared_type.inner, registry, type_name=type_name, location=location)
        )
    if isinstance(declared_type, SequenceOf):
        return DecodeSequence(
            infer_step(declared_type.inner, registry, type_name=type_name, location=location),
            UnboundedCount(),
        )
    if isinstance(declared_type, Named):
        if declared_type.type_id not in registry:
            raise UnresolvedNamedType(
                f"type '{declared_type.type_id}' is not registered",
                type_name=type_name,
                location=location,
            )
        return DecodeNested(declared_type.type_id)
    raise TypeError(f"Unsupported declared type: {declared_type!r}")
