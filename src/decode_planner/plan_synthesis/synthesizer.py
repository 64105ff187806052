"""Plan synthesis entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from decode_planner.schema_management.schema_models import RecordSchema, Schema, UnionSchema
from decode_planner.schema_management.type_registry import TypeRegistry

from .plan_models import Plan
from .record_plans import build_record_plan
from .synthesis_errors import UnresolvedNamedType
from .union_plans import build_union_plan

_LOGGER = logging.getLogger(__name__)


def synthesize(schema: Schema, registry: TypeRegistry) -> Plan:
    """Build the parsing plan for one schema against a sealed registry."""
    _LOGGER.debug("synthesizing %s", schema.name)
    if isinstance(schema, RecordSchema):
        return build_record_plan(schema, registry)
    if isinstance(schema, UnionSchema):
        return build_union_plan(schema, registry)
    raise TypeError(f"Unsupported schema: {schema!r}")


def synthesize_all(
    registry: TypeRegistry, type_names: Iterable[str] | None = None
) -> tuple[Plan, ...]:
    """Synthesize the named types, or every registered type in registration order."""
    names = list(registry) if type_names is None else list(type_names)
    plans: list[Plan] = []
    for name in names:
        if name not in registry:
            raise UnresolvedNamedType("type is not registered", type_name=name)
        plans.append(synthesize(registry[name], registry))
    return tuple(plans)
