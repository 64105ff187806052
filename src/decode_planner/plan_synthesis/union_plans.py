"""Union plan building: discriminant dispatch tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from decode_planner.schema_management.schema_models import Primitive, Schema, UnionSchema

from .directive_models import UNION_DIRECTIVES, VARIANT_DIRECTIVES, DirectiveSet
from .directive_resolver import resolve_directives
from .plan_models import (
    WILDCARD_PATTERN,
    ConstructionKind,
    DecodePrimitive,
    Discriminant,
    NoMatchArm,
    RecordPlan,
    UnionArm,
    UnionMode,
    UnionPlan,
)
from .record_plans import build_record_plan
from .synthesis_errors import (
    AmbiguousUnionMode,
    DiscriminantOutOfRange,
    DuplicateDiscriminant,
    DuplicateVariant,
    DuplicateWildcard,
    MissingRepresentation,
    MissingSelector,
)

_LOGGER = logging.getLogger(__name__)


def build_union_plan(union: UnionSchema, registry: Mapping[str, Schema]) -> UnionPlan:
    """Choose the dispatch mode for a union and build its arms.

    Fieldless mode applies when no variant has fields or a ``Selector`` and
    the union declares a representation width. Every other well-formed
    union uses selector mode.
    """
    union_directives = resolve_directives(
        union.attributes, allowed=UNION_DIRECTIVES, type_name=union.name
    )
    variant_directives = [
        resolve_directives(
            variant.attributes,
            allowed=VARIANT_DIRECTIVES,
            type_name=union.name,
            location=variant.name,
        )
        for variant in union.variants
    ]
    mode = _select_mode(union, union_directives, variant_directives)
    _LOGGER.debug("%s: %s mode", union.name, mode.value)
    if mode is UnionMode.FIELDLESS:
        assert union_directives.representation is not None
        return _build_fieldless_plan(union, union_directives.representation)
    return _build_selector_plan(union, union_directives, variant_directives, registry)


def _select_mode(
    union: UnionSchema,
    union_directives: DirectiveSet,
    variant_directives: Sequence[DirectiveSet],
) -> UnionMode:
    if not union.variants:
        raise AmbiguousUnionMode("union declares no variants", type_name=union.name)
    seen: set[str] = set()
    for variant in union.variants:
        if variant.name in seen:
            raise DuplicateVariant(
                "variant name is declared more than once",
                type_name=union.name,
                location=variant.name,
            )
        seen.add(variant.name)

    fielded = [bool(variant.fields) for variant in union.variants]
    with_selector = [directives.selector is not None for directives in variant_directives]
    representation = union_directives.representation

    if not any(fielded) and not any(with_selector):
        if representation is None:
            raise MissingRepresentation(
                "fieldless union must declare a representation width ('repr')",
                type_name=union.name,
            )
        if union_directives.selector is not None:
            raise AmbiguousUnionMode(
                "fieldless union declares both 'Selector' and 'repr'", type_name=union.name
            )
        return UnionMode.FIELDLESS

    if representation is not None:
        raise AmbiguousUnionMode(
            "'repr' requests fieldless mode but variants carry fields or selectors",
            type_name=union.name,
        )
    if any(fielded) and not all(fielded):
        unit_variant = union.variants[fielded.index(False)]
        raise AmbiguousUnionMode(
            "union mixes variants with and without fields",
            type_name=union.name,
            location=unit_variant.name,
        )
    for variant in union.variants:
        if variant.discriminant is not None:
            raise AmbiguousUnionMode(
                "explicit discriminant values are only valid in fieldless mode",
                type_name=union.name,
                location=variant.name,
            )
    return UnionMode.SELECTOR


def _build_selector_plan(
    union: UnionSchema,
    union_directives: DirectiveSet,
    variant_directives: Sequence[DirectiveSet],
    registry: Mapping[str, Schema],
) -> UnionPlan:
    if union_directives.selector is None:
        raise MissingSelector(
            "selector-mode union must declare its discriminant type with 'Selector'",
            type_name=union.name,
        )

    arms: list[UnionArm] = []
    wildcard: UnionArm | None = None
    for variant, directives in zip(union.variants, variant_directives, strict=True):
        if directives.selector is None:
            raise MissingSelector(
                "variant has no 'Selector' pattern", type_name=union.name, location=variant.name
            )
        arm = UnionArm(
            variant=variant.name,
            pattern=directives.selector,
            plan=build_record_plan(variant.as_record(union.name), registry),
        )
        if not arm.is_wildcard:
            arms.append(arm)
            continue
        if wildcard is not None:
            raise DuplicateWildcard(
                f"wildcard pattern already used by variant '{wildcard.variant}'",
                type_name=union.name,
                location=variant.name,
            )
        wildcard = arm

    if wildcard is not None:
        if union.variants[-1].name != wildcard.variant:
            _LOGGER.debug("%s: moving wildcard arm %s last", union.name, wildcard.variant)
        arms.append(wildcard)

    return UnionPlan(
        type_name=union.name,
        mode=UnionMode.SELECTOR,
        discriminant=Discriminant(type_expression=union_directives.selector),
        arms=tuple(arms),
        fallback=None if wildcard is not None else NoMatchArm(),
    )


def _build_fieldless_plan(union: UnionSchema, representation: Primitive) -> UnionPlan:
    values = resolve_discriminants(union, representation)
    arms = tuple(
        UnionArm(
            variant=variant.name,
            pattern=value,
            plan=RecordPlan(
                type_name=f"{union.name}.{variant.name}",
                steps=(),
                construction=ConstructionKind.UNIT,
            ),
        )
        for variant, value in zip(union.variants, values, strict=True)
    )
    return UnionPlan(
        type_name=union.name,
        mode=UnionMode.FIELDLESS,
        discriminant=Discriminant(
            type_expression=representation.type_name,
            decoder=DecodePrimitive(width=representation.width, signed=representation.signed),
        ),
        arms=arms,
        fallback=NoMatchArm(),
    )


def resolve_discriminants(union: UnionSchema, representation: Primitive) -> tuple[int, ...]:
    """Number variants like enumerators: explicit values, otherwise previous plus one."""
    if representation.signed:
        lowest = -(1 << (representation.width - 1))
        highest = (1 << (representation.width - 1)) - 1
    else:
        lowest, highest = 0, (1 << representation.width) - 1

    values: list[int] = []
    owners: dict[int, str] = {}
    next_value = 0
    for variant in union.variants:
        value = next_value if variant.discriminant is None else variant.discriminant
        if not lowest <= value <= highest:
            raise DiscriminantOutOfRange(
                f"discriminant {value} does not fit {representation.type_name}",
                type_name=union.name,
                location=variant.name,
            )
        if value in owners:
            raise DuplicateDiscriminant(
                f"discriminant {value} is already assigned to '{owners[value]}'",
                type_name=union.name,
                location=variant.name,
            )
        owners[value] = variant.name
        values.append(value)
        next_value = value + 1
    return tuple(values)
