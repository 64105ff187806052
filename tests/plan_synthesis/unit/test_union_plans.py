"""Union plan building tests."""

from __future__ import annotations

import pytest
from decode_planner.plan_synthesis.plan_models import (
    ConstructionKind,
    DecodeErrorKind,
    DecodePrimitive,
    NoMatchArm,
    UnionMode,
)
from decode_planner.plan_synthesis.synthesis_errors import (
    AmbiguousUnionMode,
    DiscriminantOutOfRange,
    DuplicateDiscriminant,
    DuplicateVariant,
    DuplicateWildcard,
    MisplacedDirective,
    MissingRepresentation,
    MissingSelector,
)
from decode_planner.plan_synthesis.union_plans import build_union_plan
from decode_planner.schema_management.schema_models import (
    Field,
    Primitive,
    RawDirective,
    UnionSchema,
    Variant,
)

U32 = Primitive(32, False)
SELECTOR_U8 = (RawDirective("Selector", "u8"),)
REPR_U8 = (RawDirective("repr", "u8"),)


def _variant(name: str, selector: str | None, *, fields=None) -> Variant:
    attributes = () if selector is None else (RawDirective("Selector", selector),)
    return Variant(
        name=name,
        fields=(Field(0, U32),) if fields is None else fields,
        positional=True,
        attributes=attributes,
    )


def _selector_union(*variants: Variant) -> UnionSchema:
    return UnionSchema(name="U", variants=variants, attributes=SELECTOR_U8)


def _fieldless(*variants: Variant, attributes=REPR_U8) -> UnionSchema:
    return UnionSchema(name="E", variants=variants, attributes=attributes)


def test_selector_mode_keeps_declared_order_with_trailing_wildcard() -> None:
    union = _selector_union(_variant("A", "0"), _variant("B", "1"), _variant("C", "_"))

    plan = build_union_plan(union, {})

    assert plan.mode is UnionMode.SELECTOR
    assert [arm.pattern for arm in plan.arms] == ["0", "1", "_"]
    assert plan.fallback is None
    assert plan.wildcard_arm is not None and plan.wildcard_arm.variant == "C"


def test_leading_wildcard_is_moved_last_without_reordering_others() -> None:
    union = _selector_union(_variant("C", "_"), _variant("A", "0"), _variant("B", "1"))

    plan = build_union_plan(union, {})

    assert [arm.pattern for arm in plan.arms] == ["0", "1", "_"]
    assert [arm.variant for arm in plan.arms] == ["A", "B", "C"]


def test_without_wildcard_an_unmatched_failure_arm_is_appended() -> None:
    union = _selector_union(_variant("A", "0"), _variant("B", "1"))

    plan = build_union_plan(union, {})

    assert plan.fallback == NoMatchArm()
    assert plan.dispatch_order[-1].failure is DecodeErrorKind.UNMATCHED_SELECTOR
    assert len(plan.dispatch_order) == 3


def test_selector_arms_carry_variant_record_plans() -> None:
    union = _selector_union(
        _variant("A", "MessageType(0)"),
        Variant(
            name="B",
            fields=(Field("raw", U32, (RawDirective("Parse", "take(4)"),)),),
            attributes=(RawDirective("Selector", "MessageType(1)"),),
        ),
    )

    plan = build_union_plan(union, {})

    assert plan.discriminant.type_expression == "u8"
    assert plan.discriminant.decoder is None
    assert plan.arms[0].plan.type_name == "U.A"
    assert plan.arms[0].plan.construction is ConstructionKind.POSITIONAL
    assert plan.arms[1].plan.construction is ConstructionKind.NAMED
    assert plan.arms[1].plan.bindings == ("raw",)


def test_two_wildcards_are_rejected() -> None:
    union = _selector_union(_variant("A", "_"), _variant("B", "_"))

    with pytest.raises(DuplicateWildcard, match="U.B"):
        build_union_plan(union, {})


def test_variant_without_selector_is_rejected() -> None:
    union = _selector_union(_variant("A", "0"), _variant("B", None))

    with pytest.raises(MissingSelector) as excinfo:
        build_union_plan(union, {})

    assert excinfo.value.location == "B"


def test_selector_mode_requires_discriminant_type() -> None:
    union = UnionSchema(name="U", variants=(_variant("A", "0"),))

    with pytest.raises(MissingSelector, match="discriminant type"):
        build_union_plan(union, {})


def test_fieldless_enum_numbers_variants_like_enumerators() -> None:
    union = _fieldless(
        Variant("A"),
        Variant("B", discriminant=2),
        Variant("C"),
    )

    plan = build_union_plan(union, {})

    assert plan.mode is UnionMode.FIELDLESS
    assert [(arm.variant, arm.pattern) for arm in plan.arms] == [("A", 0), ("B", 2), ("C", 3)]
    assert all(arm.plan.steps == () for arm in plan.arms)
    assert all(arm.plan.construction is ConstructionKind.UNIT for arm in plan.arms)
    assert plan.wildcard_arm is None
    assert plan.fallback == NoMatchArm()
    assert plan.discriminant.decoder == DecodePrimitive(8, False)


def test_fieldless_enum_with_signed_representation() -> None:
    union = _fieldless(
        Variant("Low", discriminant=-2),
        Variant("Next"),
        attributes=(RawDirective("repr", "i8"),),
    )

    plan = build_union_plan(union, {})

    assert [arm.pattern for arm in plan.arms] == [-2, -1]
    assert plan.discriminant.decoder == DecodePrimitive(8, True)
    assert plan.discriminant.type_expression == "i8"


def test_fieldless_enum_without_representation_is_rejected() -> None:
    with pytest.raises(MissingRepresentation):
        build_union_plan(_fieldless(Variant("A"), Variant("B"), attributes=()), {})


def test_fieldless_enum_rejects_fields() -> None:
    union = _fieldless(Variant("A"), Variant("B", fields=(Field(0, U32),), positional=True))

    with pytest.raises(AmbiguousUnionMode):
        build_union_plan(union, {})


def test_fieldless_enum_rejects_variant_selector() -> None:
    union = _fieldless(Variant("A"), Variant("B", attributes=(RawDirective("Selector", "1"),)))

    with pytest.raises(AmbiguousUnionMode, match="'repr' requests fieldless mode"):
        build_union_plan(union, {})


def test_mixed_fielded_and_unit_variants_are_ambiguous() -> None:
    union = _selector_union(_variant("A", "0"), _variant("B", "1", fields=()))

    with pytest.raises(AmbiguousUnionMode) as excinfo:
        build_union_plan(union, {})

    assert excinfo.value.location == "B"


def test_union_without_variants_is_ambiguous() -> None:
    with pytest.raises(AmbiguousUnionMode, match="no variants"):
        build_union_plan(_fieldless(), {})


def test_repeated_discriminant_is_rejected() -> None:
    union = _fieldless(Variant("A", discriminant=1), Variant("B", discriminant=0), Variant("C"))

    with pytest.raises(DuplicateDiscriminant, match="E.C: discriminant 1"):
        build_union_plan(union, {})


def test_discriminant_must_fit_representation() -> None:
    union = _fieldless(Variant("A", discriminant=255), Variant("B"))

    with pytest.raises(DiscriminantOutOfRange, match="256 does not fit u8"):
        build_union_plan(union, {})


def test_field_directive_on_variant_is_misplaced() -> None:
    union = _selector_union(
        Variant(
            "A",
            fields=(Field(0, U32),),
            positional=True,
            attributes=(RawDirective("Selector", "0"), RawDirective("Verify", "_0 > 1")),
        )
    )

    with pytest.raises(MisplacedDirective):
        build_union_plan(union, {})


def test_unit_variants_with_selectors_use_selector_mode() -> None:
    union = _selector_union(_variant("On", "1", fields=()), _variant("Off", "_", fields=()))

    plan = build_union_plan(union, {})

    assert plan.mode is UnionMode.SELECTOR
    assert [arm.plan.construction for arm in plan.arms] == [ConstructionKind.UNIT] * 2


def test_repeated_variant_name_is_rejected() -> None:
    union = _selector_union(
        _variant("A", "0", fields=(Field("x", Primitive(8, False)),)),
        _variant("A", "1", fields=(Field("y", Primitive(16, False)),)),
    )

    with pytest.raises(DuplicateVariant) as excinfo:
        build_union_plan(union, {})

    assert excinfo.value.type_name == "U"
    assert excinfo.value.location == "A"


def test_repeated_unit_variant_name_is_rejected_in_fieldless_union() -> None:
    with pytest.raises(DuplicateVariant, match="E.A"):
        build_union_plan(_fieldless(Variant("A"), Variant("B"), Variant("A")), {})


def test_fieldless_union_with_selector_and_repr_is_ambiguous() -> None:
    union = _fieldless(Variant("A"), Variant("B"), attributes=SELECTOR_U8 + REPR_U8)

    with pytest.raises(AmbiguousUnionMode, match="both 'Selector' and 'repr'"):
        build_union_plan(union, {})


def test_explicit_discriminant_in_selector_mode_is_ambiguous() -> None:
    union = _selector_union(
        _variant("A", "0"),
        Variant(
            "B",
            fields=(Field(0, U32),),
            positional=True,
            attributes=(RawDirective("Selector", "1"),),
            discriminant=3,
        ),
    )

    with pytest.raises(AmbiguousUnionMode, match="only valid in fieldless mode") as excinfo:
        build_union_plan(union, {})

    assert excinfo.value.location == "B"
