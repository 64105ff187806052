"""Type inference tests."""

from __future__ import annotations

import pytest
from decode_planner.plan_synthesis.plan_models import (
    ByteOrder,
    DecodeError,
    DecodeErrorKind,
    DecodeNested,
    DecodeOptional,
    DecodePrimitive,
    DecodeSequence,
    UnboundedCount,
)
from decode_planner.plan_synthesis.synthesis_errors import UnresolvedNamedType
from decode_planner.plan_synthesis.type_inference import infer_step
from decode_planner.schema_management.schema_models import (
    Named,
    OptionalOf,
    Primitive,
    RecordSchema,
    SequenceOf,
)

_REGISTRY = {"Header": RecordSchema(name="Header", fields=())}


def _infer(declared_type):
    return infer_step(declared_type, _REGISTRY, type_name="Packet", location="field")


@pytest.mark.parametrize(
    ("width", "signed", "parser_name"),
    [(8, False, "be_u8"), (16, True, "be_i16"), (32, False, "be_u32"), (64, True, "be_i64")],
)
def test_primitives_default_to_big_endian(width: int, signed: bool, parser_name: str) -> None:
    step = _infer(Primitive(width=width, signed=signed))

    assert step == DecodePrimitive(width=width, signed=signed)
    assert step.byte_order is ByteOrder.BIG
    assert step.parser_name == parser_name
    assert step.size == width // 8


def test_primitive_reports_incomplete_input_with_position() -> None:
    step = _infer(Primitive(width=32, signed=False))

    assert step.failure is DecodeErrorKind.INCOMPLETE_INPUT
    assert step.failure.at(offset=6, remaining=2) == DecodeError(
        kind=DecodeErrorKind.INCOMPLETE_INPUT, offset=6, remaining=2
    )


def test_optional_wraps_inner_inference() -> None:
    step = _infer(OptionalOf(Primitive(32, False)))

    assert step == DecodeOptional(DecodePrimitive(32, False))


def test_sequence_defaults_to_unbounded_repeat() -> None:
    step = _infer(SequenceOf(Primitive(16, False)))

    assert step == DecodeSequence(DecodePrimitive(16, False), UnboundedCount())


def test_named_type_defers_to_nested_plan() -> None:
    assert _infer(SequenceOf(OptionalOf(Named("Header")))) == DecodeSequence(
        DecodeOptional(DecodeNested("Header")), UnboundedCount()
    )


def test_unregistered_named_type_is_rejected() -> None:
    with pytest.raises(UnresolvedNamedType, match="Packet.field: type 'Trailer'"):
        _infer(OptionalOf(Named("Trailer")))
