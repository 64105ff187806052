"""Parsing plan entities handed to the code emitter.

A plan is a tree of immutable decode steps. Equal schemas synthesize equal
plans, so plans can be compared, hashed and cached by the emitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ByteOrder(str, Enum):
    """Byte order of a primitive decode."""

    BIG = "big"


_PARSER_PREFIXES = {ByteOrder.BIG: "be"}


class DecodeErrorKind(str, Enum):
    """Structured failures an emitted decoder reports instead of raising."""

    UNMATCHED_SELECTOR = "unmatched_selector"
    VERIFICATION_FAILED = "verification_failed"
    INCOMPLETE_INPUT = "incomplete_input"

    def at(self, offset: int, remaining: int) -> DecodeError:
        """Return the failure value reported at an input position."""
        return DecodeError(kind=self, offset=offset, remaining=remaining)


@dataclass(frozen=True)
class DecodeError:
    """Decode-time failure value, with the input position where it occurred."""

    kind: DecodeErrorKind
    offset: int
    remaining: int


@dataclass(frozen=True)
class DecodePrimitive:
    """Read a fixed-width integer, failing when fewer bytes remain."""

    width: int
    signed: bool
    byte_order: ByteOrder = ByteOrder.BIG
    failure: DecodeErrorKind = DecodeErrorKind.INCOMPLETE_INPUT

    @property
    def parser_name(self) -> str:
        return f"{_PARSER_PREFIXES[self.byte_order]}_{'i' if self.signed else 'u'}{self.width}"

    @property
    def size(self) -> int:
        return self.width // 8


@dataclass(frozen=True)
class DecodeOptional:
    """Try the inner step; on failure yield absent and consume nothing."""

    inner: Step


@dataclass(frozen=True)
class UnboundedCount:
    """Repeat until the inner step first fails."""


@dataclass(frozen=True)
class ExactCount:
    """Repeat exactly as many times as the expression evaluates to."""

    expression: str


CountPolicy = UnboundedCount | ExactCount


@dataclass(frozen=True)
class DecodeSequence:
    """Repeat the inner step according to the count policy."""

    inner: Step
    count: CountPolicy


@dataclass(frozen=True)
class DecodeNested:
    """Defer to the plan of another registered type."""

    type_id: str


@dataclass(frozen=True)
class DecodeExplicit:
    """Author-supplied decoder expression, passed through verbatim."""

    expression: str


@dataclass(frozen=True)
class VerifyWrapper:
    """Decode the inner step, then fail the record if the predicate is false."""

    predicate: str
    inner: Step
    failure: DecodeErrorKind = DecodeErrorKind.VERIFICATION_FAILED


@dataclass(frozen=True)
class CondWrapper:
    """Run the inner step only when the guard holds; otherwise yield absent."""

    guard: str
    inner: Step


Step = (
    DecodePrimitive
    | DecodeOptional
    | DecodeSequence
    | DecodeNested
    | DecodeExplicit
    | VerifyWrapper
    | CondWrapper
)


class ConstructionKind(str, Enum):
    """How decoded bindings become the final value."""

    NAMED = "named"
    POSITIONAL = "positional"
    UNIT = "unit"


@dataclass(frozen=True)
class FieldStep:
    """One field binding and the step that decodes it."""

    binding: str
    step: Step


@dataclass(frozen=True)
class RecordPlan:
    """Ordered field steps plus the construction descriptor."""

    type_name: str
    steps: tuple[FieldStep, ...]
    construction: ConstructionKind

    @property
    def bindings(self) -> tuple[str, ...]:
        return tuple(field_step.binding for field_step in self.steps)


class UnionMode(str, Enum):
    """Dispatch mode chosen for a union."""

    SELECTOR = "selector"
    FIELDLESS = "fieldless"


WILDCARD_PATTERN = "_"


@dataclass(frozen=True)
class UnionArm:
    """One dispatch arm: match pattern and the variant's record plan."""

    variant: str
    pattern: str | int
    plan: RecordPlan

    @property
    def is_wildcard(self) -> bool:
        return self.pattern == WILDCARD_PATTERN


@dataclass(frozen=True)
class NoMatchArm:
    """Terminal arm reached when no pattern matches the discriminant."""

    failure: DecodeErrorKind = DecodeErrorKind.UNMATCHED_SELECTOR


@dataclass(frozen=True)
class Discriminant:
    """Where the dispatch value comes from.

    In selector mode the value is supplied by the caller and ``decoder`` is
    None; in fieldless mode it is read from the input with ``decoder``.
    """

    type_expression: str
    decoder: DecodePrimitive | None = None


@dataclass(frozen=True)
class UnionPlan:
    """Discriminant plus ordered dispatch arms."""

    type_name: str
    mode: UnionMode
    discriminant: Discriminant
    arms: tuple[UnionArm, ...]
    fallback: NoMatchArm | None

    @property
    def dispatch_order(self) -> tuple[UnionArm | NoMatchArm, ...]:
        if self.fallback is None:
            return self.arms
        return (*self.arms, self.fallback)

    @property
    def wildcard_arm(self) -> UnionArm | None:
        for arm in self.arms:
            if arm.is_wildcard:
                return arm
        return None


Plan = RecordPlan | UnionPlan
