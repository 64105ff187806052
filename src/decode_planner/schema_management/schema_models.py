"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass

INTEGER_TYPE_NAMES: dict[str, tuple[int, bool]] = {
    "u8": (8, False),
    "u16": (16, False),
    "u32": (32, False),
    "u64": (64, False),
    "i8": (8, True),
    "i16": (16, True),
    "i32": (32, True),
    "i64": (64, True),
}


@dataclass(frozen=True)
class Primitive:
    """Fixed-width integer declared type."""

    width: int
    signed: bool

    @property
    def type_name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.width}"


@dataclass(frozen=True)
class OptionalOf:
    """Value that may be absent."""

    inner: DeclaredType


@dataclass(frozen=True)
class SequenceOf:
    """Repeated value."""

    inner: DeclaredType


@dataclass(frozen=True)
class Named:
    """Reference to another registered schema."""

    type_id: str


DeclaredType = Primitive | OptionalOf | SequenceOf | Named


@dataclass(frozen=True)
class RawDirective:
    """Attribute attached to a field, variant or union before resolution."""

    name: str
    value: object


@dataclass(frozen=True)
class Field:
    """One record field: name (or positional index), declared type and attributes."""

    name: str | int
    declared_type: DeclaredType
    attributes: tuple[RawDirective, ...] = ()

    @property
    def binding(self) -> str:
        """Name under which the decoded value is visible to later expressions."""
        if isinstance(self.name, int):
            return f"_{self.name}"
        return self.name


@dataclass(frozen=True)
class RecordSchema:
    """Product type with ordered fields."""

    name: str
    fields: tuple[Field, ...]
    positional: bool = False


@dataclass(frozen=True)
class Variant:
    """One alternative of a union; its fields form a nested record."""

    name: str
    fields: tuple[Field, ...] = ()
    positional: bool = False
    attributes: tuple[RawDirective, ...] = ()
    discriminant: int | None = None

    def as_record(self, union_name: str) -> RecordSchema:
        return RecordSchema(
            name=f"{union_name}.{self.name}",
            fields=self.fields,
            positional=self.positional,
        )


@dataclass(frozen=True)
class UnionSchema:
    """Tagged union of variants selected by a discriminant value."""

    name: str
    variants: tuple[Variant, ...]
    attributes: tuple[RawDirective, ...] = ()


Schema = RecordSchema | UnionSchema
