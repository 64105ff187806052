"""Configuration errors raised while synthesizing a parsing plan."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when a schema cannot be turned into a parsing plan.

    Every error names the schema being synthesized and the field or variant
    that triggered it so the author can find the offending declaration.
    """

    def __init__(self, message: str, *, type_name: str, location: str | None = None) -> None:
        self.type_name = type_name
        self.location = location
        self.detail = message
        where = type_name if location is None else f"{type_name}.{location}"
        super().__init__(f"{where}: {message}")


class DuplicateDirective(ConfigError):
    """The same directive kind is attached twice."""


class UnsupportedLiteral(ConfigError):
    """A directive payload is not a literal this system understands."""


class MisplacedDirective(ConfigError):
    """A directive is attached where it has no meaning."""


class CondOnNonOptional(ConfigError):
    """``Cond`` on a field whose declared type is not optional."""


class CountOnNonSequence(ConfigError):
    """``Count`` on a field whose declared type is not a sequence."""


class UnboundFieldReference(ConfigError):
    """A ``Cond``/``Count`` expression names a field that is not decoded yet."""


class UnresolvedNamedType(ConfigError):
    """A named field type is absent from the type registry."""


class UnboundedRecursion(ConfigError):
    """A record contains itself by value and would unfold forever."""


class MissingSelector(ConfigError):
    """A selector-mode union or one of its variants lacks a ``Selector``."""


class MissingRepresentation(ConfigError):
    """A fieldless union does not declare a representation width."""


class AmbiguousUnionMode(ConfigError):
    """A union satisfies neither or both dispatch modes."""


class DuplicateWildcard(ConfigError):
    """More than one variant uses the wildcard selector."""


class DuplicateDiscriminant(ConfigError):
    """Two fieldless variants resolve to the same discriminant value."""


class DiscriminantOutOfRange(ConfigError):
    """A fieldless discriminant does not fit the representation width."""


class DuplicateVariant(ConfigError):
    """Two variants of one union share a name."""
