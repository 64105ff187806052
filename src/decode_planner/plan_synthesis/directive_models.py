"""Resolved directive entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from decode_planner.schema_management.schema_models import Primitive


class DirectiveKind(str, Enum):
    """Directive kinds keyed by the attribute name authors write."""

    EXPLICIT_DECODER = "Parse"
    VERIFY = "Verify"
    COND = "Cond"
    COUNT = "Count"
    SELECTOR = "Selector"
    REPRESENTATION = "repr"


FIELD_DIRECTIVES = frozenset(
    {
        DirectiveKind.EXPLICIT_DECODER,
        DirectiveKind.VERIFY,
        DirectiveKind.COND,
        DirectiveKind.COUNT,
    }
)
VARIANT_DIRECTIVES = frozenset({DirectiveKind.SELECTOR})
UNION_DIRECTIVES = frozenset({DirectiveKind.SELECTOR, DirectiveKind.REPRESENTATION})


@dataclass(frozen=True)
class DirectiveSet:
    """At most one payload per directive kind."""

    explicit_decoder: str | None = None
    verify: str | None = None
    cond: str | None = None
    count: str | None = None
    selector: str | None = None
    representation: Primitive | None = None

    def kinds(self) -> frozenset[DirectiveKind]:
        """Return the kinds that carry a payload."""
        present = {
            DirectiveKind.EXPLICIT_DECODER: self.explicit_decoder,
            DirectiveKind.VERIFY: self.verify,
            DirectiveKind.COND: self.cond,
            DirectiveKind.COUNT: self.count,
            DirectiveKind.SELECTOR: self.selector,
            DirectiveKind.REPRESENTATION: self.representation,
        }
        return frozenset(kind for kind, value in present.items() if value is not None)
