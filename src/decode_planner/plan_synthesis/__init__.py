"""Parsing plan synthesis exports."""

from .directive_models import DirectiveKind, DirectiveSet
from .directive_resolver import resolve_directives
from .field_plans import build_field_step
from .plan_models import (
    ByteOrder,
    CondWrapper,
    ConstructionKind,
    CountPolicy,
    DecodeError,
    DecodeErrorKind,
    DecodeExplicit,
    DecodeNested,
    DecodeOptional,
    DecodePrimitive,
    DecodeSequence,
    Discriminant,
    ExactCount,
    FieldStep,
    NoMatchArm,
    Plan,
    RecordPlan,
    Step,
    UnboundedCount,
    UnionArm,
    UnionMode,
    UnionPlan,
    VerifyWrapper,
)
from .record_plans import build_record_plan
from .synthesis_errors import (
    AmbiguousUnionMode,
    CondOnNonOptional,
    ConfigError,
    CountOnNonSequence,
    DiscriminantOutOfRange,
    DuplicateDiscriminant,
    DuplicateDirective,
    DuplicateVariant,
    DuplicateWildcard,
    MisplacedDirective,
    MissingRepresentation,
    MissingSelector,
    UnboundedRecursion,
    UnboundFieldReference,
    UnresolvedNamedType,
    UnsupportedLiteral,
)
from .synthesizer import synthesize, synthesize_all
from .type_inference import infer_step
from .union_plans import build_union_plan

__all__ = [
    "DirectiveKind",
    "DirectiveSet",
    "resolve_directives",
    "infer_step",
    "build_field_step",
    "build_record_plan",
    "build_union_plan",
    "synthesize",
    "synthesize_all",
    "ByteOrder",
    "CondWrapper",
    "ConstructionKind",
    "CountPolicy",
    "DecodeError",
    "DecodeErrorKind",
    "DecodeExplicit",
    "DecodeNested",
    "DecodeOptional",
    "DecodePrimitive",
    "DecodeSequence",
    "Discriminant",
    "ExactCount",
    "FieldStep",
    "NoMatchArm",
    "Plan",
    "RecordPlan",
    "Step",
    "UnboundedCount",
    "UnionArm",
    "UnionMode",
    "UnionPlan",
    "VerifyWrapper",
    "ConfigError",
    "AmbiguousUnionMode",
    "CondOnNonOptional",
    "CountOnNonSequence",
    "DiscriminantOutOfRange",
    "DuplicateDiscriminant",
    "DuplicateDirective",
    "DuplicateVariant",
    "DuplicateWildcard",
    "MisplacedDirective",
    "MissingRepresentation",
    "MissingSelector",
    "UnboundedRecursion",
    "UnboundFieldReference",
    "UnresolvedNamedType",
    "UnsupportedLiteral",
]
