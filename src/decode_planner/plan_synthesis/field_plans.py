"""Field-level plan building: directive overrides layered onto inference."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from decode_planner.schema_management.schema_models import Field, OptionalOf, Schema, SequenceOf

from .directive_models import DirectiveSet
from .plan_models import (
    CondWrapper,
    DecodeExplicit,
    DecodeSequence,
    ExactCount,
    Step,
    VerifyWrapper,
)
from .synthesis_errors import CondOnNonOptional, CountOnNonSequence
from .type_inference import infer_step

_LOGGER = logging.getLogger(__name__)


def build_field_step(
    field: Field,
    directives: DirectiveSet,
    registry: Mapping[str, Schema],
    *,
    type_name: str,
) -> Step:
    """Combine inference and directives into the step decoding one field.

    Precedence: explicit decoder, then ``Count`` on a sequence, then plain
    inference. ``Verify`` wraps the result and ``Cond`` wraps outermost, so a
    guarded-out field never reaches verification.
    """
    location = field.binding
    declared_type = field.declared_type

    if directives.cond is not None and not isinstance(declared_type, OptionalOf):
        raise CondOnNonOptional(
            "'Cond' requires an optional field type", type_name=type_name, location=location
        )

    step: Step
    if directives.explicit_decoder is not None:
        if directives.count is not None:
            _LOGGER.debug("%s.%s: explicit decoder supersedes Count", type_name, location)
        step = DecodeExplicit(directives.explicit_decoder)
    elif directives.count is not None:
        if not isinstance(declared_type, SequenceOf):
            raise CountOnNonSequence(
                "'Count' requires a sequence field type", type_name=type_name, location=location
            )
        step = DecodeSequence(
            infer_step(declared_type.inner, registry, type_name=type_name, location=location),
            ExactCount(directives.count),
        )
    elif directives.cond is not None:
        # The guard replaces the trial decode of the optional wrapper.
        assert isinstance(declared_type, OptionalOf)
        step = infer_step(declared_type.inner, registry, type_name=type_name, location=location)
    else:
        step = infer_step(declared_type, registry, type_name=type_name, location=location)

    if directives.verify is not None:
        step = VerifyWrapper(predicate=directives.verify, inner=step)
    if directives.cond is not None:
        step = CondWrapper(guard=directives.cond, inner=step)

    _LOGGER.debug("%s.%s: %r", type_name, location, step)
    return step
