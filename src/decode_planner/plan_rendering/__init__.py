"""Plan rendering exports."""

from .plan_serializer import plan_to_dict, render_plan_outline, step_to_dict

__all__ = [
    "plan_to_dict",
    "render_plan_outline",
    "step_to_dict",
]
