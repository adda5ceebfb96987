"""Core logic shared by the stack and plan commands."""

from .models import (
    ChangeEntry,
    Output,
    Parameter,
    PlanDocument,
    ResourceInstance,
    StackSnapshot,
    TemplateDocument,
)
from .views import StyledValue, View, build_plan_view, build_stack_views

__all__ = [
    "ChangeEntry",
    "Output",
    "Parameter",
    "PlanDocument",
    "ResourceInstance",
    "StackSnapshot",
    "StyledValue",
    "TemplateDocument",
    "View",
    "build_plan_view",
    "build_stack_views",
]
