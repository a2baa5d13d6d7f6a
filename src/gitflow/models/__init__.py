"""Data models for gitflow."""

from gitflow.models.kinds import KIND_SPECS, BranchKind, KindSpec, Line, get_spec
from gitflow.models.state import (
    FinishContext,
    FinishOptions,
    FinishState,
    FlowContext,
    FlowSettings,
    StartOptions,
)

__all__ = [
    # Kinds
    "BranchKind",
    "Line",
    "KindSpec",
    "KIND_SPECS",
    "get_spec",
    # State
    "FinishState",
    "FinishContext",
    "FinishOptions",
    "FlowContext",
    "FlowSettings",
    "StartOptions",
]
