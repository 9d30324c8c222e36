"""Layout: geometry state, operator catalog, and the relaxation solver."""

from __future__ import annotations

from modular_svg.layout.operators import (
    AlignCenter,
    AlignCenterTo,
    AlignMax,
    AlignMin,
    BackgroundOp,
    Distribute,
    Operator,
    SlotPair,
    Stack,
    stack_h,
    stack_v,
)
from modular_svg.layout.solver import relax, solve_layout
from modular_svg.layout.state import GeometryState
from modular_svg.layout.types import Box, LayoutResult, SolveStats

__all__ = [
    "AlignCenter",
    "AlignCenterTo",
    "AlignMax",
    "AlignMin",
    "BackgroundOp",
    "Box",
    "Distribute",
    "GeometryState",
    "LayoutResult",
    "Operator",
    "SlotPair",
    "SolveStats",
    "Stack",
    "relax",
    "solve_layout",
    "stack_h",
    "stack_v",
]
