"""Shared type definitions for modular-svg.

Enums used across parsers, the scene compiler, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum


class NodeKind(Enum):
    NONE = "none"  # pure layout container, never drawn
    RECT = "rect"
    CIRCLE = "circle"
    TEXT = "text"
    ARROW = "arrow"

    def is_drawable(self) -> bool:
        return self is not NodeKind.NONE


class Axis(Enum):
    X = "x"
    Y = "y"

    @property
    def pos(self) -> int:
        """Slot offset of the position component relative to an entity base."""
        return 0 if self is Axis.X else 1

    @property
    def size(self) -> int:
        """Slot offset of the size component relative to an entity base."""
        return 2 if self is Axis.X else 3

    @property
    def cross(self) -> Axis:
        return Axis.Y if self is Axis.X else Axis.X


class Alignment(Enum):
    START = "start"  # left / top
    CENTER = "center"  # centerX / centerY
    END = "end"  # right / bottom


# Input spellings per axis, shared by Align and the stacks.
ALIGN_NAMES: dict[Axis, dict[str, Alignment]] = {
    Axis.X: {"left": Alignment.START, "center": Alignment.CENTER, "right": Alignment.END},
    Axis.Y: {"top": Alignment.START, "center": Alignment.CENTER, "bottom": Alignment.END},
}

STACK_ALIGN_NAMES: dict[Axis, dict[str, Alignment]] = {
    Axis.X: {"left": Alignment.START, "centerX": Alignment.CENTER, "right": Alignment.END},
    Axis.Y: {"top": Alignment.START, "centerY": Alignment.CENTER, "bottom": Alignment.END},
}
