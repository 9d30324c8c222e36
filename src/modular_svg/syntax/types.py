"""Input tree data structures.

These types are the narrowed form of the JSON scene tree: one dataclass per
recognized node type (Group, Rect, Circle, Text, Arrow, Background, StackV,
StackH, Align, Distribute, Ref) plus Container for anything unrecognized.
Parameters are already normalized (axis, alignment, spacing) by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from modular_svg.types import Alignment, Axis


@dataclass
class Style:
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass(kw_only=True)
class Element:
    """Common fields of every node that creates a record."""

    TYPE: ClassVar[str] = ""

    key: str | None = None
    id: str | None = None
    children: list[Node] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        return self.TYPE


@dataclass(kw_only=True)
class Group(Element):
    TYPE: ClassVar[str] = "Group"


@dataclass(kw_only=True)
class Container(Element):
    """Fallback for unrecognized types: zero geometry, children pass through."""

    type: str

    @property
    def type_name(self) -> str:
        return self.type


@dataclass(kw_only=True)
class Rect(Element):
    TYPE: ClassVar[str] = "Rect"

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    style: Style = field(default_factory=Style)


@dataclass(kw_only=True)
class Circle(Element):
    TYPE: ClassVar[str] = "Circle"

    r: float = 0.0
    x: float = 0.0
    y: float = 0.0
    style: Style = field(default_factory=Style)


@dataclass(kw_only=True)
class Text(Element):
    TYPE: ClassVar[str] = "Text"

    text: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float | None = None  # None: estimated from the string length
    height: float | None = None
    style: Style = field(default_factory=Style)


@dataclass(kw_only=True)
class Arrow(Element):
    TYPE: ClassVar[str] = "Arrow"

    style: Style = field(default_factory=Style)


@dataclass(kw_only=True)
class Background(Element):
    TYPE: ClassVar[str] = "Background"

    padding: float = 0.0
    style: Style = field(default_factory=Style)


@dataclass(kw_only=True)
class Stack(Element):
    """Shared shape of StackV and StackH; `axis` is the main axis."""

    AXIS: ClassVar[Axis] = Axis.Y

    spacing: float = 0.0
    alignment: Alignment = Alignment.START

    @property
    def axis(self) -> Axis:
        return self.AXIS


@dataclass(kw_only=True)
class StackV(Stack):
    TYPE: ClassVar[str] = "StackV"
    AXIS: ClassVar[Axis] = Axis.Y


@dataclass(kw_only=True)
class StackH(Stack):
    TYPE: ClassVar[str] = "StackH"
    AXIS: ClassVar[Axis] = Axis.X


@dataclass(kw_only=True)
class Align(Element):
    TYPE: ClassVar[str] = "Align"

    axis: Axis = Axis.X
    alignment: Alignment = Alignment.START


@dataclass(kw_only=True)
class Distribute(Element):
    TYPE: ClassVar[str] = "Distribute"

    axis: Axis = Axis.X
    spacing: float = 0.0


@dataclass
class Ref:
    """Points at a node declared earlier in the tree; creates no record."""

    target: str

    TYPE: ClassVar[str] = "Ref"


Node = Union[
    Group,
    Container,
    Rect,
    Circle,
    Text,
    Arrow,
    Background,
    StackV,
    StackH,
    Align,
    Distribute,
    Ref,
]
