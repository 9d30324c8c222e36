"""JSON scene-tree parser.

Validates the duck-typed JSON tree once with pydantic, then narrows every node
into the strict variants of syntax.types so nothing downstream touches raw
dicts again.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, model_validator

from modular_svg.errors import SchemaError
from modular_svg.syntax.types import (
    Align,
    Arrow,
    Background,
    Circle,
    Container,
    Distribute,
    Element,
    Group,
    Node,
    Rect,
    Ref,
    StackH,
    StackV,
    Style,
    Text,
)
from modular_svg.types import ALIGN_NAMES, STACK_ALIGN_NAMES, Alignment, Axis

# ─── Raw schema ──────────────────────────────────────────────────────────────


class RawNode(BaseModel):
    """Structural schema of one input node."""

    model_config = ConfigDict(extra="forbid")

    type: StrictStr
    id: StrictStr | None = None
    key: StrictStr | None = None
    props: dict[str, Any] | None = None
    children: list[RawNode] | None = None
    target: StrictStr | None = None

    @model_validator(mode="after")
    def _check_ref(self) -> RawNode:
        if self.type == "Ref":
            if not self.target:
                raise ValueError("Ref node requires a 'target'")
            if self.children:
                raise ValueError("Ref node cannot have children")
        return self


RawNode.model_rebuild()


# ─── Prop readers ────────────────────────────────────────────────────────────

_AXIS_NAMES: dict[str, Axis] = {
    "x": Axis.X,
    "y": Axis.Y,
    "horizontal": Axis.X,
    "vertical": Axis.Y,
}


def _number(props: dict[str, Any], name: str, default: float, where: str) -> float:
    value = props.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"prop '{name}' must be a finite number, got {value!r}", where)
    try:
        number = float(value)
    except OverflowError:
        raise SchemaError(f"prop '{name}' is too large to represent", where) from None
    if not math.isfinite(number):
        raise SchemaError(f"prop '{name}' must be a finite number, got {value!r}", where)
    return number


def _optional_number(props: dict[str, Any], name: str, where: str) -> float | None:
    if props.get(name) is None:
        return None
    return _number(props, name, 0.0, where)


def _non_negative(props: dict[str, Any], name: str, where: str) -> float:
    value = _number(props, name, 0.0, where)
    if value < 0:
        raise SchemaError(f"prop '{name}' must be >= 0, got {value!r}", where)
    return value


def _string(props: dict[str, Any], name: str, where: str) -> str | None:
    value = props.get(name)
    if value is None or isinstance(value, str):
        return value
    raise SchemaError(f"prop '{name}' must be a string, got {value!r}", where)


def _style(props: dict[str, Any], where: str) -> Style:
    width_key = "stroke-width" if "stroke-width" in props else "strokeWidth"
    return Style(
        fill=_string(props, "fill", where),
        stroke=_string(props, "stroke", where),
        stroke_width=_optional_number(props, width_key, where),
    )


def _axis(value: Any, where: str) -> Axis:
    if isinstance(value, str) and value in _AXIS_NAMES:
        return _AXIS_NAMES[value]
    raise SchemaError(f"unknown axis {value!r}; use x, y, horizontal or vertical", where)


def _alignment(value: Any, names: dict[str, Alignment], where: str) -> Alignment:
    if isinstance(value, str) and value in names:
        return names[value]
    choices = ", ".join(names)
    raise SchemaError(f"unknown alignment {value!r}; use {choices}", where)


# ─── Narrowing ───────────────────────────────────────────────────────────────


def _narrow_rect(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Rect(
        x=_number(props, "x", 0.0, where),
        y=_number(props, "y", 0.0, where),
        width=_number(props, "width", 0.0, where),
        height=_number(props, "height", 0.0, where),
        style=_style(props, where),
    )


def _narrow_circle(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Circle(
        r=_non_negative(props, "r", where),
        x=_number(props, "x", 0.0, where),
        y=_number(props, "y", 0.0, where),
        style=_style(props, where),
    )


def _narrow_text(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Text(
        text=_string(props, "text", where) or "",
        x=_number(props, "x", 0.0, where),
        y=_number(props, "y", 0.0, where),
        width=_optional_number(props, "width", where),
        height=_optional_number(props, "height", where),
        style=_style(props, where),
    )


def _narrow_arrow(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Arrow(style=_style(props, where))


def _narrow_background(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Background(padding=_non_negative(props, "padding", where), style=_style(props, where))


def _narrow_stack(cls: type[StackV] | type[StackH]) -> Callable[[RawNode, dict[str, Any], str], Element]:
    def narrow(raw: RawNode, props: dict[str, Any], where: str) -> Element:
        cross = cls.AXIS.cross
        names = {**ALIGN_NAMES[cross], **STACK_ALIGN_NAMES[cross]}
        value = props.get("alignment")
        alignment = Alignment.START if value is None else _alignment(value, names, where)
        return cls(spacing=_number(props, "spacing", 0.0, where), alignment=alignment)

    return narrow


def _narrow_align(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    axis_value = props.get("axis") or props.get("direction")
    align_value = props.get("alignment") or props.get("type")

    # "centerX" / "centerY" carry their axis as a suffix
    if isinstance(align_value, str) and align_value[-1:] in ("X", "Y"):
        suffix_axis = Axis(align_value[-1].lower())
        if axis_value is None:
            axis_value = suffix_axis.value
        if _axis(axis_value, where) is suffix_axis:
            align_value = align_value[:-1]

    axis = _axis(axis_value or "x", where)
    if align_value is None:
        alignment = Alignment.START
    else:
        alignment = _alignment(align_value, ALIGN_NAMES[axis], where)
    return Align(axis=axis, alignment=alignment)


def _narrow_distribute(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    axis_value = props.get("axis") or props.get("direction") or "x"
    return Distribute(axis=_axis(axis_value, where), spacing=_non_negative(props, "spacing", where))


def _narrow_group(raw: RawNode, props: dict[str, Any], where: str) -> Element:
    return Group()


_NARROWERS: dict[str, Callable[[RawNode, dict[str, Any], str], Element]] = {
    "Group": _narrow_group,
    "Rect": _narrow_rect,
    "Circle": _narrow_circle,
    "Text": _narrow_text,
    "Arrow": _narrow_arrow,
    "Background": _narrow_background,
    "StackV": _narrow_stack(StackV),
    "StackH": _narrow_stack(StackH),
    "Align": _narrow_align,
    "Distribute": _narrow_distribute,
}


def narrow(raw: RawNode, path: str = "0") -> Node:
    """Convert a validated RawNode tree into syntax-tree variants."""
    if raw.type == "Ref":
        if not raw.target:
            raise SchemaError("Ref node requires a 'target'", f"Ref@{path}")
        return Ref(target=raw.target)

    where = f"{raw.type}@{path}"
    props = raw.props or {}
    narrower = _NARROWERS.get(raw.type)
    if narrower is None:
        node: Element = Container(type=raw.type)
    else:
        node = narrower(raw, props, where)

    node.key = raw.key
    node.id = raw.id
    node.children = [narrow(child, f"{path}.{i}") for i, child in enumerate(raw.children or [])]
    return node


class JsonTreeParser:
    """Parses a scene tree given as a dict or as JSON text."""

    def parse(self, data: Any) -> Node:
        try:
            if isinstance(data, (str, bytes, bytearray)):
                raw = RawNode.model_validate_json(data)
            else:
                raw = RawNode.model_validate(data)
        except ValidationError as e:
            raise SchemaError(f"invalid scene:\n{e}") from e
        return narrow(raw)
