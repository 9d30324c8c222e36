"""SVG serialization."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from xml.sax.saxutils import escape

from modular_svg.ir.scene import NodeRecord
from modular_svg.layout.types import Box
from modular_svg.renderers.document import (
    CircleElement,
    LineElement,
    PolygonElement,
    RectElement,
    SvgDocument,
    SvgElement,
    TextElement,
    layout_to_document,
)
from modular_svg.renderers.geometry import Vec2

SVG_NS = "http://www.w3.org/2000/svg"

Attr = str | float | None


def format_number(value: float) -> str:
    """Render a number the same way regardless of locale."""
    value = round(float(value), 9)
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _format_points(points: Iterable[Vec2]) -> str:
    return " ".join(f"{format_number(p.x)},{format_number(p.y)}" for p in points)


def xml(tag: str, attrs: dict[str, Attr], children: str | list[str] | None = None) -> str:
    """Render one tag; None attributes are left out, no children means self-closing."""
    parts = []
    for key, value in attrs.items():
        if value is None:
            continue
        text = value if isinstance(value, str) else format_number(value)
        parts.append(f' {key}="{escape(text, {chr(34): "&quot;"})}"')
    attr = "".join(parts)
    if children is None:
        return f"<{tag}{attr} />"
    body = "".join(children) if isinstance(children, list) else children
    return f"<{tag}{attr}>{body}</{tag}>"


def _paint(element: SvgElement) -> dict[str, Attr]:
    return {"fill": element.fill, "stroke": element.stroke, "stroke-width": element.stroke_width}


def serialize_element(element: SvgElement) -> str:
    if isinstance(element, RectElement):
        return xml(
            "rect",
            {
                "id": element.id,
                "x": element.x,
                "y": element.y,
                "width": element.width,
                "height": element.height,
                **_paint(element),
            },
        )
    if isinstance(element, CircleElement):
        return xml("circle", {"id": element.id, "cx": element.cx, "cy": element.cy, "r": element.r, **_paint(element)})
    if isinstance(element, TextElement):
        return xml(
            "text",
            {
                "id": element.id,
                "x": element.x,
                "y": element.y,
                "dominant-baseline": "hanging",
                "font-family": "sans-serif",
                **_paint(element),
            },
            escape(element.text),
        )
    if isinstance(element, LineElement):
        return xml(
            "line",
            {
                "id": element.id,
                "x1": element.x1,
                "y1": element.y1,
                "x2": element.x2,
                "y2": element.y2,
                **_paint(element),
            },
        )
    if isinstance(element, PolygonElement):
        return xml("polygon", {"id": element.id, "points": _format_points(element.points), **_paint(element)})
    raise TypeError(f"cannot serialize {type(element).__name__}")


def serialize_svg(document: SvgDocument) -> str:
    """Serialize a document to SVG markup."""
    body = [serialize_element(el) for el in document.children]
    return xml("svg", {"xmlns": SVG_NS, "width": document.width, "height": document.height}, body)


def layout_to_svg(
    layout: Mapping[str, Box],
    nodes: Iterable[NodeRecord] | None = None,
    margin: float = 0,
) -> str:
    """Solved layout -> SVG text."""
    return serialize_svg(layout_to_document(layout, nodes, margin))


class SvgRenderer:
    """Renders solved layouts to SVG markup."""

    def __init__(self, margin: float = 0) -> None:
        self.margin = margin

    def render(self, layout: Mapping[str, Box], nodes: Iterable[NodeRecord]) -> str:
        return layout_to_svg(layout, nodes, self.margin)
