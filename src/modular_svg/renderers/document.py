"""SVG document model and the layout -> document emitter.

The emitter maps solved boxes plus node records to drawable elements with
absolute coordinates. All coordinates are shifted so the smallest visible
coordinate (strokes included) lands on `margin`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Union

from modular_svg.ir.scene import NodeRecord
from modular_svg.layout.types import Box
from modular_svg.renderers.geometry import BoundingBox, Vec2
from modular_svg.types import NodeKind

# ─── Arrow geometry ──────────────────────────────────────────────────────────

ARROW_CLEARANCE: float = 5  # gap between an arrow end and the node it touches
ARROW_HEAD_LENGTH: float = 6
ARROW_HEAD_WIDTH: float = ARROW_HEAD_LENGTH * 0.6
ARROW_STROKE_WIDTH: float = 3

DEFAULT_FILL = "none"
DEFAULT_TEXT_FILL = "black"
DEFAULT_STROKE = "black"


# ─── Elements ────────────────────────────────────────────────────────────────


@dataclass
class RectElement:
    TYPE: ClassVar[str] = "rect"

    id: str
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass
class CircleElement:
    TYPE: ClassVar[str] = "circle"

    id: str
    cx: float
    cy: float
    r: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass
class TextElement:
    TYPE: ClassVar[str] = "text"

    id: str
    x: float
    y: float
    text: str
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass
class LineElement:
    TYPE: ClassVar[str] = "line"

    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass
class PolygonElement:
    TYPE: ClassVar[str] = "polygon"

    points: tuple[Vec2, ...]
    id: str | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


SvgElement = Union[RectElement, CircleElement, TextElement, LineElement, PolygonElement]


@dataclass
class SvgDocument:
    width: float
    height: float
    children: list[SvgElement] = field(default_factory=list)


# ─── Bounds ──────────────────────────────────────────────────────────────────


def _stroke_width(n: NodeRecord | None) -> float:
    if n is None:
        return 0.0
    if n.stroke_width is not None:
        return n.stroke_width
    return ARROW_STROKE_WIDTH if n.kind is NodeKind.ARROW else 0.0


def layout_bounds(layout: Mapping[str, Box], nodes: Iterable[NodeRecord] | None = None) -> BoundingBox:
    """Union of every box, each grown by half its stroke width.

    Arrows also contribute the points they are drawn through, since those lie
    outside their own (empty) box.
    """
    by_id = {n.id: n for n in nodes or ()}
    bounds: BoundingBox | None = None
    for node_id, box in layout.items():
        n = by_id.get(node_id)
        half = _stroke_width(n) / 2
        bb = BoundingBox.from_rect(box.x - half, box.y - half, box.width + half * 2, box.height + half * 2)
        ends = _arrow_ends(n, layout) if n is not None and n.kind is NodeKind.ARROW else None
        if ends is not None:
            drawn = BoundingBox.from_points(*arrow_geometry(*ends, Vec2(0, 0)))
            bb = bb.union(BoundingBox(drawn.start - Vec2(half, half), drawn.end + Vec2(half, half)))
        bounds = bb if bounds is None else bounds.union(bb)
    if bounds is None:
        return BoundingBox.from_points(Vec2(0, 0))
    return bounds


# ─── Per-kind builders ───────────────────────────────────────────────────────


def _attrs(n: NodeRecord) -> dict[str, object]:
    if n.fill is not None:
        fill = n.fill
    else:
        fill = DEFAULT_TEXT_FILL if n.kind is NodeKind.TEXT else DEFAULT_FILL
    stroke = n.stroke if n.stroke is not None else DEFAULT_STROKE
    sw = n.stroke_width
    if sw is None and n.kind is NodeKind.ARROW:
        sw = ARROW_STROKE_WIDTH
    return {"fill": fill, "stroke": stroke, "stroke_width": sw}


def _rect(node_id: str, box: Box, n: NodeRecord, offset: Vec2) -> RectElement:
    sw = n.stroke_width or 0.0
    return RectElement(
        id=node_id,
        x=box.x + offset.x - sw / 2,
        y=box.y + offset.y - sw / 2,
        width=box.width + sw,
        height=box.height + sw,
        **_attrs(n),
    )


def _circle(node_id: str, box: Box, n: NodeRecord, offset: Vec2) -> CircleElement:
    r = n.r if n.r is not None else box.width / 2
    return CircleElement(id=node_id, cx=box.x + offset.x + r, cy=box.y + offset.y + r, r=r, **_attrs(n))


def _text(node_id: str, box: Box, n: NodeRecord, offset: Vec2) -> TextElement:
    return TextElement(id=node_id, x=box.x + offset.x, y=box.y + offset.y, text=n.text or "", **_attrs(n))


def arrow_geometry(source: Box, target: Box, offset: Vec2) -> tuple[Vec2, Vec2, Vec2, Vec2, Vec2]:
    """Return (start, shaft_end, tip, head_left, head_right) for an arrow.

    The arrow leaves the bottom-center of `source` and points at the
    top-center of `target`, keeping ARROW_CLEARANCE away from both.
    """
    start = Vec2(source.center_x() + offset.x, source.bottom() + offset.y + ARROW_CLEARANCE)
    tip = Vec2(target.center_x() + offset.x, target.y + offset.y - ARROW_CLEARANCE)
    direction = tip - start
    length = direction.length()
    ratio = (length - ARROW_HEAD_LENGTH) / length if length > 0 else 0.0
    shaft_end = start + direction.scale(ratio)
    side = direction.unit().perp().scale(ARROW_HEAD_WIDTH / 2)
    return start, shaft_end, tip, shaft_end + side, shaft_end - side


def _arrow_ends(n: NodeRecord, layout: Mapping[str, Box]) -> tuple[Box, Box] | None:
    source = layout.get(n.from_id) if n.from_id else None
    target = layout.get(n.to_id) if n.to_id else None
    if source is None or target is None:
        return None
    return source, target


def _arrow(node_id: str, n: NodeRecord, layout: Mapping[str, Box], offset: Vec2) -> list[SvgElement]:
    ends = _arrow_ends(n, layout)
    if ends is None:
        return []
    start, shaft_end, tip, left, right = arrow_geometry(*ends, offset)
    attrs = _attrs(n)
    line = LineElement(id=node_id, x1=start.x, y1=start.y, x2=shaft_end.x, y2=shaft_end.y, **attrs)
    head = PolygonElement(points=(tip, left, right), **attrs)
    return [line, head]


# ─── Emitter ─────────────────────────────────────────────────────────────────


def layout_to_document(
    layout: Mapping[str, Box],
    nodes: Iterable[NodeRecord] | None = None,
    margin: float = 0,
) -> SvgDocument:
    """Build the SVG document for a solved layout.

    Nodes of kind NONE count towards the bounds but are not drawn. Arrows
    whose endpoints are missing from the layout are skipped.
    """
    records = list(nodes or ())
    by_id = {n.id: n for n in records}
    bounds = layout_bounds(layout, records)
    offset = Vec2(margin - bounds.start.x, margin - bounds.start.y)

    children: list[SvgElement] = []
    for node_id, box in layout.items():
        n = by_id.get(node_id)
        if n is None or not n.kind.is_drawable():
            continue
        if n.kind is NodeKind.CIRCLE:
            children.append(_circle(node_id, box, n, offset))
        elif n.kind is NodeKind.TEXT:
            children.append(_text(node_id, box, n, offset))
        elif n.kind is NodeKind.ARROW:
            children.extend(_arrow(node_id, n, layout, offset))
        else:
            children.append(_rect(node_id, box, n, offset))

    return SvgDocument(
        width=bounds.width + margin * 2,
        height=bounds.height + margin * 2,
        children=children,
    )
