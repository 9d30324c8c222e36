"""Scene compiler: input tree -> node records + slot-indexed operators.

The tree is walked once in preorder. Each node (except Ref) gets a stable id
and one NodeRecord; containers only record a descriptor, because slot offsets
are final only once every record exists. A descriptor is recorded after its
children are walked, so inner containers compile to earlier operators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from modular_svg.errors import DuplicateIdError, UnresolvedReferenceError
from modular_svg.ir.scene import Scene, NodeRecord
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
)
from modular_svg.parsers import parse
from modular_svg.syntax import types as syn
from modular_svg.types import Alignment, Axis, NodeKind

logger = logging.getLogger(__name__)

# Stroke widths applied when the input leaves them out.
RECT_STROKE_WIDTH: float = 3
CIRCLE_STROKE_WIDTH: float = 1
ARROW_STROKE_WIDTH: float = 3

# Text is not measured; its box is estimated.
TEXT_CHAR_WIDTH: float = 8
TEXT_HEIGHT: float = 16


@dataclass
class _Descriptor:
    """Deferred, id-based form of one container's operator."""

    node: syn.Element
    container: str
    children: list[str] = field(default_factory=list)


def _record_for(node: syn.Element, node_id: str) -> NodeRecord:
    if isinstance(node, syn.Rect):
        return NodeRecord(
            id=node_id,
            kind=NodeKind.RECT,
            x=node.x,
            y=node.y,
            width=node.width,
            height=node.height,
            fill=node.style.fill,
            stroke=node.style.stroke,
            stroke_width=_or(node.style.stroke_width, RECT_STROKE_WIDTH),
        )
    if isinstance(node, syn.Background):
        return NodeRecord(
            id=node_id,
            kind=NodeKind.RECT,
            fill=node.style.fill,
            stroke=node.style.stroke,
            stroke_width=_or(node.style.stroke_width, RECT_STROKE_WIDTH),
        )
    if isinstance(node, syn.Circle):
        return NodeRecord(
            id=node_id,
            kind=NodeKind.CIRCLE,
            r=node.r,
            x=node.x,
            y=node.y,
            width=node.r * 2,
            height=node.r * 2,
            fill=node.style.fill,
            stroke=node.style.stroke,
            stroke_width=_or(node.style.stroke_width, CIRCLE_STROKE_WIDTH),
        )
    if isinstance(node, syn.Text):
        return NodeRecord(
            id=node_id,
            kind=NodeKind.TEXT,
            text=node.text,
            x=node.x,
            y=node.y,
            width=_or(node.width, len(node.text) * TEXT_CHAR_WIDTH),
            height=_or(node.height, TEXT_HEIGHT),
            fill=_or(node.style.fill, "black"),
            stroke=node.style.stroke,
            stroke_width=node.style.stroke_width,
        )
    if isinstance(node, syn.Arrow):
        return NodeRecord(
            id=node_id,
            kind=NodeKind.ARROW,
            fill=node.style.fill,
            stroke=node.style.stroke,
            stroke_width=_or(node.style.stroke_width, ARROW_STROKE_WIDTH),
        )
    return NodeRecord(id=node_id)


def _or(value: Any, default: Any) -> Any:
    return default if value is None else value


class _BuildContext:
    """Mutable state of a single build call."""

    def __init__(self) -> None:
        self.nodes: list[NodeRecord] = []
        self.by_id: dict[str, NodeRecord] = {}
        self.used_ids: set[str] = set()
        self.descriptors: list[_Descriptor] = []

    def assign_id(self, node: syn.Element, path: str) -> str:
        # key > id > generated from type and tree path
        for field_name, explicit in (("key", node.key), ("id", node.id)):
            if explicit:
                if explicit in self.used_ids:
                    raise DuplicateIdError(explicit, field_name)
                self.used_ids.add(explicit)
                return explicit

        base = f"{node.type_name.lower()}-{path}"
        candidate = base
        counter = 1
        while candidate in self.used_ids:
            candidate = f"{base}-{counter}"
            counter += 1
        self.used_ids.add(candidate)
        return candidate

    def ensure(self, node: syn.Node, path: str) -> NodeRecord:
        if isinstance(node, syn.Ref):
            target = self.by_id.get(node.target)
            if target is None:
                raise UnresolvedReferenceError(node.target, "ref")
            return target
        rec = _record_for(node, self.assign_id(node, path))
        self.by_id[rec.id] = rec
        self.nodes.append(rec)
        return rec

    def walk(self, node: syn.Node, path: str = "0") -> NodeRecord:
        rec = self.ensure(node, path)
        if isinstance(node, syn.Ref):
            return rec
        children = [self.walk(child, f"{path}.{i}") for i, child in enumerate(node.children)]
        child_ids = [c.id for c in children]

        if isinstance(node, (syn.Stack, syn.Align, syn.Distribute)):
            self.descriptors.append(_Descriptor(node=node, container=rec.id, children=child_ids))
        elif isinstance(node, syn.Background) and children:
            self.descriptors.append(_Descriptor(node=node, container=rec.id, children=child_ids[:1]))
        elif isinstance(node, syn.Arrow) and len(children) >= 2:
            rec.from_id = child_ids[0]
            rec.to_id = child_ids[1]
        return rec


# ─── Descriptor compilation ──────────────────────────────────────────────────


def _base(index: dict[str, int], node_id: str) -> int:
    base = index.get(node_id)
    if base is None:
        raise UnresolvedReferenceError(node_id, "id")
    return base


def _pairs(index: dict[str, int], ids: list[str], axis: Axis) -> tuple[SlotPair, ...]:
    return tuple((_base(index, i) + axis.pos, _base(index, i) + axis.size) for i in ids)


def _compile_align(node: syn.Align, children: list[str], index: dict[str, int]) -> Operator:
    axis = node.axis
    if node.alignment is Alignment.START:
        return AlignMin(tuple(_base(index, c) + axis.pos for c in children))
    if node.alignment is Alignment.END:
        return AlignMax(_pairs(index, children, axis))
    # horizontal centering follows the last child; vertical uses the mean
    if axis is Axis.X and len(children) >= 2:
        anchor, *others = _pairs(index, children[-1:] + children[:-1], axis)
        return AlignCenterTo(anchor, tuple(others))
    return AlignCenter(_pairs(index, children, axis))


def _compile(desc: _Descriptor, index: dict[str, int]) -> Operator:
    node = desc.node
    if isinstance(node, syn.Stack):
        return Stack(
            axis=node.axis,
            children=tuple(_base(index, c) for c in desc.children),
            container=_base(index, desc.container),
            spacing=node.spacing,
            alignment=node.alignment,
        )
    if isinstance(node, syn.Align):
        return _compile_align(node, desc.children, index)
    if isinstance(node, syn.Distribute):
        return Distribute(_pairs(index, desc.children, node.axis), node.spacing)
    if isinstance(node, syn.Background):
        return BackgroundOp(
            child=_base(index, desc.children[0]),
            box=_base(index, desc.container),
            padding=node.padding,
        )
    raise TypeError(f"no operator for {type(node).__name__}")


def build_scene(tree: Any) -> Scene:
    """Compile an input tree (dict, JSON text, or syntax tree) into a Scene.

    Raises:
        SchemaError: the tree is structurally invalid.
        DuplicateIdError: an explicit key or id is used twice.
        UnresolvedReferenceError: a Ref points at an unknown or later node.
    """
    root = parse(tree)
    ctx = _BuildContext()
    ctx.walk(root)

    scene = Scene(nodes=ctx.nodes)
    index = scene.index_map()
    scene.operators = [_compile(d, index) for d in ctx.descriptors]
    logger.debug("built scene: %d nodes, %d operators", len(scene.nodes), len(scene.operators))
    return scene
