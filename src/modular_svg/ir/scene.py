"""Compiled scene: node records plus the ordered operator list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from modular_svg.types import NodeKind

if TYPE_CHECKING:
    from modular_svg.layout.operators import Operator

SLOTS_PER_NODE = 4  # x, y, width, height


@dataclass
class NodeRecord:
    """One visual or layout-container entity of a scene."""

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    kind: NodeKind = NodeKind.NONE
    r: float | None = None
    text: str | None = None
    from_id: str | None = None
    to_id: str | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass
class Scene:
    """Node records in slot order and operators in declaration order."""

    nodes: list[NodeRecord] = field(default_factory=list)
    operators: list[Operator] = field(default_factory=list)

    def index_map(self) -> dict[str, int]:
        """Map each node id to its slot offset."""
        return {n.id: i * SLOTS_PER_NODE for i, n in enumerate(self.nodes)}

    def node(self, node_id: str) -> NodeRecord:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def ids(self) -> list[str]:
        return [n.id for n in self.nodes]
