"""Geometry state: one flat float buffer, four slots per entity."""

from __future__ import annotations

from collections.abc import Iterable

from modular_svg.ir.scene import SLOTS_PER_NODE, NodeRecord
from modular_svg.layout.types import Box


class GeometryState:
    """Flat x, y, width, height buffer addressed by slot offset."""

    def __init__(self, values: list[float]) -> None:
        self.values = values

    @classmethod
    def from_records(cls, nodes: Iterable[NodeRecord]) -> GeometryState:
        values: list[float] = []
        for n in nodes:
            values.extend((float(n.x), float(n.y), float(n.width), float(n.height)))
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)

    def entity_count(self) -> int:
        return len(self.values) // SLOTS_PER_NODE

    def box(self, base: int) -> Box:
        v = self.values
        return Box(v[base], v[base + 1], v[base + 2], v[base + 3])
