"""Layout types shared by the solver and the renderers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Box:
    """A solved axis-aligned box."""

    x: float
    y: float
    width: float
    height: float

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    def center_x(self) -> float:
        return self.x + self.width / 2

    def center_y(self) -> float:
        return self.y + self.height / 2

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class SolveStats:
    """How a solve ended: passes run, last residual, and whether it met epsilon."""

    iterations: int
    residual: float
    converged: bool


@dataclass(frozen=True)
class LayoutResult(Mapping[str, Box]):
    """Immutable id -> Box mapping in scene node order."""

    boxes: Mapping[str, Box] = field(default_factory=dict)
    stats: SolveStats | None = None

    def __getitem__(self, node_id: str) -> Box:
        return self.boxes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.boxes)

    def __len__(self) -> int:
        return len(self.boxes)

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {node_id: box.as_dict() for node_id, box in self.boxes.items()}
