"""Base renderer protocol."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from modular_svg.ir.scene import NodeRecord
from modular_svg.layout.types import Box


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, layout: Mapping[str, Box], nodes: Iterable[NodeRecord]) -> str:
        """Render a solved layout to an output string."""
        ...
