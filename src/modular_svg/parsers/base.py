"""Base parser protocol."""

from __future__ import annotations

from typing import Any, Protocol

from modular_svg.syntax.types import Node


class Parser(Protocol):
    """Protocol that all scene-tree parsers must implement."""

    def parse(self, data: Any) -> Node:
        """Validate raw input and narrow it into a syntax tree."""
        ...
