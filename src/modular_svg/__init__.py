"""modular-svg: declarative shape/layout trees to SVG."""

from __future__ import annotations

from typing import Any

from modular_svg.config import RenderConfig, SolverConfig
from modular_svg.errors import DuplicateIdError, ModularSvgError, SchemaError, UnresolvedReferenceError
from modular_svg.ir.builder import build_scene
from modular_svg.ir.scene import NodeRecord, Scene
from modular_svg.layout.solver import solve_layout
from modular_svg.layout.types import Box, LayoutResult
from modular_svg.renderers.document import SvgDocument, layout_to_document
from modular_svg.renderers.svg import layout_to_svg, serialize_svg

__all__ = [
    "Box",
    "DuplicateIdError",
    "LayoutResult",
    "ModularSvgError",
    "NodeRecord",
    "RenderConfig",
    "SchemaError",
    "Scene",
    "SolverConfig",
    "SvgDocument",
    "UnresolvedReferenceError",
    "build_scene",
    "layout_to_document",
    "layout_to_svg",
    "render_json",
    "serialize_svg",
    "solve_layout",
]


def render_json(tree: Any, config: RenderConfig | None = None) -> str:
    """Build, solve and serialize a scene tree in one call.

    Args:
        tree: Scene tree as a dict or JSON text.
        config: Margin and solver settings; defaults when None.

    Returns:
        The SVG markup.

    Raises:
        SchemaError, DuplicateIdError, UnresolvedReferenceError: the tree
        cannot be compiled. Nothing is solved in that case.
    """
    cfg = config or RenderConfig()
    scene = build_scene(tree)
    layout = solve_layout(scene, cfg.solver)
    return layout_to_svg(layout, scene.nodes, cfg.margin)
