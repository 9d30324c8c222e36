"""Intermediate representation: compiled scenes and their dependency graph."""

from modular_svg.ir.builder import build_scene
from modular_svg.ir.graph import SceneGraph
from modular_svg.ir.scene import SLOTS_PER_NODE, NodeRecord, Scene

__all__ = [
    "SLOTS_PER_NODE",
    "NodeRecord",
    "Scene",
    "SceneGraph",
    "build_scene",
]
