"""Helpers for writing scene trees in Python.

    s = SceneDsl()
    tree = s.scene(
        s.stack_h({"name": "row", "spacing": 10}, s.circle({"r": 5}), s.circle({"r": 8})),
    )

Every helper returns a plain JSON-compatible dict. A `name` prop becomes the
node id; unnamed nodes get `<prefix><n>` from the instance's counter, which
`scene()` resets so building the same tree twice gives the same ids.
"""

from __future__ import annotations

from typing import Any

from modular_svg.config import RenderConfig

Tree = dict[str, Any]


class SceneDsl:
    def __init__(self) -> None:
        self._counter = 0

    def reset(self) -> None:
        self._counter = 0

    def uid(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def _named(self, props: dict[str, Any] | None, prefix: str) -> tuple[str, dict[str, Any]]:
        rest = dict(props or {})
        name = rest.pop("name", None)
        return (name if name is not None else self.uid(prefix)), rest

    def scene(self, *children: Tree) -> Tree:
        self.reset()
        return {"type": "Group", "id": "scene", "children": list(children)}

    def background(self, props: dict[str, Any] | None = None, child: Tree | None = None) -> Tree:
        node_id, rest = self._named(props, "bg")
        return {"type": "Background", "id": node_id, "props": rest, "children": [child] if child else []}

    def stack_h(self, props: dict[str, Any] | None = None, *children: Tree) -> Tree:
        node_id, rest = self._named(props, "stackH")
        return {"type": "StackH", "id": node_id, "props": rest, "children": list(children)}

    def stack_v(self, props: dict[str, Any] | None = None, *children: Tree) -> Tree:
        node_id, rest = self._named(props, "stackV")
        return {"type": "StackV", "id": node_id, "props": rest, "children": list(children)}

    def circle(self, props: dict[str, Any] | None = None) -> Tree:
        node_id, rest = self._named(props, "circle")
        return {"type": "Circle", "id": node_id, "props": rest}

    def rect(self, props: dict[str, Any] | None = None) -> Tree:
        node_id, rest = self._named(props, "rect")
        return {"type": "Rect", "id": node_id, "props": rest}

    def text(self, props: dict[str, Any] | None = None, text: str = "") -> Tree:
        node_id, rest = self._named(props, "text")
        return {"type": "Text", "id": node_id, "props": {**rest, "text": text}}

    def ref(self, select: str) -> Tree:
        return {"type": "Ref", "target": select}

    def distribute(self, props: dict[str, Any] | None = None, *children: Tree) -> Tree:
        node_id, rest = self._named(props, "dist")
        direction = rest.pop("direction", None)
        if direction == "vertical":
            rest["axis"] = "y"
        elif direction == "horizontal":
            rest["axis"] = "x"
        return {"type": "Distribute", "id": node_id, "props": rest, "children": list(children)}

    def align(self, props: dict[str, Any] | None = None, *children: Tree) -> Tree:
        node_id, rest = self._named(props, "align")
        alignment = rest.get("alignment")
        if "axis" not in rest and isinstance(alignment, str) and alignment[-1:] in ("X", "Y"):
            rest["axis"] = alignment[-1].lower()
            rest["alignment"] = alignment[:-1]
        return {"type": "Align", "id": node_id, "props": rest, "children": list(children)}

    def arrow(self, source: Tree, target: Tree, props: dict[str, Any] | None = None) -> Tree:
        node_id, rest = self._named(props, "arrow")
        return {"type": "Arrow", "id": node_id, "props": rest, "children": [source, target]}

    def render(self, tree: Tree, config: RenderConfig | None = None) -> str:
        from modular_svg import render_json

        return render_json(tree, config)


_default = SceneDsl()

scene = _default.scene
background = _default.background
stack_h = _default.stack_h
stack_v = _default.stack_v
circle = _default.circle
rect = _default.rect
text = _default.text
ref = _default.ref
distribute = _default.distribute
align = _default.align
arrow = _default.arrow
render = _default.render
