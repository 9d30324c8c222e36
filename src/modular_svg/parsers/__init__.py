"""Parser registry: pick a parser for the input and produce a syntax tree."""

from __future__ import annotations

from typing import Any, Callable

from modular_svg.parsers.base import Parser
from modular_svg.parsers.json_tree import JsonTreeParser
from modular_svg.syntax.types import Element, Node, Ref

_PARSERS: dict[str, Callable[[], Parser]] = {
    "json": JsonTreeParser,
}


def parse(data: Any, format: str = "json") -> Node:
    """Validate `data` and return the narrowed syntax tree.

    Already-narrowed trees are returned unchanged.
    """
    if isinstance(data, (Element, Ref)):
        return data
    parser_cls = _PARSERS.get(format)
    if parser_cls is None:
        raise ValueError(f"Unsupported scene format: {format}")
    return parser_cls().parse(data)
