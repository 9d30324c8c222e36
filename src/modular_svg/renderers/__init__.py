"""Renderers: solved layout -> SVG document -> markup."""

from modular_svg.renderers.document import (
    CircleElement,
    LineElement,
    PolygonElement,
    RectElement,
    SvgDocument,
    SvgElement,
    TextElement,
    arrow_geometry,
    layout_bounds,
    layout_to_document,
)
from modular_svg.renderers.svg import SvgRenderer, format_number, layout_to_svg, serialize_svg, xml

__all__ = [
    "CircleElement",
    "LineElement",
    "PolygonElement",
    "RectElement",
    "SvgDocument",
    "SvgElement",
    "SvgRenderer",
    "TextElement",
    "arrow_geometry",
    "format_number",
    "layout_bounds",
    "layout_to_document",
    "layout_to_svg",
    "serialize_svg",
    "xml",
]
