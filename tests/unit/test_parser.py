"""Tests for modular_svg.parsers: validation and narrowing of the JSON tree."""

import pytest

from modular_svg.errors import SchemaError
from modular_svg.parsers import parse
from modular_svg.parsers.json_tree import RawNode, narrow
from modular_svg.syntax import types as syn
from modular_svg.types import Alignment, Axis


def test_parse_dict_and_json_text_agree():
    data = {"type": "Rect", "id": "r", "props": {"width": 10, "height": 5}}
    text = '{"type": "Rect", "id": "r", "props": {"width": 10, "height": 5}}'
    assert parse(data) == parse(text)


def test_parse_rect_props():
    node = parse({"type": "Rect", "props": {"x": 1, "y": 2, "width": 3, "height": 4, "fill": "red", "stroke-width": 2}})
    assert isinstance(node, syn.Rect)
    assert (node.x, node.y, node.width, node.height) == (1, 2, 3, 4)
    assert node.style.fill == "red"
    assert node.style.stroke_width == 2


def test_parse_stroke_width_camel_case_alias():
    node = parse({"type": "Circle", "props": {"r": 4, "strokeWidth": 5}})
    assert isinstance(node, syn.Circle)
    assert node.style.stroke_width == 5


def test_parse_children_and_ref():
    node = parse({"type": "Group", "children": [{"type": "Circle", "key": "c"}, {"type": "Ref", "target": "c"}]})
    assert isinstance(node, syn.Group)
    assert isinstance(node.children[0], syn.Circle)
    assert node.children[0].key == "c"
    assert node.children[1] == syn.Ref(target="c")


def test_unknown_type_becomes_container():
    node = parse({"type": "Widget", "children": [{"type": "Rect"}]})
    assert isinstance(node, syn.Container)
    assert node.type_name == "Widget"
    assert len(node.children) == 1


def test_already_narrowed_tree_passes_through():
    tree = syn.Group(children=[syn.Rect(width=1)])
    assert parse(tree) is tree


class TestAlignNormalization:
    def test_defaults(self):
        node = parse({"type": "Align"})
        assert isinstance(node, syn.Align)
        assert node.axis == Axis.X
        assert node.alignment == Alignment.START

    def test_center_x_suffix(self):
        node = parse({"type": "Align", "props": {"alignment": "centerX"}})
        assert node.axis == Axis.X
        assert node.alignment == Alignment.CENTER

    def test_center_y_suffix(self):
        node = parse({"type": "Align", "props": {"alignment": "centerY"}})
        assert node.axis == Axis.Y
        assert node.alignment == Alignment.CENTER

    def test_explicit_axis_and_type_prop(self):
        node = parse({"type": "Align", "props": {"axis": "y", "type": "bottom"}})
        assert node.axis == Axis.Y
        assert node.alignment == Alignment.END

    def test_direction_prop(self):
        node = parse({"type": "Align", "props": {"direction": "y", "alignment": "top"}})
        assert node.axis == Axis.Y
        assert node.alignment == Alignment.START

    def test_alignment_not_valid_for_axis(self):
        with pytest.raises(SchemaError):
            parse({"type": "Align", "props": {"axis": "x", "alignment": "top"}})

    def test_suffix_conflicts_with_axis(self):
        with pytest.raises(SchemaError):
            parse({"type": "Align", "props": {"axis": "y", "alignment": "centerX"}})


class TestStackAndDistribute:
    def test_stack_h_alignment(self):
        node = parse({"type": "StackH", "props": {"spacing": 5, "alignment": "centerY"}})
        assert isinstance(node, syn.StackH)
        assert node.axis == Axis.X
        assert node.spacing == 5
        assert node.alignment == Alignment.CENTER

    def test_stack_v_default_alignment(self):
        node = parse({"type": "StackV"})
        assert node.axis == Axis.Y
        assert node.alignment == Alignment.START

    def test_stack_v_rejects_vertical_alignment(self):
        with pytest.raises(SchemaError):
            parse({"type": "StackV", "props": {"alignment": "top"}})

    def test_distribute_direction(self):
        node = parse({"type": "Distribute", "props": {"direction": "vertical", "spacing": 60}})
        assert isinstance(node, syn.Distribute)
        assert node.axis == Axis.Y
        assert node.spacing == 60

    def test_distribute_negative_spacing(self):
        with pytest.raises(SchemaError):
            parse({"type": "Distribute", "props": {"spacing": -1}})


class TestSchemaErrors:
    @pytest.mark.parametrize(
        "data",
        [
            {"type": 5},
            {"props": {}},
            {"type": "Ref"},
            {"type": "Ref", "target": "a", "children": [{"type": "Rect"}]},
            {"type": "Rect", "colour": "red"},
            {"type": "Group", "children": "nope"},
            {"type": "Rect", "props": {"width": "wide"}},
            {"type": "Rect", "props": {"width": True}},
            {"type": "Background", "props": {"padding": -2}},
            {"type": "Circle", "props": {"fill": 3}},
            {"type": "Distribute", "props": {"axis": "z"}},
            [],
        ],
    )
    def test_rejected(self, data):
        with pytest.raises(SchemaError):
            parse(data)

    def test_invalid_json_text(self):
        with pytest.raises(SchemaError):
            parse("{not json")

    def test_error_names_location(self):
        with pytest.raises(SchemaError, match=r"Rect@0\.1"):
            parse({"type": "Group", "children": [{"type": "Rect"}, {"type": "Rect", "props": {"x": "1"}}]})

    def test_schema_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse({"type": "Ref"})

    @pytest.mark.parametrize(
        "data",
        [{"type": "Rect", "props": {"x": 10**400}}, '{"type": "Rect", "props": {"x": ' + "9" * 400 + "}}"],
    )
    def test_integer_too_large_for_float(self, data):
        with pytest.raises(SchemaError, match="too large"):
            parse(data)

    def test_ref_without_target_is_schema_error(self):
        # model_construct skips validation, so narrowing must check on its own
        with pytest.raises(SchemaError, match="Ref@0"):
            narrow(RawNode.model_construct(type="Ref"))
