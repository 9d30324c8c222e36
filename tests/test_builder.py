"""Tests for modular_svg.ir.builder: ids, references, descriptors, and operator compilation."""

import pytest

from modular_svg.errors import DuplicateIdError, SchemaError, UnresolvedReferenceError
from modular_svg.ir.builder import build_scene
from modular_svg.layout.operators import (
    AlignCenter,
    AlignCenterTo,
    AlignMax,
    AlignMin,
    BackgroundOp,
    Distribute,
    Stack,
)
from modular_svg.types import Alignment, Axis, NodeKind


def _group(*children: dict) -> dict:
    return {"type": "Group", "children": list(children)}


class TestIdentity:
    def test_auto_ids_follow_tree_path(self):
        scene = build_scene(_group({"type": "Circle"}, {"type": "StackV", "children": [{"type": "Rect"}]}))
        assert scene.ids() == ["group-0", "circle-0.0", "stackv-0.1", "rect-0.1.0"]

    def test_same_tree_same_ids(self):
        tree = _group(
            {"type": "StackV", "children": [{"type": "Circle"}, {"type": "StackH", "children": [{"type": "Rect"}, {"type": "Rect"}]}]}
        )
        assert build_scene(tree).ids() == build_scene(tree).ids()

    def test_siblings_of_same_type_get_distinct_ids(self):
        scene = build_scene(_group({"type": "Circle"}, {"type": "Circle"}, {"type": "Circle"}))
        ids = scene.ids()
        assert len(set(ids)) == len(ids)

    def test_key_preferred_over_id(self):
        scene = build_scene(_group({"type": "Circle", "id": "old-id", "key": "new-key"}))
        assert "new-key" in scene.ids()
        assert "old-id" not in scene.ids()

    def test_legacy_id_used(self):
        scene = build_scene(_group({"type": "Circle", "id": "old-style-id"}))
        assert scene.node("old-style-id").kind == NodeKind.CIRCLE

    def test_generated_id_collision_gets_suffix(self):
        scene = build_scene(_group({"type": "Rect", "key": "circle-0.1"}, {"type": "Circle"}))
        assert scene.ids() == ["group-0", "circle-0.1", "circle-0.1-1"]

    def test_suffix_scan_skips_taken_suffixes(self):
        scene = build_scene(
            _group({"type": "Rect", "key": "circle-0.2"}, {"type": "Rect", "key": "circle-0.2-1"}, {"type": "Circle"})
        )
        assert scene.ids()[-1] == "circle-0.2-2"

    def test_duplicate_key_rejected(self):
        tree = _group({"type": "Circle", "key": "dup"}, {"type": "Circle", "key": "dup"})
        with pytest.raises(DuplicateIdError) as exc:
            build_scene(tree)
        assert exc.value.id == "dup"

    def test_duplicate_id_rejected(self):
        with pytest.raises(DuplicateIdError):
            build_scene(_group({"type": "Rect", "id": "a"}, {"type": "Rect", "id": "a"}))

    def test_explicit_id_clashing_with_generated_rejected(self):
        with pytest.raises(DuplicateIdError):
            build_scene(_group({"type": "Circle"}, {"type": "Rect", "id": "circle-0.0"}))

    def test_nested_duplicate_key_rejected(self):
        tree = _group({"type": "StackV", "key": "x", "children": [{"type": "Rect", "key": "x"}]})
        with pytest.raises(DuplicateIdError):
            build_scene(tree)


class TestRecords:
    def test_circle_record(self):
        scene = build_scene({"type": "Circle", "id": "c", "props": {"r": 10, "x": 3, "fill": "red"}})
        rec = scene.node("c")
        assert rec.kind == NodeKind.CIRCLE
        assert (rec.x, rec.width, rec.height, rec.r) == (3, 20, 20, 10)
        assert rec.fill == "red"
        assert rec.stroke_width == 1

    def test_rect_and_background_stroke_default(self):
        scene = build_scene({"type": "Background", "id": "bg", "children": [{"type": "Rect", "id": "r"}]})
        assert scene.node("bg").kind == NodeKind.RECT
        assert scene.node("bg").stroke_width == 3
        assert scene.node("r").stroke_width == 3

    def test_text_size_estimated(self):
        scene = build_scene({"type": "Text", "id": "t", "props": {"text": "hello"}})
        rec = scene.node("t")
        assert rec.kind == NodeKind.TEXT
        assert (rec.width, rec.height) == (40, 16)
        assert rec.fill == "black"
        assert rec.stroke_width is None

    def test_text_size_given(self):
        rec = build_scene({"type": "Text", "id": "t", "props": {"text": "hi", "width": 7, "height": 9}}).node("t")
        assert (rec.width, rec.height) == (7, 9)

    def test_containers_have_no_kind(self):
        scene = build_scene({"type": "Widget", "children": [{"type": "StackH"}]})
        assert scene.ids() == ["widget-0", "stackh-0.0"]
        assert all(n.kind == NodeKind.NONE for n in scene.nodes)


class TestReferences:
    def test_ref_reuses_record(self):
        scene = build_scene(_group({"type": "Circle", "id": "a"}, {"type": "Align", "children": [{"type": "Ref", "target": "a"}]}))
        assert scene.ids().count("a") == 1
        assert len(scene.nodes) == 3

    def test_unknown_ref(self):
        with pytest.raises(UnresolvedReferenceError) as exc:
            build_scene(_group({"type": "Ref", "target": "ghost"}))
        assert exc.value.target == "ghost"

    def test_forward_ref_rejected(self):
        tree = _group({"type": "Align", "children": [{"type": "Ref", "target": "later"}]}, {"type": "Rect", "id": "later"})
        with pytest.raises(UnresolvedReferenceError):
            build_scene(tree)

    def test_arrow_endpoints(self):
        tree = _group(
            {"type": "Circle", "id": "a"},
            {"type": "Circle", "id": "b"},
            {"type": "Arrow", "id": "arr", "children": [{"type": "Ref", "target": "a"}, {"type": "Ref", "target": "b"}]},
        )
        scene = build_scene(tree)
        arrow = scene.node("arr")
        assert arrow.kind == NodeKind.ARROW
        assert (arrow.from_id, arrow.to_id) == ("a", "b")
        assert scene.operators == []

    def test_arrow_with_one_child_has_no_endpoints(self):
        scene = build_scene(_group({"type": "Circle", "id": "a"}, {"type": "Arrow", "id": "arr", "children": [{"type": "Ref", "target": "a"}]}))
        assert scene.node("arr").from_id is None

    def test_schema_error_before_build(self):
        with pytest.raises(SchemaError):
            build_scene({"type": "Group", "children": [{"type": "Ref"}]})


class TestOperators:
    def test_stack_compiles_to_slot_offsets(self):
        tree = {
            "type": "StackH",
            "id": "row",
            "props": {"spacing": 50, "alignment": "centerY"},
            "children": [{"type": "Circle", "id": "c1"}, {"type": "Circle", "id": "c2"}],
        }
        scene = build_scene(tree)
        assert scene.operators == [Stack(Axis.X, (4, 8), 0, 50, Alignment.CENTER)]

    def test_background_compiles(self):
        scene = build_scene({"type": "Background", "id": "bg", "props": {"padding": 10}, "children": [{"type": "Rect"}]})
        assert scene.operators == [BackgroundOp(child=4, box=0, padding=10)]

    def test_background_without_child_has_no_operator(self):
        assert build_scene({"type": "Background"}).operators == []

    def test_inner_containers_compile_first(self):
        tree = {"type": "Background", "children": [{"type": "StackV", "children": [{"type": "Rect"}]}]}
        ops = build_scene(tree).operators
        assert isinstance(ops[0], Stack)
        assert isinstance(ops[1], BackgroundOp)

    def _align(self, props: dict) -> list:
        tree = _group(
            {"type": "Rect", "id": "a"},
            {"type": "Rect", "id": "b"},
            {"type": "Align", "props": props, "children": [{"type": "Ref", "target": "a"}, {"type": "Ref", "target": "b"}]},
        )
        return build_scene(tree).operators

    def test_align_left(self):
        assert self._align({"alignment": "left"}) == [AlignMin((4, 8))]

    def test_align_top(self):
        assert self._align({"axis": "y", "alignment": "top"}) == [AlignMin((5, 9))]

    def test_align_right(self):
        assert self._align({"alignment": "right"}) == [AlignMax(((4, 6), (8, 10)))]

    def test_align_bottom(self):
        assert self._align({"axis": "y", "alignment": "bottom"}) == [AlignMax(((5, 7), (9, 11)))]

    def test_align_center_x_anchors_on_last_child(self):
        assert self._align({"alignment": "centerX"}) == [AlignCenterTo((8, 10), ((4, 6),))]

    def test_align_center_y_uses_mean(self):
        assert self._align({"alignment": "centerY"}) == [AlignCenter(((5, 7), (9, 11)))]

    def test_distribute_vertical(self):
        tree = _group(
            {"type": "Rect", "id": "a"},
            {"type": "Rect", "id": "b"},
            {"type": "Distribute", "props": {"direction": "vertical", "spacing": 60}, "children": [{"type": "Ref", "target": "a"}, {"type": "Ref", "target": "b"}]},
        )
        assert build_scene(tree).operators == [Distribute(((5, 7), (9, 11)), 60)]

    def test_compilation_is_deterministic(self):
        tree = _group(
            {"type": "StackV", "props": {"spacing": 3}, "children": [{"type": "Circle"}, {"type": "Circle"}]},
            {"type": "Align", "props": {"alignment": "centerX"}, "children": [{"type": "Ref", "target": "circle-0.0.0"}, {"type": "Text"}]},
        )
        first, second = build_scene(tree), build_scene(tree)
        assert first.ids() == second.ids()
        assert first.operators == second.operators
