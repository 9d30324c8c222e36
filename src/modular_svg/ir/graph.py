"""Scene graph: networkx views of how a compiled scene's constraints interact.

Two graphs are derived from a Scene:
  - the entity graph, over node ids, with an edge u -> v whenever some
    operator reads u's geometry and writes v's (plus arrow endpoint -> arrow);
  - the operator graph, over operator indices, with an edge i -> j whenever
    operator i writes an entity that operator j reads.

A cyclic operator graph means no evaluation order settles the scene in one
pass; the relaxation solver copes with that, the graph only reports it.
"""

from __future__ import annotations

from dataclasses import dataclass

import networkx as nx

from modular_svg.ir.scene import SLOTS_PER_NODE, NodeRecord, Scene
from modular_svg.layout.operators import (
    AlignCenter,
    AlignCenterTo,
    AlignMax,
    AlignMin,
    BackgroundOp,
    Distribute,
    Operator,
    Stack,
)


@dataclass
class EdgeData:
    operators: list[int]


def operator_reads(op: Operator) -> tuple[int, ...]:
    """Slots an operator reads from the current state."""
    if isinstance(op, AlignMin):
        return op.positions
    if isinstance(op, (AlignMax, AlignCenter, Distribute)):
        return tuple(slot for pair in op.pairs for slot in pair)
    if isinstance(op, AlignCenterTo):
        return op.anchor + tuple(slot for pair in op.pairs for slot in pair)
    if isinstance(op, Stack):
        cross = op.axis.cross
        reads = [op.container + cross.size]
        for base in op.children:
            reads.extend((base + op.axis.size, base + cross.size))
        return tuple(reads)
    if isinstance(op, BackgroundOp):
        return (op.child, op.child + 1, op.child + 2, op.child + 3)
    raise TypeError(f"unknown operator {type(op).__name__}")


class SceneGraph:
    """Dependency view of a compiled Scene.

    Wraps a networkx DiGraph over node ids and exposes topology queries.
    """

    def __init__(self, digraph: nx.DiGraph, operators: nx.DiGraph) -> None:
        self.digraph = digraph
        self.operators = operators

    @classmethod
    def from_scene(cls, scene: Scene) -> SceneGraph:
        digraph: nx.DiGraph = nx.DiGraph()
        for rec in scene.nodes:
            digraph.add_node(rec.id, data=rec)

        def owner(slot: int) -> str:
            return scene.nodes[slot // SLOTS_PER_NODE].id

        reads: list[set[str]] = []
        writes: list[set[str]] = []
        for i, op in enumerate(scene.operators):
            r = {owner(s) for s in operator_reads(op)}
            w = {owner(s) for s in op.slots}
            reads.append(r)
            writes.append(w)
            for src in sorted(r):
                for tgt in sorted(w):
                    if src != tgt:
                        _add_edge(digraph, src, tgt, i)

        for rec in scene.nodes:
            for endpoint in (rec.from_id, rec.to_id):
                if endpoint is not None and endpoint in digraph:
                    _add_edge(digraph, endpoint, rec.id, -1)

        op_graph: nx.DiGraph = nx.DiGraph()
        op_graph.add_nodes_from(range(len(scene.operators)))
        for i, written in enumerate(writes):
            for j, read in enumerate(reads):
                if i != j and written & read:
                    op_graph.add_edge(i, j)

        return cls(digraph=digraph, operators=op_graph)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def record(self, node_id: str) -> NodeRecord:
        return self.digraph.nodes[node_id]["data"]

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def operators_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.operators)

    def operator_order(self) -> list[int] | None:
        """An operator order in which every writer precedes its readers, if one exists."""
        try:
            return list(nx.topological_sort(self.operators))
        except nx.NetworkXUnfeasible:
            return None

    def operator_feedback(self) -> list[list[int]]:
        """Groups of operators that feed each other (strongly connected, size > 1)."""
        groups = [sorted(c) for c in nx.strongly_connected_components(self.operators) if len(c) > 1]
        return sorted(groups)

    def dependents(self, node_id: str) -> list[str]:
        """Every node whose geometry depends, directly or not, on `node_id`."""
        if node_id not in self.digraph:
            return []
        return sorted(nx.descendants(self.digraph, node_id))


def _add_edge(digraph: nx.DiGraph, src: str, tgt: str, op_index: int) -> None:
    if digraph.has_edge(src, tgt):
        digraph.edges[src, tgt]["data"].operators.append(op_index)
    else:
        digraph.add_edge(src, tgt, data=EdgeData(operators=[op_index]))
