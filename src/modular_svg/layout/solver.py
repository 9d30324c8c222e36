"""Relaxation solver.

Repeats passes over the operator list until the largest per-slot change in a
pass drops to epsilon or the iteration budget runs out. Within a pass each
operator's proposal is blended into the live state right after it is
evaluated, so later operators see earlier ones' updates (Gauss-Seidel).
Running out of iterations is not an error: the last state is returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modular_svg.config import SolverConfig
from modular_svg.ir.scene import SLOTS_PER_NODE
from modular_svg.layout.state import GeometryState
from modular_svg.layout.types import LayoutResult, SolveStats

if TYPE_CHECKING:
    from modular_svg.ir.scene import Scene

logger = logging.getLogger(__name__)


def _log_feedback(scene: Scene) -> None:
    from modular_svg.ir.graph import SceneGraph

    graph = SceneGraph.from_scene(scene)
    feedback = graph.operator_feedback()
    if feedback:
        logger.debug("operators feed each other: %s", feedback)
    else:
        logger.debug("operator graph is acyclic (%d operators)", len(scene.operators))


def relax(state: GeometryState, scene: Scene, config: SolverConfig) -> SolveStats:
    """Run the relaxation loop on `state` in place."""
    cur = state.values
    nxt = list(cur)
    damping = config.damping
    plan = [(op, tuple(dict.fromkeys(op.slots))) for op in scene.operators]

    iterations = 0
    residual = float("inf")
    while iterations < config.max_iterations and residual > config.epsilon:
        residual = 0.0
        for op, slots in plan:
            for i in slots:
                nxt[i] = cur[i]
            op.eval(cur, nxt)
            for i in slots:
                delta = nxt[i] - cur[i]
                if abs(delta) > residual:
                    residual = abs(delta)
                cur[i] += damping * delta
        iterations += 1

    return SolveStats(iterations=iterations, residual=residual, converged=residual <= config.epsilon)


def solve_layout(
    scene: Scene,
    config: SolverConfig | None = None,
    *,
    max_iterations: int | None = None,
    epsilon: float | None = None,
    damping: float | None = None,
) -> LayoutResult:
    """Solve a compiled scene and return the id -> box layout."""
    cfg = (config or SolverConfig()).with_overrides(
        max_iterations=max_iterations, epsilon=epsilon, damping=damping
    )
    if logger.isEnabledFor(logging.DEBUG):
        _log_feedback(scene)

    state = GeometryState.from_records(scene.nodes)
    stats = relax(state, scene, cfg)
    if stats.converged:
        logger.debug("converged after %d passes (residual %.3g)", stats.iterations, stats.residual)
    else:
        logger.warning(
            "layout did not converge after %d passes (residual %.3g); using best effort",
            stats.iterations,
            stats.residual,
        )

    boxes = {n.id: state.box(i * SLOTS_PER_NODE) for i, n in enumerate(scene.nodes)}
    return LayoutResult(boxes=boxes, stats=stats)
