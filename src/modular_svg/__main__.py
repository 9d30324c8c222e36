"""CLI entry point for modular-svg."""

import logging
import sys

import click

from modular_svg.config import RenderConfig, SolverConfig
from modular_svg.errors import ModularSvgError
from modular_svg.ir.builder import build_scene
from modular_svg.layout.solver import solve_layout
from modular_svg.renderers.base import Renderer
from modular_svg.renderers.svg import SvgRenderer


@click.command()
@click.argument("input", required=False, default="-", type=str)
@click.argument("output", required=False, default=None, type=str)
@click.option("--margin", "-m", "margin", type=float, default=0.0, help="Blank space around the drawing")
@click.option("--max-iterations", "max_iterations", type=int, default=None, help="Solver pass budget (default 100)")
@click.option("--epsilon", "epsilon", type=float, default=None, help="Convergence threshold (default 1e-6)")
@click.option("--damping", "damping", type=float, default=None, help="Blend factor in (0, 1] (default 0.5)")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log solver progress to stderr")
def main(
    input: str,
    output: str | None,
    margin: float,
    max_iterations: int | None,
    epsilon: float | None,
    damping: float | None,
    verbose: bool,
) -> None:
    """Render a JSON scene tree to SVG."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)

    config = RenderConfig(
        margin=margin,
        solver=SolverConfig().with_overrides(max_iterations=max_iterations, epsilon=epsilon, damping=damping),
    )

    try:
        scene = build_scene(text)
    except ModularSvgError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    layout = solve_layout(scene, config.solver)
    renderer: Renderer = SvgRenderer(margin=config.margin)
    rendered = renderer.render(layout, scene.nodes)

    if output and output != "-":
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


if __name__ == "__main__":
    main()
