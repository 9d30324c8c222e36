"""Centralized configuration for modular-svg."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class SolverConfig:
    """Knobs for the relaxation solver."""

    max_iterations: int = 100
    epsilon: float = 1e-6
    damping: float = 0.5

    def with_overrides(self, **overrides: float | int | None) -> SolverConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


@dataclass
class RenderConfig:
    """Configuration for the full json -> svg pipeline."""

    margin: float = 0.0
    solver: SolverConfig = field(default_factory=SolverConfig)
