"""x-y diagram of a stage ladder"""

from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from .equilibrium import EquilibriumCurve
from .staging import StageResult, VertexKind


def plot_stage_result(
    result: StageResult,
    curve: Optional[EquilibriumCurve] = None,
    ax=None,
    show: bool = False,
    title: str = "Stage Construction",
):
    """
    Draw the staircase, the stage points and optionally the equilibrium curve.

    Returns the matplotlib Axes so callers can add operating lines or
    annotations of their own.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 8))

    xs = np.array([v.x for v in result.vertices])
    ys = np.array([v.y for v in result.vertices])

    if curve is not None:
        hi = max(1.0, float(xs.max())) if xs.size else 1.0
        lo, top = curve.domain
        x_grid = np.linspace(lo, min(hi, top), 200)
        ax.plot(x_grid, curve.sample(x_grid), 'b-', linewidth=2, label='Equilibrium curve')

    if xs.size:
        ax.plot(xs, ys, 'k-', linewidth=1.2, label='Stages')
        eq = [v for v in result.vertices if v.on_equilibrium]
        ax.plot([v.x for v in eq], [v.y for v in eq], 'ro', markersize=5)
        for v in eq:
            ax.annotate(str(v.stage_index), (v.x, v.y), textcoords="offset points", xytext=(4, 4))
        final = [v for v in result.vertices if v.kind is VertexKind.FINAL]
        if final:
            ax.plot([final[0].x], [final[0].y], 'go', markersize=6, label='Terminal point')

    status = f"{result.stage_count} stages" if result.feasible else f"infeasible: {result.message}"
    ax.set_xlabel('x (liquid composition)')
    ax.set_ylabel('y (gas composition)')
    ax.set_title(f"{title} ({status})")
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    if show:
        plt.tight_layout()
        plt.show()
    return ax


__all__ = ['plot_stage_result']
