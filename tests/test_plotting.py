"""
Smoke tests for the matplotlib helper.
"""

import matplotlib.pyplot as plt
import pytest

from stagewise import CountercurrentSpec, DistillationSpec, compute_stages, plot_stage_result
from stagewise.separations.equilibrium import BinaryConstantAlpha, ExpressionEquilibrium


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plots_ladder_and_curve():
    result = compute_stages(DistillationSpec(alpha=4.0, R=2.9, q=1.0, xF=0.45, xB=0.02, xD=0.98))
    ax = plot_stage_result(result, curve=BinaryConstantAlpha(4.0))
    assert "8 stages" in ax.get_title()
    assert len(ax.lines) >= 3


def test_infeasible_result():
    spec = CountercurrentSpec("2*x^2", Ls=0.5, Gs=1.0, x_in=0.39, y_in=0.36, x_out=0.87)
    result = compute_stages(spec)
    _, ax = plt.subplots()
    returned = plot_stage_result(result, curve=ExpressionEquilibrium("2*x^2"), ax=ax)
    assert returned is ax
    assert "infeasible" in ax.get_title()
