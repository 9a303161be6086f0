"""
Tests for McCabe-Thiele distillation.
"""

import pytest

from stagewise.core.validation import ErrorReason
from stagewise.separations import DistillationSpec, VertexKind, compute_stages
from stagewise.separations.distillation import (
    FenskeEquation,
    MinimumReflux,
    feed_line_intersection,
    minimum_reflux,
    operating_lines,
    pinch_point,
    real_stages,
)
from stagewise.separations.equilibrium import BinaryConstantAlpha


@pytest.fixture
def column():
    return DistillationSpec(alpha=4.0, R=2.9, q=1.0, xF=0.45, xB=0.02, xD=0.98)


class TestColumn:
    """alpha=4, R=2.9, q=1, xF=0.45, xB=0.02, xD=0.98"""

    def test_eight_stages(self, column):
        result = compute_stages(column)
        assert result.feasible, result.message
        assert result.stage_count == 8

    def test_ladder_shape(self, column):
        result = compute_stages(column)
        first, last = result.vertices[0], result.last
        assert first.kind is VertexKind.START
        assert (first.x, first.y) == (0.98, 0.98)
        assert last.kind is VertexKind.FINAL
        assert (last.x, last.y) == (0.02, 0.02)

        curve = BinaryConstantAlpha(4.0)
        xs = [p.x for p in result.equilibrium_points]
        assert xs == sorted(xs, reverse=True)
        for p in result.equilibrium_points:
            assert p.y == pytest.approx(curve.evaluate(p.x), abs=1e-5)
        assert xs[-2] > 0.02 > xs[-1]

    def test_details(self, column):
        details = compute_stages(column).details
        assert details["minimum_reflux"] == pytest.approx(0.6774, abs=1e-3)
        assert details["minimum_stages_total_reflux"] == pytest.approx(5.615, abs=1e-2)
        assert details["feed_intersection"][0] == pytest.approx(0.45)
        assert 1 <= details["feed_stage_from_top"] <= 8
        assert details["real_stages"] == 8

    def test_efficiency_increases_real_stages(self):
        spec = DistillationSpec(
            alpha=4.0, R=2.9, q=1.0, xF=0.45, xB=0.02, xD=0.98, murphree_efficiency=0.7
        )
        result = compute_stages(spec)
        assert result.stage_count == 8
        assert result.details["real_stages"] == 12

    def test_partially_vaporised_feed(self):
        spec = DistillationSpec(alpha=2.5, R=3.0, q=0.5, xF=0.5, xB=0.05, xD=0.95)
        result = compute_stages(spec)
        assert result.feasible, result.message
        assert result.stage_count > FenskeEquation.calculate(0.95, 0.05, 2.5)


class TestMinimumReflux:

    def test_saturated_liquid_pinch(self, column):
        x_p, y_p = pinch_point(column, BinaryConstantAlpha(4.0))
        assert x_p == pytest.approx(0.45)
        assert y_p == pytest.approx(1.8 / 2.35)

    @pytest.mark.parametrize("q", [0.0, 0.5, 1.5])
    def test_pinch_lies_on_q_line(self, q):
        spec = DistillationSpec(alpha=4.0, R=2.9, q=q, xF=0.45, xB=0.02, xD=0.98)
        x_p, y_p = pinch_point(spec, BinaryConstantAlpha(4.0))
        assert y_p == pytest.approx(BinaryConstantAlpha(4.0).evaluate(x_p))
        assert y_p == pytest.approx(q / (q - 1) * x_p - 0.45 / (q - 1))

    def test_formula(self):
        assert MinimumReflux.calculate(0.98, 0.45, 1.8 / 2.35) == pytest.approx(0.6774, abs=1e-3)
        assert MinimumReflux.calculate(0.98, 0.98, 0.98) == float('inf')

    def test_reflux_below_minimum(self, column):
        spec = DistillationSpec(alpha=4.0, R=0.5, q=1.0, xF=0.45, xB=0.02, xD=0.98)
        assert minimum_reflux(spec) > 0.5
        result = compute_stages(spec)
        assert not result.feasible
        assert result.error_reason is ErrorReason.REFLUX_BELOW_MINIMUM


class TestLines:

    def test_lines_meet_at_feed_intersection(self, column):
        lines = operating_lines(column)
        feed = feed_line_intersection(column)
        assert lines.x_switch == pytest.approx(feed.x)
        assert lines.upper.value_at(feed.x) == pytest.approx(lines.lower.value_at(feed.x))
        assert lines.lower.value_at(0.02) == pytest.approx(0.02)
        assert lines.upper.value_at(0.98) == pytest.approx(0.98)


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        dict(xB=0.5, xF=0.45, xD=0.98),
        dict(xB=0.02, xF=0.99, xD=0.98),
    ])
    def test_composition_order(self, kwargs):
        spec = DistillationSpec(alpha=4.0, R=2.9, q=1.0, **kwargs)
        assert compute_stages(spec).error_reason is ErrorReason.REVERSED_TERMINAL_ORDER

    @pytest.mark.parametrize("kwargs", [
        dict(alpha=1.0),
        dict(alpha=0.8),
        dict(murphree_efficiency=0.0),
        dict(murphree_efficiency=1.2),
        dict(xD=1.0),
        dict(R=-1.0),
    ])
    def test_invalid_parameters(self, kwargs):
        params = dict(alpha=4.0, R=2.9, q=1.0, xF=0.45, xB=0.02, xD=0.98)
        params.update(kwargs)
        result = compute_stages(DistillationSpec(**params))
        assert not result.feasible
        assert result.error_reason is ErrorReason.INVALID_PARAMETER


class TestEfficiency:

    def test_real_stages(self):
        assert real_stages(8, 1.0) == 8
        assert real_stages(8, 0.7) == 12
        assert real_stages(7, 0.7) == 10
