"""
Tests for countercurrent absorption and stripping stage construction.
"""

import pytest

from stagewise.core.validation import ErrorReason
from stagewise.separations import CountercurrentSpec, VertexKind, compute_stages
from stagewise.separations.absorption import (
    check_countercurrent,
    countercurrent_policy,
    outlet_gas_composition,
)
from stagewise.separations.staging import Orientation, Step


@pytest.fixture
def absorber():
    return CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87)


class TestAbsorption:
    """y = 2x^2, Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87"""

    def test_outlet_gas_composition(self):
        assert outlet_gas_composition(130, 50, 0.39, 0.36, 0.87) == pytest.approx(1.608)

    def test_orientation_detected(self, absorber):
        assert check_countercurrent(absorber) is Orientation.ABSORPTION
        policy = countercurrent_policy(absorber)
        assert policy.equilibrium_step is Step.HORIZONTAL
        assert policy.terminal.y == pytest.approx(1.608)

    def test_stage_ladder(self, absorber):
        result = compute_stages(absorber)

        assert result.feasible
        assert result.error_reason is None
        assert result.stage_count > 0
        assert result.details["y_out"] == pytest.approx(1.608)
        assert result.details["operating_slope"] == pytest.approx(2.6)

        first = result.vertices[0]
        assert first.kind is VertexKind.START
        assert (first.x, first.y) == (0.39, 0.36)

        # every equilibrium vertex lies on y = 2x^2
        for p in result.equilibrium_points:
            assert p.y == pytest.approx(2 * p.x ** 2, abs=1e-5)

        # liquid composition grows stage to stage
        xs = [p.x for p in result.equilibrium_points]
        assert xs == sorted(xs)

    def test_ends_on_terminal_point(self, absorber):
        result = compute_stages(absorber)
        last = result.last
        assert last.kind is VertexKind.FINAL
        assert last.x == pytest.approx(0.87)
        assert last.y == pytest.approx(1.608)
        assert result.stage_count - 1 < result.fractional_stages <= result.stage_count

    def test_stripping_mode_rejected_for_absorber(self, absorber):
        spec = CountercurrentSpec(
            "2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87, mode="stripping"
        )
        result = compute_stages(spec)
        assert not result.feasible
        assert result.error_reason is ErrorReason.OPERATING_POINT_ON_WRONG_SIDE
        assert "below" in result.message

    def test_stage_count_never_increases_with_flow_ratio(self):
        counts = []
        for Ls in (125, 130, 150, 175, 200):
            result = compute_stages(
                CountercurrentSpec("2*x^2", Ls=Ls, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87)
            )
            assert result.feasible, result.message
            counts.append(result.stage_count)
        assert all(a >= b for a, b in zip(counts, counts[1:]))


class TestStripping:
    """y = 3x with the operating line below the curve"""

    @staticmethod
    def _spec(ratio):
        return CountercurrentSpec("3*x", Ls=ratio, Gs=1.0, x_in=0.05, y_in=0.1, x_out=0.3)

    def test_orientation(self):
        assert check_countercurrent(self._spec(1.0)) is Orientation.STRIPPING
        assert countercurrent_policy(self._spec(1.0)).equilibrium_step is Step.VERTICAL

    def test_stage_counts(self):
        counts = [compute_stages(self._spec(s)).stage_count for s in (0.5, 1.0, 1.5, 2.0, 2.5)]
        assert counts == [2, 3, 4, 5, 7]

    def test_vertical_then_horizontal(self):
        result = compute_stages(self._spec(0.5))
        kinds = [v.kind for v in result.vertices]
        assert kinds[:3] == [VertexKind.START, VertexKind.VERTICAL, VertexKind.HORIZONTAL]
        assert result.vertices[1].on_equilibrium
        assert result.vertices[1].y == pytest.approx(0.15)
        assert result.vertices[2].x == pytest.approx(0.15)


class TestInfeasible:

    def test_point_on_curve(self):
        # (0.5, 0.5) lies exactly on y = 2x^2
        spec = CountercurrentSpec("2*x^2", Ls=1.0, Gs=1.0, x_in=0.5, y_in=0.5, x_out=0.8)
        result = compute_stages(spec)
        assert not result.feasible
        assert result.error_reason is ErrorReason.OPERATING_POINT_ON_WRONG_SIDE
        assert result.vertices == ()

    def test_points_on_opposite_sides(self):
        spec = CountercurrentSpec("2*x^2", Ls=0.5, Gs=1.0, x_in=0.39, y_in=0.36, x_out=0.87)
        result = compute_stages(spec)
        assert result.error_reason is ErrorReason.OPERATING_POINT_ON_WRONG_SIDE
        assert "either above or below" in result.message

    def test_reversed_terminals(self):
        spec = CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.87, y_in=0.36, x_out=0.39)
        assert compute_stages(spec).error_reason is ErrorReason.REVERSED_TERMINAL_ORDER

    @pytest.mark.parametrize("Ls, Gs", [(0, 50), (130, 0), (-1, 50)])
    def test_non_positive_flows(self, Ls, Gs):
        spec = CountercurrentSpec("2*x^2", Ls=Ls, Gs=Gs, x_in=0.39, y_in=0.36, x_out=0.87)
        assert compute_stages(spec).error_reason is ErrorReason.NON_POSITIVE_FLOW_RATIO

    def test_bad_expression(self):
        spec = CountercurrentSpec("2x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87)
        assert compute_stages(spec).error_reason is ErrorReason.INVALID_EQUILIBRIUM_FUNCTION
