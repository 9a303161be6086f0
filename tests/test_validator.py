"""
Tests for the parameter validator.
"""

import pytest

from stagewise.core.validation import (
    ConfigurationError,
    ErrorReason,
    InfeasibleGeometryError,
)
from stagewise.separations import (
    ConcurrentSpec,
    CountercurrentSpec,
    CrosscurrentSpec,
    DistillationSpec,
    check,
    validate,
)


class TestValidate:

    @pytest.mark.parametrize("spec", [
        CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87),
        CrosscurrentSpec("3.6*x^2", Ls=600, Gs=275, X0=0.05, Y0=1.54),
        ConcurrentSpec("x", x_in=0.1, y_in=0.9, x_out=0.4, y_out=0.6),
        DistillationSpec(alpha=4.0, R=2.9, q=1.0, xF=0.45, xB=0.02, xD=0.98),
    ])
    def test_valid(self, spec):
        result = validate(spec)
        assert result.ok
        assert result
        assert result.reason is None

    def test_operating_point_on_curve_is_infeasible(self):
        spec = CountercurrentSpec("2*x^2", Ls=1.0, Gs=1.0, x_in=0.5, y_in=0.5, x_out=0.8)
        result = validate(spec)
        assert not result
        assert result.reason is ErrorReason.OPERATING_POINT_ON_WRONG_SIDE

    def test_reflux_below_minimum(self):
        spec = DistillationSpec(alpha=4.0, R=0.6, q=1.0, xF=0.45, xB=0.02, xD=0.98)
        assert validate(spec).reason is ErrorReason.REFLUX_BELOW_MINIMUM

    def test_reflux_just_above_minimum(self):
        spec = DistillationSpec(alpha=4.0, R=0.7, q=1.0, xF=0.45, xB=0.02, xD=0.98)
        assert validate(spec).ok

    def test_flow_ratio(self):
        spec = CountercurrentSpec("2*x^2", Ls=130, Gs=float("inf"), x_in=0.39, y_in=0.36, x_out=0.87)
        assert validate(spec).reason is ErrorReason.INVALID_PARAMETER
        spec = CountercurrentSpec("2*x^2", Ls=130, Gs=-50, x_in=0.39, y_in=0.36, x_out=0.87)
        assert validate(spec).reason is ErrorReason.NON_POSITIVE_FLOW_RATIO

    def test_unknown_mode(self):
        spec = CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87, mode="extraction")
        assert validate(spec).reason is ErrorReason.INVALID_PARAMETER

    def test_x_upper_below_target(self):
        spec = CountercurrentSpec(
            "2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87, x_upper=0.5
        )
        assert validate(spec).reason is ErrorReason.INVALID_PARAMETER

    def test_unsupported_config(self):
        result = validate({"mode": "absorption"})
        assert result.reason is ErrorReason.INVALID_PARAMETER

    def test_does_not_mutate(self):
        spec = CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87)
        before = spec.to_dict()
        validate(spec)
        assert spec.to_dict() == before


class TestCheck:

    def test_raises_typed_errors(self):
        with pytest.raises(InfeasibleGeometryError):
            check(CrosscurrentSpec("3.6*x^2", Ls=600, Gs=275, X0=0.05, Y0=0.0))
        with pytest.raises(ConfigurationError) as excinfo:
            check(ConcurrentSpec("x", x_in=0.5, y_in=0.9, x_out=0.2, y_out=0.6))
        assert excinfo.value.reason is ErrorReason.REVERSED_TERMINAL_ORDER

    def test_returns_converted_spec(self):
        spec = CrosscurrentSpec("3.6*x^2", Ls="600", Gs=275, X0="0.05", Y0=1.54,
                                stages=3.0, bracket=[0, 1])
        checked = check(spec)
        assert checked.Ls == 600.0
        assert checked.X0 == 0.05
        assert isinstance(checked.stages, int)
        assert checked.bracket == (0.0, 1.0)
        assert spec.Ls == "600"

    @pytest.mark.parametrize("spec", [
        CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in="0.39x", y_in=0.36, x_out=0.87),
        CountercurrentSpec("2*x^2", Ls=130, Gs=50, x_in=0.39, y_in=0.36, x_out=0.87, max_stages=10.5),
        DistillationSpec(alpha=4.0, R=None, q=1.0, xF=0.45, xB=0.02, xD=0.98),
    ])
    def test_non_numeric_fields(self, spec):
        with pytest.raises(ConfigurationError):
            check(spec)
