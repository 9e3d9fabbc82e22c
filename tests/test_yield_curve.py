from __future__ import annotations

import numpy as np
import pytest

from quant_engine import EmptyCurveError, InvalidArgumentError, MarketData
from quant_engine.market import YieldCurve


@pytest.mark.parametrize("query", [0.0, 0.25, 1.0, 7.5, 100.0])
def test_single_point_curve_is_flat(query: float):
    md = MarketData()
    md.add_risk_free_rate(2.0, 0.035)
    assert md.get_risk_free_rate(query) == pytest.approx(0.035)


def test_two_points_midpoint_and_flat_extrapolation():
    md = MarketData()
    md.add_risk_free_rate(1.0, 0.02)
    md.add_risk_free_rate(3.0, 0.04)

    assert md.get_risk_free_rate(2.0) == pytest.approx(0.03)
    assert md.get_risk_free_rate(0.5) == pytest.approx(0.02)
    assert md.get_risk_free_rate(1.0) == pytest.approx(0.02)
    assert md.get_risk_free_rate(3.0) == pytest.approx(0.04)
    assert md.get_risk_free_rate(10.0) == pytest.approx(0.04)


def test_linear_interpolation_between_bracketing_points():
    md = MarketData()
    # insertion order should not matter
    md.add_risk_free_rate(5.0, 0.05)
    md.add_risk_free_rate(0.5, 0.01)
    md.add_risk_free_rate(2.0, 0.03)

    assert md.get_risk_free_rate(1.25) == pytest.approx(0.02)
    assert md.get_risk_free_rate(3.5) == pytest.approx(0.04)
    assert md.yield_curve.times == (0.5, 2.0, 5.0)


def test_overwrite_is_last_write_wins():
    md = MarketData()
    md.add_risk_free_rate(1.0, 0.03)
    md.add_risk_free_rate(1.0, 0.04)

    assert md.get_risk_free_rate(1.0) == pytest.approx(0.04)
    assert len(md.yield_curve) == 1


def test_empty_curve_raises():
    with pytest.raises(EmptyCurveError, match="empty"):
        MarketData().get_risk_free_rate(1.0)


@pytest.mark.parametrize(
    "time, rate",
    [(-1.0, 0.03), (1.0, -0.01), (float("nan"), 0.03)],
    ids=["neg-time", "neg-rate", "nan-time"],
)
def test_invalid_rate_points_rejected(time: float, rate: float):
    md = MarketData()
    with pytest.raises(InvalidArgumentError):
        md.add_risk_free_rate(time, rate)
    with pytest.raises(EmptyCurveError):
        md.get_risk_free_rate(1.0)


def test_zero_time_and_zero_rate_are_valid():
    md = MarketData()
    md.add_risk_free_rate(0.0, 0.0)
    assert md.get_risk_free_rate(0.0) == 0.0


def test_near_duplicate_times_return_left_rate():
    curve = YieldCurve()
    t0 = 1e-3
    ulp = np.spacing(t0)
    # gap is a few ulps, far below machine epsilon
    curve.add(t0, 0.01)
    curve.add(t0 + 4 * ulp, 0.99)
    curve.add(2.0, 0.02)

    assert curve.rate(t0 + 2 * ulp) == pytest.approx(0.01)
    expected = 0.99 + (1.0 - t0) / (2.0 - t0) * (0.02 - 0.99)
    assert curve.rate(1.0) == pytest.approx(expected, rel=1e-6)


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_curve_preserves_dtype(dtype):
    md = MarketData(dtype=dtype)
    md.add_risk_free_rate(1.0, 0.02)
    md.add_risk_free_rate(2.0, 0.04)

    out = md.get_risk_free_rate(1.5)
    assert isinstance(out, dtype)
    assert float(out) == pytest.approx(0.03, rel=1e-6)


def test_discount_factor_uses_interpolated_rate():
    md = MarketData()
    md.add_risk_free_rate(1.0, 0.02)
    md.add_risk_free_rate(3.0, 0.04)
    assert md.discount_factor(2.0) == pytest.approx(np.exp(-0.03 * 2.0))
    assert md.yield_curve(2.0) == md.discount_factor(2.0)


def test_nan_query_rejected():
    md = MarketData()
    md.add_risk_free_rate(1.0, 0.02)
    md.add_risk_free_rate(3.0, 0.04)
    with pytest.raises(InvalidArgumentError, match="NaN"):
        md.get_risk_free_rate(float("nan"))
