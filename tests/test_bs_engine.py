from __future__ import annotations

import numpy as np
import pytest

from quant_engine import (
    BlackScholesEngine,
    EmptyCurveError,
    EuropeanStockOption,
    GreeksNotImplementedError,
    MarketData,
    PricingEngine,
    UninitializedSurfaceError,
)
from quant_engine.models.bs import call_price
from quant_engine.types import OptionParameters


class _FlatEngine(PricingEngine):
    """Prices every instrument at 1 and keeps the default Greeks."""

    def calculate_price(self, instrument, market):
        return np.float64(1.0)

    def clone(self):
        return _FlatEngine()


def _params(**over) -> OptionParameters:
    kw = dict(notional=1.0, strike=100.0, maturity=1.0, spot_price=100.0, is_call=True)
    kw.update(over)
    return OptionParameters(**kw)


def test_reference_call_and_put_prices(make_option):
    assert make_option().price() == pytest.approx(10.4506, abs=1e-4)
    assert make_option(is_call=False).price() == pytest.approx(5.5735, abs=1e-4)


def test_reference_call_greeks(make_option):
    g = make_option().greeks()
    assert set(g) == {"delta", "gamma", "vega", "theta", "rho"}
    assert g["delta"] == pytest.approx(0.6368, rel=1e-3)
    assert g["gamma"] == pytest.approx(0.01876, rel=1e-3)
    assert g["vega"] == pytest.approx(0.3752, rel=1e-3)
    assert g["rho"] == pytest.approx(0.5327, rel=1e-3)


def test_put_delta_is_call_delta_minus_one(make_option):
    c = make_option().greeks()
    p = make_option(is_call=False).greeks()
    assert p["delta"] == pytest.approx(c["delta"] - 1.0)
    assert p["gamma"] == pytest.approx(c["gamma"])


def test_engine_reads_rate_and_vol_at_contract_point():
    md = MarketData()
    md.add_risk_free_rate(0.5, 0.02)
    md.add_risk_free_rate(1.5, 0.06)
    for k, t, v in [
        (90.0, 0.5, 0.30),
        (90.0, 1.5, 0.30),
        (110.0, 0.5, 0.10),
        (110.0, 1.5, 0.10),
    ]:
        md.add_volatility(k, t, v)

    option = EuropeanStockOption(
        params=_params(), engine=BlackScholesEngine(), market=md
    )
    # r(1.0) = 0.04, sigma(100, 1.0) = 0.20
    expected = call_price(spot=100.0, strike=100.0, r=0.04, sigma=0.20, tau=1.0)
    assert option.price() == pytest.approx(expected)


def test_custom_reporting_conventions(make_option):
    option = make_option()
    base = option.greeks()
    option.set_pricing_engine(
        BlackScholesEngine(days_per_year=252.0, vega_scale=1.0, rho_scale=1.0)
    )
    raw = option.greeks()

    assert raw["vega"] == pytest.approx(base["vega"] * 100.0)
    assert raw["rho"] == pytest.approx(base["rho"] * 100.0)
    assert raw["theta"] == pytest.approx(base["theta"] * 365.0 / 252.0)


def test_days_per_year_must_be_positive():
    with pytest.raises(ValueError):
        BlackScholesEngine(days_per_year=0.0)


def test_clone_is_equal_but_independent():
    engine = BlackScholesEngine(days_per_year=252.0)
    copy = engine.clone()
    assert copy == engine
    assert copy is not engine
    assert isinstance(copy, BlackScholesEngine)


def test_engines_satisfy_protocol():
    assert isinstance(BlackScholesEngine(), PricingEngine)
    assert isinstance(_FlatEngine(), PricingEngine)


def test_default_greeks_report_missing_capability(make_market):
    option = EuropeanStockOption(
        params=_params(), engine=_FlatEngine(), market=make_market()
    )
    assert option.price() == 1.0
    with pytest.raises(GreeksNotImplementedError, match="_FlatEngine"):
        option.greeks()


def test_empty_snapshot_surfaces_market_error():
    option = EuropeanStockOption(params=_params(), engine=BlackScholesEngine())
    with pytest.raises(EmptyCurveError):
        option.price()

    md = MarketData()
    md.add_risk_free_rate(1.0, 0.05)
    option.update_market_data(md)
    with pytest.raises(UninitializedSurfaceError):
        option.greeks()


def test_zero_volatility_prices_discounted_intrinsic(make_option):
    option = make_option(S=120.0, sigma=0.0)
    assert option.price() == pytest.approx(120.0 - 100.0 * np.exp(-0.05))
    g = option.greeks()
    assert g["delta"] == pytest.approx(1.0)
    assert g["gamma"] == 0.0


def test_float32_snapshot_prices_in_float32(make_option):
    option = make_option(dtype=np.float32)
    price = option.price()
    greeks = option.greeks()

    assert isinstance(price, np.float32)
    assert all(isinstance(v, np.float32) for v in greeks.values())
    assert float(price) == pytest.approx(10.4506, abs=1e-3)
