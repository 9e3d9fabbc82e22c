from __future__ import annotations

import pytest

from quant_engine import (
    BlackScholesEngine,
    EngineNotSetError,
    EuropeanStockOption,
    Instrument,
    InvalidArgumentError,
    MarketData,
    OptionParameters,
    OptionType,
    StockData,
)
from quant_engine.instruments import (
    european_option_from_stock_data,
    parameters_from_stock_data,
)


def _params(**over) -> OptionParameters:
    kw = dict(notional=1.0, strike=100.0, maturity=1.0, spot_price=100.0, is_call=True)
    kw.update(over)
    return OptionParameters(**kw)


@pytest.mark.parametrize(
    "over, message",
    [
        (dict(strike=-100.0), "Strike price must be positive"),
        (dict(maturity=0.0), "Time to maturity must be positive"),
        (dict(spot_price=0.0), "Stock spot price must be positive"),
        (dict(notional=-1.0), "Contract notional must be positive"),
        (dict(strike=float("nan")), "Strike price must be positive"),
    ],
    ids=["strike", "maturity", "spot", "notional", "nan-strike"],
)
def test_invalid_parameters_rejected(over, message):
    with pytest.raises(InvalidArgumentError, match=message):
        EuropeanStockOption(params=_params(**over))


def test_strike_is_checked_before_maturity():
    with pytest.raises(InvalidArgumentError, match="Strike"):
        EuropeanStockOption(params=_params(strike=0.0, maturity=0.0))


def test_price_without_engine_raises(make_market):
    option = EuropeanStockOption(params=_params(), market=make_market())
    with pytest.raises(EngineNotSetError):
        option.price()
    with pytest.raises(EngineNotSetError):
        option.greeks()


def test_engine_can_be_attached_and_detached(make_market):
    option = EuropeanStockOption(params=_params(), market=make_market())
    option.set_pricing_engine(BlackScholesEngine())
    assert option.price() == pytest.approx(10.4506, abs=1e-4)

    option.set_pricing_engine(None)
    with pytest.raises(EngineNotSetError):
        option.price()


def test_price_scales_with_notional_but_greeks_do_not(make_option):
    unit = make_option()
    big = make_option(notional=100.0)

    assert big.price() == pytest.approx(100.0 * unit.price())
    assert big.greeks()["delta"] == pytest.approx(unit.greeks()["delta"])


def test_constructor_takes_a_snapshot(make_market):
    md = make_market(r=0.05, sigma=0.2)
    option = EuropeanStockOption(
        params=_params(), engine=BlackScholesEngine(), market=md
    )
    before = option.price()

    # mutate the caller's object after construction
    md.add_risk_free_rate(1.0, 0.10)
    md.add_volatility(100.0, 1.0, 0.50)

    assert option.price() == before


def test_update_market_data_takes_a_snapshot(make_market):
    option = EuropeanStockOption(
        params=_params(), engine=BlackScholesEngine(), market=make_market()
    )
    md = make_market(sigma=0.3)
    option.update_market_data(md)
    repriced = option.price()
    assert repriced > 10.46

    md.add_volatility(100.0, 1.0, 0.05)
    assert option.price() == repriced


def test_parameters_are_preserved():
    params = OptionParameters(
        notional=500000.0, strike=150.0, maturity=0.5, spot_price=145.0, is_call=False
    )
    option = EuropeanStockOption(params=params)
    got = option.get_parameters()

    assert got == params
    assert (got.notional, got.strike, got.maturity, got.spot_price) == (
        500000.0,
        150.0,
        0.5,
        145.0,
    )
    assert got.is_call is False
    assert got.kind is OptionType.PUT


def test_option_satisfies_instrument_protocol():
    assert isinstance(EuropeanStockOption(params=_params()), Instrument)


def test_default_snapshot_is_empty():
    option = EuropeanStockOption(params=_params())
    assert isinstance(option.market, MarketData)
    assert option.market.strikes == ()


def test_parameters_from_stock_data_uses_fetched_spot():
    stock = StockData(spot_price=187.5, volatility=0.25, risk_free_rate=0.04)
    params = parameters_from_stock_data(
        stock, strike=190.0, maturity=0.25, is_call=False
    )

    assert params.spot_price == 187.5
    assert params.strike == 190.0
    assert params.notional == 1.0
    assert params.kind is OptionType.PUT


def test_factory_builds_priceable_option():
    stock = StockData(spot_price=100.0, volatility=0.2, risk_free_rate=0.05)
    option = european_option_from_stock_data(
        stock, strike=100.0, maturity=1.0, notional=10.0, engine=BlackScholesEngine()
    )

    assert option.price() == pytest.approx(104.506, abs=1e-3)
    # the single-point snapshot extrapolates flat
    assert option.market.get_volatility(80.0, 3.0) == pytest.approx(0.2)
    assert option.market.get_risk_free_rate(0.1) == pytest.approx(0.05)
