"""Small conversion helpers.

The fetcher hands the core a plain :class:`~quant_engine.types.StockData`
triple. The functions here turn that triple plus user-supplied contract terms
into option parameters and a ready-to-price instrument.
"""

from __future__ import annotations

from numpy.typing import DTypeLike

from ..market import MarketData
from ..pricers.base import PricingEngine
from ..types import OptionParameters, StockData
from .european import EuropeanStockOption


def parameters_from_stock_data(
    stock: StockData,
    *,
    strike: float,
    maturity: float,
    notional: float = 1.0,
    is_call: bool = True,
) -> OptionParameters:
    """Build :class:`OptionParameters` using ``stock.spot_price`` as spot."""
    return OptionParameters(
        notional=float(notional),
        strike=float(strike),
        maturity=float(maturity),
        spot_price=float(stock.spot_price),
        is_call=bool(is_call),
    )


def european_option_from_stock_data(
    stock: StockData,
    *,
    strike: float,
    maturity: float,
    notional: float = 1.0,
    is_call: bool = True,
    engine: PricingEngine | None = None,
    dtype: DTypeLike | None = None,
) -> EuropeanStockOption:
    """Construct a :class:`EuropeanStockOption` priced off a single-point snapshot.

    The snapshot holds the fetched rate at ``maturity`` and the fetched
    volatility at ``(strike, maturity)``; both extrapolate flat.
    """
    params = parameters_from_stock_data(
        stock, strike=strike, maturity=maturity, notional=notional, is_call=is_call
    )
    # contract terms are validated before the snapshot is seeded
    option = EuropeanStockOption(params=params, engine=engine)
    option.update_market_data(
        MarketData.from_stock_data(stock, strike=strike, maturity=maturity, dtype=dtype)
    )
    return option
