"""
quant_engine

Derivative pricing from market inputs with pluggable valuation engines.

The main user-facing types are re-exported at the top level, so you can
write, for example:

    from quant_engine import BlackScholesEngine, EuropeanStockOption, MarketData
"""

from .exceptions import (
    EmptyCurveError,
    EngineNotSetError,
    GreeksNotImplementedError,
    InsufficientDataError,
    InvalidArgumentError,
    MarketDataError,
    MissingDataPointError,
    OutOfBoundsError,
    QuantEngineError,
    UninitializedSurfaceError,
)
from .instruments import EuropeanStockOption, Instrument
from .market import MarketData
from .pricers import BlackScholesEngine, PricingEngine
from .types import OptionParameters, OptionType, StockData

__all__ = [
    # Types
    "OptionType",
    "OptionParameters",
    "StockData",
    # Market
    "MarketData",
    # Instruments / engines
    "Instrument",
    "EuropeanStockOption",
    "PricingEngine",
    "BlackScholesEngine",
    # Errors
    "QuantEngineError",
    "InvalidArgumentError",
    "MarketDataError",
    "EmptyCurveError",
    "UninitializedSurfaceError",
    "InsufficientDataError",
    "OutOfBoundsError",
    "MissingDataPointError",
    "EngineNotSetError",
    "GreeksNotImplementedError",
]
