"""quant_engine.instruments

Instrument definitions ("what is being priced").

Instruments own contract terms and a market snapshot and delegate numeric
work to a pricing engine from :mod:`quant_engine.pricers`.
"""

from .base import Instrument
from .european import EuropeanStockOption
from .factory import european_option_from_stock_data, parameters_from_stock_data

__all__ = [
    "Instrument",
    "EuropeanStockOption",
    "parameters_from_stock_data",
    "european_option_from_stock_data",
]
