"""quant_engine.market

Market inputs: a piecewise-linear yield curve, a bilinear volatility surface
and the :class:`MarketData` snapshot that composes them.
"""

from .curves import DiscountCurve, YieldCurve
from .market_data import MarketData
from .parity import forward_discounted, put_call_parity_residual
from .surface import VolatilitySurface

__all__ = [
    "DiscountCurve",
    "YieldCurve",
    "VolatilitySurface",
    "MarketData",
    "forward_discounted",
    "put_call_parity_residual",
]
