"""quant_engine.pricers

Pricing engines ("how it is priced").
"""

from .base import PricingEngine
from .black_scholes import BlackScholesEngine

__all__ = ["PricingEngine", "BlackScholesEngine"]
