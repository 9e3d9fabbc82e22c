"""Lightweight instrument interface.

Instruments own their contract terms and a market snapshot; numeric work is
delegated to an attached :class:`~quant_engine.pricers.PricingEngine`:

- ``price()`` / ``greeks()`` ask the engine, passing the instrument itself
  plus its snapshot
- ``update_market_data()`` replaces the snapshot (by copy)
- ``set_pricing_engine()`` replaces the valuation strategy
- ``validate()`` re-checks the contract terms
- ``get_parameters()`` exposes the terms engines read
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from ..types import OptionParameters
from ..typing import Greeks

if TYPE_CHECKING:
    from ..market import MarketData
    from ..pricers.base import PricingEngine


@runtime_checkable
class Instrument(Protocol):
    def price(self) -> np.floating: ...

    def greeks(self) -> Greeks: ...

    def update_market_data(self, market: MarketData) -> None: ...

    def set_pricing_engine(self, engine: PricingEngine | None) -> None: ...

    def validate(self) -> None: ...

    def get_parameters(self) -> OptionParameters: ...
