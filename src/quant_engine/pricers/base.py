"""Pricing-engine interface.

An engine is a valuation strategy: it reads an instrument's contract terms via
:meth:`~quant_engine.instruments.Instrument.get_parameters` and pulls rates and
volatilities from a :class:`~quant_engine.market.MarketData` snapshot.

Engines hold configuration only, never per-call state, so one instance may be
attached to many instruments. :meth:`PricingEngine.clone` returns an
independent copy for callers that want isolated configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

import numpy as np

from ..exceptions import GreeksNotImplementedError
from ..typing import Greeks

if TYPE_CHECKING:
    from ..instruments.base import Instrument
    from ..market import MarketData


@runtime_checkable
class PricingEngine(Protocol):
    def calculate_price(
        self, instrument: Instrument, market: MarketData
    ) -> np.floating: ...

    def calculate_greeks(
        self, instrument: Instrument, market: MarketData
    ) -> Greeks:
        """Risk sensitivities keyed by name.

        Engines that subclass :class:`PricingEngine` explicitly inherit this
        default, which reports the capability as missing.
        """
        raise GreeksNotImplementedError(
            f"Greeks calculation not implemented for {type(self).__name__}"
        )

    def clone(self) -> Self: ...
