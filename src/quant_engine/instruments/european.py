"""European-style equity option."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ..exceptions import EngineNotSetError, InvalidArgumentError
from ..market import MarketData
from ..pricers.base import PricingEngine
from ..types import OptionParameters
from ..typing import Greeks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EuropeanStockOption:
    """European call/put on a single stock.

    Parameters
    ----------
    params : OptionParameters
        Contract terms; validated on construction.
    engine : PricingEngine, optional
        Valuation strategy. May be attached later via
        :meth:`set_pricing_engine`.
    market : MarketData, optional
        Market snapshot; defaults to an empty one. The instrument keeps its own
        copy, so later changes to the caller's object are not seen.

    Raises
    ------
    InvalidArgumentError
        If any of strike, maturity, spot price or notional is not positive.

    Notes
    -----
    ``price()`` scales the engine's unit price by ``notional``; ``greeks()`` is
    returned per unit, exactly as the engine reports it.
    """

    params: OptionParameters
    engine: PricingEngine | None = None
    market: MarketData = field(default_factory=MarketData)

    def __post_init__(self) -> None:
        self.market = self.market.copy()
        self.validate()

    def price(self) -> np.floating:
        engine = self._require_engine()
        unit = engine.calculate_price(self, self.market)
        logger.debug(
            "Priced %s K=%s T=%s unit=%s notional=%s",
            self.params.kind.value,
            self.params.strike,
            self.params.maturity,
            unit,
            self.params.notional,
        )
        return unit * self.params.notional

    def greeks(self) -> Greeks:
        engine = self._require_engine()
        return engine.calculate_greeks(self, self.market)

    def update_market_data(self, market: MarketData) -> None:
        self.market = market.copy()

    def set_pricing_engine(self, engine: PricingEngine | None) -> None:
        self.engine = engine

    def validate(self) -> None:
        p = self.params
        if not p.strike > 0:
            raise InvalidArgumentError("Strike price must be positive")
        if not p.maturity > 0:
            raise InvalidArgumentError("Time to maturity must be positive")
        if not p.spot_price > 0:
            raise InvalidArgumentError("Stock spot price must be positive")
        if not p.notional > 0:
            raise InvalidArgumentError("Contract notional must be positive")

    def get_parameters(self) -> OptionParameters:
        return self.params

    def _require_engine(self) -> PricingEngine:
        if self.engine is None:
            raise EngineNotSetError(
                "Pricing engine not set for European stock option"
            )
        return self.engine
