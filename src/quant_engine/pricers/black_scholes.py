from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import numpy as np

from ..models import bs as bs_model
from ..typing import Greeks
from .base import PricingEngine

if TYPE_CHECKING:
    from ..instruments.base import Instrument
    from ..market import MarketData

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BlackScholesEngine(PricingEngine):
    """Closed-form Black–Scholes engine for European options.

    Reads ``S, K, T`` from the instrument and takes ``r = r(T)`` from the yield
    curve and ``sigma = sigma(K, T)`` from the volatility surface of the
    snapshot. Results carry the snapshot's dtype.

    Parameters
    ----------
    days_per_year : float, default 365
        Theta is reported per day: annual theta divided by this.
    vega_scale : float, default 0.01
        Vega is reported per 1% absolute volatility move.
    rho_scale : float, default 0.01
        Rho is reported per 1% absolute rate move.
    """

    days_per_year: float = bs_model.DAYS_PER_YEAR
    vega_scale: float = bs_model.ONE_PERCENT
    rho_scale: float = bs_model.ONE_PERCENT

    def __post_init__(self) -> None:
        if self.days_per_year <= 0:
            raise ValueError("days_per_year must be > 0")

    def _inputs(
        self, instrument: Instrument, market: MarketData
    ) -> dict[str, np.floating]:
        p = instrument.get_parameters()
        cast = market.dtype.type
        tau = cast(p.maturity)
        strike = cast(p.strike)
        return {
            "spot": cast(p.spot_price),
            "strike": strike,
            "r": market.get_risk_free_rate(tau),
            "sigma": market.get_volatility(strike, tau),
            "tau": tau,
        }

    def calculate_price(self, instrument: Instrument, market: MarketData) -> np.floating:
        kw = self._inputs(instrument, market)
        if instrument.get_parameters().is_call:
            return bs_model.call_price(**kw)
        return bs_model.put_price(**kw)

    def calculate_greeks(
        self, instrument: Instrument, market: MarketData
    ) -> Greeks:
        kw = self._inputs(instrument, market)
        if bs_model.is_degenerate(kw["sigma"], kw["tau"]):
            logger.debug(
                "Degenerate BS inputs sigma=%s tau=%s; using limiting Greeks",
                kw["sigma"],
                kw["tau"],
            )
        greeks = (
            bs_model.call_greeks
            if instrument.get_parameters().is_call
            else bs_model.put_greeks
        )
        return greeks(
            **kw,
            days_per_year=self.days_per_year,
            vega_scale=self.vega_scale,
            rho_scale=self.rho_scale,
        )

    def clone(self) -> BlackScholesEngine:
        return replace(self)
