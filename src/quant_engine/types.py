from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .typing import Scalar


class OptionType(str, Enum):
    """Option contract type.

    Attributes
    ----------
    CALL : str
        Call option ("call").
    PUT : str
        Put option ("put").
    """

    CALL = "call"
    PUT = "put"


@dataclass(frozen=True, slots=True)
class OptionParameters:
    """Contract terms of a priceable option.

    Parameters
    ----------
    notional : float
        Contract multiplier applied to the engine's unit price.
    strike : float
        Exercise price, typically denoted :math:`K`.
    maturity : float
        Time to expiry in years, typically denoted :math:`T`.
    spot_price : float
        Current price of the underlying, typically denoted :math:`S`.
    is_call : bool
        ``True`` for a call, ``False`` for a put.

    Notes
    -----
    The object is frozen: contract terms are copied in and never aliased.
    Validation is the owning instrument's job (see
    :meth:`~quant_engine.instruments.EuropeanStockOption.validate`).
    """

    notional: Scalar
    strike: Scalar
    maturity: Scalar
    spot_price: Scalar
    is_call: bool

    @property
    def kind(self) -> OptionType:
        return OptionType.CALL if self.is_call else OptionType.PUT


@dataclass(frozen=True, slots=True)
class StockData:
    """Market observables for one underlying, as delivered by the fetcher.

    Parameters
    ----------
    spot_price : float
        Latest traded price.
    volatility : float
        Annualised volatility (historical or implied).
    risk_free_rate : float
        Annualised, continuously-compounded risk-free rate.
    """

    spot_price: float
    volatility: float
    risk_free_rate: float
