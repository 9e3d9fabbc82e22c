"""Market snapshot consumed by instruments and pricing engines.

:class:`MarketData` bundles a :class:`~quant_engine.market.curves.YieldCurve`
and a :class:`~quant_engine.market.surface.VolatilitySurface` that share one
element dtype. It is grown only through the ``add_*`` methods and never
shrinks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import DTypeLike

from ..types import StockData
from ..typing import Scalar, resolve_dtype
from .curves import YieldCurve
from .surface import VolatilitySurface


@dataclass(slots=True)
class MarketData:
    """Yield curve plus volatility surface, generic over a floating dtype.

    Parameters
    ----------
    dtype : numpy dtype, default float64
        Element type of every stored and returned number (``float32`` and
        ``float64`` are supported).

    Examples
    --------
    >>> md = MarketData()
    >>> md.add_risk_free_rate(1.0, 0.05)
    >>> md.add_volatility(100.0, 1.0, 0.20)
    >>> float(md.get_volatility(100.0, 1.0))
    0.2
    """

    dtype: DTypeLike = field(default_factory=lambda: resolve_dtype(None))
    yield_curve: YieldCurve = field(init=False)
    vol_surface: VolatilitySurface = field(init=False)

    def __post_init__(self) -> None:
        self.dtype = resolve_dtype(self.dtype)
        self.yield_curve = YieldCurve(dtype=self.dtype)
        self.vol_surface = VolatilitySurface(dtype=self.dtype)

    @classmethod
    def from_stock_data(
        cls,
        stock: StockData,
        *,
        strike: Scalar,
        maturity: Scalar,
        dtype: DTypeLike | None = None,
    ) -> MarketData:
        """Single-point snapshot seeded from a fetched :class:`StockData`.

        The rate is stored at ``maturity`` and the volatility at
        ``(strike, maturity)``; both extrapolate flat.
        """
        md = cls(dtype=resolve_dtype(dtype))
        md.add_risk_free_rate(maturity, stock.risk_free_rate)
        md.add_volatility(strike, maturity, stock.volatility)
        return md

    def add_risk_free_rate(self, time: Scalar, rate: Scalar) -> None:
        self.yield_curve.add(time, rate)

    def add_volatility(self, strike: Scalar, maturity: Scalar, vol: Scalar) -> None:
        self.vol_surface.add(strike, maturity, vol)

    def get_risk_free_rate(self, time: Scalar) -> np.floating:
        return self.yield_curve.rate(time)

    def get_volatility(self, strike: Scalar, maturity: Scalar) -> np.floating:
        return self.vol_surface.vol(strike, maturity)

    def discount_factor(self, time: Scalar) -> np.floating:
        return self.yield_curve.df(time)

    @property
    def strikes(self) -> tuple[np.floating, ...]:
        return self.vol_surface.strikes

    @property
    def maturities(self) -> tuple[np.floating, ...]:
        return self.vol_surface.maturities

    def copy(self) -> MarketData:
        """Independent deep copy; later inserts on either side do not leak."""
        out = MarketData(dtype=self.dtype)
        out.yield_curve = self.yield_curve.copy()
        out.vol_surface = self.vol_surface.copy()
        return out
