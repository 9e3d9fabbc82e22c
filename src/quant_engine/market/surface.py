from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import DTypeLike

from ..exceptions import (
    InsufficientDataError,
    InvalidArgumentError,
    MissingDataPointError,
    OutOfBoundsError,
    UninitializedSurfaceError,
)
from ..typing import Scalar, resolve_dtype

logger = logging.getLogger(__name__)


def _insert_unique(values: list[np.floating], x: np.floating) -> None:
    i = bisect_left(values, x)
    if i == len(values) or values[i] != x:
        values.insert(i, x)


def _bracket(axis: list[np.floating], x: np.floating) -> tuple[np.floating, np.floating]:
    """Return ``(lo, hi)`` neighbours of ``x`` on a sorted axis.

    Uses the first grid value ``>= x``. A query on the lowest grid value
    collapses to ``lo == hi``.
    """
    i = bisect_left(axis, x)
    if i == 0:
        return axis[0], axis[0]
    if i == len(axis):
        return axis[-1], axis[-1]
    return axis[i - 1], axis[i]


@dataclass(slots=True)
class VolatilitySurface:
    """Sparse (strike, maturity) volatility grid with bilinear interpolation.

    The grid is stored as a mapping ``(K, T) -> vol`` together with the sorted,
    duplicate-free lists of every strike and maturity seen so far. The lists
    are maintained on insert so queries never rescan the mapping.

    Parameters
    ----------
    dtype : numpy dtype, default float64
        Element type for stored coordinates, vols and query results.

    Notes
    -----
    - A surface holding a single point returns that vol for *any* query
      (flat extrapolation, no bounds check).
    - Otherwise both axes need at least two distinct values and the query must
      lie inside the recorded range of each axis.
    - The grid may be sparse, but the four corners around a query must exist.
    """

    dtype: DTypeLike = field(default_factory=lambda: resolve_dtype(None))
    _points: dict[tuple[np.floating, np.floating], np.floating] = field(
        default_factory=dict, repr=False
    )
    _strikes: list[np.floating] = field(default_factory=list, repr=False)
    _maturities: list[np.floating] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.dtype = resolve_dtype(self.dtype)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def strikes(self) -> tuple[np.floating, ...]:
        return tuple(self._strikes)

    @property
    def maturities(self) -> tuple[np.floating, ...]:
        return tuple(self._maturities)

    def add(self, strike: Scalar, maturity: Scalar, vol: Scalar) -> None:
        """Insert or overwrite the grid point ``(strike, maturity)``."""
        k = self.dtype.type(strike)
        t = self.dtype.type(maturity)
        v = self.dtype.type(vol)
        if not k > 0:
            raise InvalidArgumentError(f"Invalid strike {strike!r}: must be > 0")
        if not t >= 0:
            raise InvalidArgumentError(f"Invalid maturity {maturity!r}: must be >= 0")
        if not v >= 0:
            raise InvalidArgumentError(f"Invalid volatility {vol!r}: must be >= 0")

        self._points[(k, t)] = v
        _insert_unique(self._strikes, k)
        _insert_unique(self._maturities, t)

    def _at(self, k: np.floating, t: np.floating) -> np.floating:
        try:
            return self._points[(k, t)]
        except KeyError:
            raise MissingDataPointError(float(k), float(t)) from None

    def vol(self, strike: Scalar, maturity: Scalar) -> np.floating:
        """Volatility at ``(strike, maturity)``.

        Raises
        ------
        UninitializedSurfaceError
            If either axis holds no points.
        InsufficientDataError
            If either axis holds fewer than two distinct points.
        OutOfBoundsError
            If the query lies outside the recorded range of an axis.
        MissingDataPointError
            If a corner required for interpolation is absent.
        """
        k = self.dtype.type(strike)
        t = self.dtype.type(maturity)

        hit = self._points.get((k, t))
        if hit is not None:
            return hit

        if len(self._strikes) == 1 and len(self._maturities) == 1:
            return self._points[(self._strikes[0], self._maturities[0])]

        if not self._strikes or not self._maturities:
            raise UninitializedSurfaceError("Volatility surface not initialized")
        if len(self._strikes) < 2 or len(self._maturities) < 2:
            raise InsufficientDataError(
                "Insufficient data for interpolation: need at least two distinct "
                f"strikes and maturities, have {len(self._strikes)} and "
                f"{len(self._maturities)}"
            )

        # chained form also rejects NaN
        if not self._strikes[0] <= k <= self._strikes[-1]:
            raise OutOfBoundsError(
                "strike", float(k), float(self._strikes[0]), float(self._strikes[-1])
            )
        if not self._maturities[0] <= t <= self._maturities[-1]:
            raise OutOfBoundsError(
                "maturity",
                float(t),
                float(self._maturities[0]),
                float(self._maturities[-1]),
            )

        k0, k1 = _bracket(self._strikes, k)
        t0, t1 = _bracket(self._maturities, t)

        if k0 == k1 and t0 == t1:
            return self._at(k0, t0)

        one = self.dtype.type(1.0)
        zero = self.dtype.type(0.0)

        v00 = self._at(k0, t0)
        if k0 == k1:
            # 1-D in maturity
            v01 = self._at(k0, t1)
            v10, v11 = v00, v01
            x, y = zero, (t - t0) / (t1 - t0)
        elif t0 == t1:
            # 1-D in strike
            v10 = self._at(k1, t0)
            v01, v11 = v00, v10
            x, y = (k - k0) / (k1 - k0), zero
        else:
            v01 = self._at(k0, t1)
            v10 = self._at(k1, t0)
            v11 = self._at(k1, t1)
            x, y = (k - k0) / (k1 - k0), (t - t0) / (t1 - t0)

        out = (
            (one - x) * (one - y) * v00
            + (one - x) * y * v01
            + x * (one - y) * v10
            + x * y * v11
        )
        logger.debug(
            "Bilinear vol K=%s T=%s in [%s, %s] x [%s, %s]: %s",
            k, t, k0, k1, t0, t1, out,
        )
        return self.dtype.type(out)

    def copy(self) -> VolatilitySurface:
        return VolatilitySurface(
            dtype=self.dtype,
            _points=dict(self._points),
            _strikes=list(self._strikes),
            _maturities=list(self._maturities),
        )
