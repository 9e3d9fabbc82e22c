from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import DTypeLike

from ..exceptions import EmptyCurveError, InvalidArgumentError
from ..typing import Scalar, resolve_dtype

logger = logging.getLogger(__name__)


@runtime_checkable
class DiscountCurve(Protocol):
    def df(self, T: float) -> float: ...
    def __call__(self, T: float) -> float: ...


@dataclass(slots=True)
class YieldCurve:
    """Piecewise-linear zero-rate curve with flat extrapolation.

    Points are kept in two parallel lists sorted by time, so lookups are a
    binary search and inserts never rescan the curve.

    Parameters
    ----------
    dtype : numpy dtype, default float64
        Element type for stored times, rates and query results.

    Notes
    -----
    - One point: its rate is returned for every query time.
    - Queries before the first / at or after the last point return the
      nearest endpoint rate.
    - Between points, rates are linearly interpolated in time.
    """

    dtype: DTypeLike = field(default_factory=lambda: resolve_dtype(None))
    _times: list[np.floating] = field(default_factory=list, repr=False)
    _rates: list[np.floating] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.dtype = resolve_dtype(self.dtype)

    def __len__(self) -> int:
        return len(self._times)

    @property
    def times(self) -> tuple[np.floating, ...]:
        return tuple(self._times)

    @property
    def rates(self) -> tuple[np.floating, ...]:
        return tuple(self._rates)

    def add(self, time: Scalar, rate: Scalar) -> None:
        """Insert the point ``(time, rate)``, overwriting an existing time."""
        t = self.dtype.type(time)
        r = self.dtype.type(rate)
        # "not >=" also rejects NaN
        if not t >= 0:
            raise InvalidArgumentError(f"Invalid time {time!r}: must be >= 0")
        if not r >= 0:
            raise InvalidArgumentError(f"Invalid rate {rate!r}: must be >= 0")

        i = bisect_left(self._times, t)
        if i < len(self._times) and self._times[i] == t:
            self._rates[i] = r
        else:
            self._times.insert(i, t)
            self._rates.insert(i, r)

    def rate(self, time: Scalar) -> np.floating:
        """Interpolated annualised rate at ``time``."""
        if not self._times:
            raise EmptyCurveError("Yield curve is empty")

        if len(self._times) == 1:
            return self._rates[0]

        t = self.dtype.type(time)
        if np.isnan(t):
            raise InvalidArgumentError(f"Invalid time {time!r}: must not be NaN")
        upper = bisect_right(self._times, t)
        if upper == 0:
            return self._rates[0]
        if upper == len(self._times):
            return self._rates[-1]

        t0, r0 = self._times[upper - 1], self._rates[upper - 1]
        t1, r1 = self._times[upper], self._rates[upper]
        if t1 - t0 < np.finfo(self.dtype).eps:
            return r0

        alpha = (t - t0) / (t1 - t0)
        out = r0 + alpha * (r1 - r0)
        logger.debug(
            "Interpolated rate t=%s between (%s, %s) and (%s, %s): %s",
            t, t0, r0, t1, r1, out,
        )
        return self.dtype.type(out)

    def df(self, T: Scalar) -> np.floating:
        """Continuously-compounded discount factor ``exp(-r(T) * T)``."""
        t = self.dtype.type(T)
        if not t >= 0:
            raise InvalidArgumentError("T must be >= 0")
        return self.dtype.type(np.exp(-self.rate(t) * t))

    def __call__(self, T: Scalar) -> np.floating:
        return self.df(T)

    def copy(self) -> YieldCurve:
        return YieldCurve(
            dtype=self.dtype, _times=list(self._times), _rates=list(self._rates)
        )
