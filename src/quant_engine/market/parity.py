from __future__ import annotations

import math


def forward_discounted(*, spot: float, strike: float, rate: float, tau: float) -> float:
    """S - K*e^{-r tau} (the RHS of put-call parity, no dividends)."""
    return spot - strike * math.exp(-rate * tau)


def put_call_parity_residual(
    *, call: float, put: float, spot: float, strike: float, rate: float, tau: float
) -> float:
    """
    Residual = (C - P) - (S - K e^{-r tau}).
    Should be ~0 for European options under consistent inputs.
    """
    return (call - put) - forward_discounted(
        spot=spot, strike=strike, rate=rate, tau=tau
    )
