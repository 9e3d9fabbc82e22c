"""Closed-form Black–Scholes formulas (no dividends).

All functions are generic over the floating dtype of their inputs: pass
``numpy.float32`` scalars and you get ``numpy.float32`` results back, plain
Python floats are treated as ``float64``.

Zero volatility or zero time to expiry is not an error: the formulas return
their analytic limit (discounted-forward intrinsic value, zero gamma/vega).
"""

from __future__ import annotations

import math

import numpy as np
from scipy.special import erf

from ..exceptions import InvalidArgumentError
from ..typing import Greeks, Scalar

_SQRT_2 = math.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)

DAYS_PER_YEAR = 365.0
ONE_PERCENT = 0.01


def _validate_scalar_inputs(
    *, spot: Scalar, strike: Scalar, sigma: Scalar, tau: Scalar
) -> None:
    if not spot > 0.0:
        raise InvalidArgumentError("spot must be positive")
    if not strike > 0.0:
        raise InvalidArgumentError("strike must be positive")
    if not sigma >= 0.0:
        raise InvalidArgumentError("sigma must be non-negative")
    if not tau >= 0.0:
        raise InvalidArgumentError("tau must be non-negative")


def _cast(*values: Scalar) -> tuple[np.floating, ...]:
    dt = np.result_type(*values)
    if not np.issubdtype(dt, np.floating):
        dt = np.dtype(np.float64)
    return tuple(dt.type(v) for v in values)


def norm_cdf(x: Scalar) -> np.floating:
    """Standard normal CDF ``0.5 * (1 + erf(x / sqrt(2)))``."""
    return 0.5 * (1.0 + erf(x / _SQRT_2))


def norm_pdf(x: Scalar) -> np.floating:
    """Standard normal density."""
    return _INV_SQRT_2PI * np.exp(-0.5 * x * x)


def discount_factor(rate: Scalar, tau: Scalar) -> np.floating:
    return np.exp(-rate * tau)


def is_degenerate(sigma: Scalar, tau: Scalar) -> bool:
    """True when ``sigma * sqrt(tau)`` vanishes and d1/d2 are undefined."""
    return bool(sigma == 0.0 or tau == 0.0)


def d1_d2(
    *, spot: Scalar, strike: Scalar, r: Scalar, sigma: Scalar, tau: Scalar
) -> tuple[np.floating, np.floating]:
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    if is_degenerate(sigma, tau):
        raise InvalidArgumentError("d1/d2 need sigma > 0 and tau > 0")
    spot, strike, r, sigma, tau = _cast(spot, strike, r, sigma, tau)
    vol_sqrt_t = sigma * np.sqrt(tau)
    num = np.log(spot / strike) + (r + 0.5 * sigma * sigma) * tau
    d1 = num / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return d1, d2


def _limit_n_d1(spot: np.floating, strike: np.floating, df: np.floating) -> np.floating:
    """Limit of N(d1) (and N(d2)) as sigma*sqrt(tau) -> 0."""
    moneyness = spot - strike * df
    if moneyness > 0:
        return spot.dtype.type(1.0)
    if moneyness < 0:
        return spot.dtype.type(0.0)
    return spot.dtype.type(0.5)


def call_price(
    *, spot: Scalar, strike: Scalar, r: Scalar, sigma: Scalar, tau: Scalar
) -> np.floating:
    """
    Black–Scholes European call: S*N(d1) - K*e^{-r tau}*N(d2).
    """
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    spot, strike, r, sigma, tau = _cast(spot, strike, r, sigma, tau)
    df = discount_factor(r, tau)
    if is_degenerate(sigma, tau):
        return np.maximum(spot - strike * df, 0.0)
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return spot * norm_cdf(d1) - strike * df * norm_cdf(d2)


def put_price(
    *, spot: Scalar, strike: Scalar, r: Scalar, sigma: Scalar, tau: Scalar
) -> np.floating:
    """
    Black–Scholes European put: K*e^{-r tau}*N(-d2) - S*N(-d1).
    """
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    spot, strike, r, sigma, tau = _cast(spot, strike, r, sigma, tau)
    df = discount_factor(r, tau)
    if is_degenerate(sigma, tau):
        return np.maximum(strike * df - spot, 0.0)
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return strike * df * norm_cdf(-d2) - spot * norm_cdf(-d1)


def call_greeks(
    *,
    spot: Scalar,
    strike: Scalar,
    r: Scalar,
    sigma: Scalar,
    tau: Scalar,
    days_per_year: float = DAYS_PER_YEAR,
    vega_scale: float = ONE_PERCENT,
    rho_scale: float = ONE_PERCENT,
) -> Greeks:
    """
    Analytic Greeks for a BS European call.

    theta is per calendar day (annual theta / ``days_per_year``); vega and rho
    are per one-percentage-point move when the scales are left at 0.01.
    """
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    spot, strike, r, sigma, tau = _cast(spot, strike, r, sigma, tau)
    df = discount_factor(r, tau)
    zero = spot.dtype.type(0.0)

    if is_degenerate(sigma, tau):
        Nd1 = Nd2 = _limit_n_d1(spot, strike, df)
        gamma = zero
        vega = zero
        decay = zero
    else:
        d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
        sqrt_tau = np.sqrt(tau)
        Nd1 = norm_cdf(d1)
        Nd2 = norm_cdf(d2)
        phi_d1 = norm_pdf(d1)
        gamma = phi_d1 / (spot * sigma * sqrt_tau)
        vega = spot * sqrt_tau * phi_d1 * vega_scale
        decay = -(spot * sigma * phi_d1) / (2.0 * sqrt_tau)

    theta = (decay - r * strike * df * Nd2) / days_per_year
    rho = strike * tau * df * Nd2 * rho_scale

    return {
        "delta": Nd1,
        "gamma": gamma,
        "vega": vega,
        "theta": theta,
        "rho": rho,
    }


def put_greeks(
    *,
    spot: Scalar,
    strike: Scalar,
    r: Scalar,
    sigma: Scalar,
    tau: Scalar,
    days_per_year: float = DAYS_PER_YEAR,
    vega_scale: float = ONE_PERCENT,
    rho_scale: float = ONE_PERCENT,
) -> Greeks:
    """
    Analytic Greeks for a BS European put.

    Same conventions as :func:`call_greeks`; gamma and vega coincide with the
    call's.
    """
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    spot, strike, r, sigma, tau = _cast(spot, strike, r, sigma, tau)
    df = discount_factor(r, tau)
    zero = spot.dtype.type(0.0)

    if is_degenerate(sigma, tau):
        Nd1 = _limit_n_d1(spot, strike, df)
        Nmd2 = 1.0 - Nd1
        gamma = zero
        vega = zero
        decay = zero
    else:
        d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
        sqrt_tau = np.sqrt(tau)
        Nd1 = norm_cdf(d1)
        Nmd2 = norm_cdf(-d2)
        phi_d1 = norm_pdf(d1)
        gamma = phi_d1 / (spot * sigma * sqrt_tau)
        vega = spot * sqrt_tau * phi_d1 * vega_scale
        decay = -(spot * sigma * phi_d1) / (2.0 * sqrt_tau)

    theta = (decay + r * strike * df * Nmd2) / days_per_year
    rho = -strike * tau * df * Nmd2 * rho_scale

    return {
        "delta": Nd1 - 1.0,
        "gamma": gamma,
        "vega": vega,
        "theta": theta,
        "rho": rho,
    }
