"""Pytest helpers for the quant_engine library."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from quant_engine import BlackScholesEngine, EuropeanStockOption, MarketData
from quant_engine.types import OptionParameters


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "S": 100.0,
        "K": 100.0,
        "r": 0.05,
        "sigma": 0.2,
        "T": 1.0,
    }


@pytest.fixture
def make_market():
    """Factory fixture for a single-point snapshot (flat rate and vol)."""

    def _make(
        *,
        K: float = 100.0,
        T: float = 1.0,
        r: float = 0.05,
        sigma: float = 0.2,
        dtype=np.float64,
    ) -> MarketData:
        md = MarketData(dtype=dtype)
        md.add_risk_free_rate(T, r)
        md.add_volatility(K, T, sigma)
        return md

    return _make


@pytest.fixture
def make_option(make_market):
    """Factory fixture for an engine-equipped EuropeanStockOption."""

    def _make(
        *,
        S: float = 100.0,
        K: float = 100.0,
        T: float = 1.0,
        r: float = 0.05,
        sigma: float = 0.2,
        is_call: bool = True,
        notional: float = 1.0,
        dtype=np.float64,
    ) -> EuropeanStockOption:
        params = OptionParameters(
            notional=notional, strike=K, maturity=T, spot_price=S, is_call=is_call
        )
        return EuropeanStockOption(
            params=params,
            engine=BlackScholesEngine(),
            market=make_market(K=K, T=T, r=r, sigma=sigma, dtype=dtype),
        )

    return _make


@pytest.fixture
def vol_grid() -> MarketData:
    """2x2 surface {(100,1,.20),(100,2,.25),(150,1,.22),(150,2,.28)}."""
    md = MarketData()
    md.add_volatility(100.0, 1.0, 0.20)
    md.add_volatility(100.0, 2.0, 0.25)
    md.add_volatility(150.0, 1.0, 0.22)
    md.add_volatility(150.0, 2.0, 0.28)
    return md


@pytest.fixture
def restore_logging():
    """Undo ``setup_logging`` side effects on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
