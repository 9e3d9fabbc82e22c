from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import requests

from ..config import ApiKeys, FetcherConfig
from ..exceptions import DataFetchError, InvalidArgumentError, QuantEngineError
from ..types import StockData

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"
FRED_OBSERVATIONS_URL = "https://api.stlouisfed.org/fred/series/observations"

ALPHA_VANTAGE_SERVICE = "alpha_vantage"
FRED_SERVICE = "fred"
FRED_TBILL_SERIES = "DTB3"

_RATE_LIMIT_MARKER = "API call frequency"


def historical_volatility(
    prices: Sequence[float], *, trading_days: int = 252
) -> float:
    """Annualised sample volatility of daily log returns.

    Parameters
    ----------
    prices : sequence of float
        Closing prices in chronological order.
    trading_days : int, default 252
        Trading days per year used to annualise.

    Raises
    ------
    InvalidArgumentError
        If fewer than three prices are given (a sample std needs two returns)
        or any price is not positive.
    """
    px = np.asarray(prices, dtype=np.float64)
    if px.ndim != 1 or px.size < 3:
        raise InvalidArgumentError("Not enough price data to calculate volatility")
    if np.any(px <= 0.0):
        raise InvalidArgumentError("Prices must be positive")

    log_returns = np.diff(np.log(px))
    return float(np.std(log_returns, ddof=1) * np.sqrt(trading_days))


@dataclass(frozen=True)
class DataFetcher:
    """Fetch spot, historical volatility and the risk-free rate over HTTP.

    Spot prices and daily closes come from Alpha Vantage, the risk-free rate is
    the latest 3-month T-bill yield (FRED series ``DTB3``).

    Failure policy:
    - a missing spot quote raises :class:`DataFetchError`
    - volatility and rate failures fall back to ``config.fallback_volatility``
      / ``config.fallback_risk_free_rate`` and log a warning
    - an Alpha Vantage rate-limit note triggers up to ``config.max_retries``
      sleep-and-retry rounds

    Session handling mirrors ``requests`` usage elsewhere: pass a shared
    ``requests.Session`` to reuse connections, otherwise one is created per
    request and closed afterwards.
    """

    api_keys: ApiKeys
    config: FetcherConfig = field(default_factory=FetcherConfig)
    session: requests.Session | None = None
    sleep: Callable[[float], None] = time.sleep

    def _get_json(self, url: str, params: Mapping[str, Any]) -> dict[str, Any]:
        sess = self.session or requests.Session()
        try:
            logger.debug("GET %s function=%s", url, params.get("function", "-"))
            resp = sess.get(url, params=dict(params), timeout=self.config.timeout_s)
            resp.raise_for_status()
            payload = resp.json()
        except requests.JSONDecodeError as e:
            raise DataFetchError(f"Response is not valid JSON: {url}") from e
        except requests.RequestException as e:
            raise DataFetchError(f"HTTP request failed: {url}: {e}") from e
        finally:
            if self.session is None:
                sess.close()

        if not isinstance(payload, dict):
            raise DataFetchError(
                f"Expected JSON object from {url}, got {type(payload).__name__}"
            )
        return payload

    def fetch_risk_free_rate(self) -> float:
        """Latest 3-month T-bill yield as a decimal (fallback if unavailable)."""
        params = {
            "series_id": FRED_TBILL_SERIES,
            "api_key": self.api_keys.get_api_key(FRED_SERVICE),
            "file_type": "json",
            "sort_order": "desc",
            "limit": 1,
        }
        data = self._get_json(FRED_OBSERVATIONS_URL, params)

        observations = data.get("observations") or []
        if observations:
            value = observations[0].get("value", ".")
            if value != ".":
                try:
                    return float(value) / 100.0
                except (TypeError, ValueError) as e:
                    raise DataFetchError(f"Unparseable FRED value: {value!r}") from e

        logger.warning(
            "No FRED observation for %s; using fallback rate %.4f",
            FRED_TBILL_SERIES,
            self.config.fallback_risk_free_rate,
        )
        return self.config.fallback_risk_free_rate

    def fetch_historical_volatility(self, symbol: str) -> float:
        """Annualised volatility of the most recent ``history_days`` closes."""
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "apikey": self.api_keys.get_api_key(ALPHA_VANTAGE_SERVICE),
            "outputsize": "compact",
        }
        data = self._get_json(ALPHA_VANTAGE_URL, params)

        attempt = 0
        while _is_rate_limited(data) and attempt < self.config.max_retries:
            attempt += 1
            logger.warning(
                "Alpha Vantage rate limit for %s; retry %d/%d in %.1fs",
                symbol,
                attempt,
                self.config.max_retries,
                self.config.rate_limit_sleep_s,
            )
            self.sleep(self.config.rate_limit_sleep_s)
            data = self._get_json(ALPHA_VANTAGE_URL, params)

        if _is_rate_limited(data):
            logger.error(
                "Alpha Vantage rate limit for %s persists after %d retries",
                symbol,
                attempt,
            )
        if "Note" in data or "Error Message" in data:
            logger.warning(
                "Alpha Vantage returned no series for %s; using fallback vol %.4f",
                symbol,
                self.config.fallback_volatility,
            )
            return self.config.fallback_volatility

        series = data.get("Time Series (Daily)")
        if not isinstance(series, dict):
            raise DataFetchError("Invalid response format from Alpha Vantage")

        recent = sorted(series, reverse=True)[: self.config.history_days]
        try:
            closes = [float(series[day]["4. close"]) for day in reversed(recent)]
        except (KeyError, TypeError, ValueError) as e:
            raise DataFetchError(f"Malformed daily bar for {symbol}") from e

        return historical_volatility(
            closes, trading_days=self.config.trading_days_per_year
        )

    def fetch_spot_price(self, symbol: str) -> float:
        params = {
            "function": "GLOBAL_QUOTE",
            "symbol": symbol,
            "apikey": self.api_keys.get_api_key(ALPHA_VANTAGE_SERVICE),
        }
        data = self._get_json(ALPHA_VANTAGE_URL, params)

        quote = data.get("Global Quote")
        if not quote:
            raise DataFetchError(f"Failed to fetch stock data for {symbol}")
        try:
            return float(quote["05. price"])
        except (KeyError, TypeError, ValueError) as e:
            raise DataFetchError(f"Malformed quote for {symbol}") from e

    def fetch_stock_data(self, symbol: str) -> StockData:
        """Spot, volatility and risk-free rate for ``symbol``.

        Raises
        ------
        DataFetchError
            If the spot quote cannot be retrieved.
        MissingApiKeyError
            If the Alpha Vantage key is not configured.
        """
        spot = self.fetch_spot_price(symbol)

        try:
            vol = self.fetch_historical_volatility(symbol)
        except QuantEngineError as e:
            logger.warning("Could not calculate volatility for %s: %s", symbol, e)
            vol = self.config.fallback_volatility

        try:
            rate = self.fetch_risk_free_rate()
        except QuantEngineError as e:
            logger.warning("Could not fetch risk-free rate: %s", e)
            rate = self.config.fallback_risk_free_rate

        logger.info(
            "Fetched %s spot=%.4f vol=%.4f rate=%.4f", symbol, spot, vol, rate
        )
        return StockData(spot_price=spot, volatility=vol, risk_free_rate=rate)


def _is_rate_limited(data: Mapping[str, Any]) -> bool:
    note = data.get("Note")
    return isinstance(note, str) and _RATE_LIMIT_MARKER in note
