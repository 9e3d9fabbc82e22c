"""Remote market-data collaborators (HTTP)."""

from .fetcher import DataFetcher, historical_volatility

__all__ = ["DataFetcher", "historical_volatility"]
