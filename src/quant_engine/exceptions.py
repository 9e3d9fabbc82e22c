from __future__ import annotations


class QuantEngineError(Exception):
    """Base class for all errors raised by :mod:`quant_engine`."""


class InvalidArgumentError(QuantEngineError, ValueError):
    """Raised for malformed construction or insertion input.

    Examples are a negative rate passed to
    :meth:`~quant_engine.market.MarketData.add_risk_free_rate` or a
    non-positive strike on an option contract. These are caller bugs and
    are never retried.
    """


class MarketDataError(QuantEngineError, LookupError):
    """Market data is not populated enough to answer a query."""


class EmptyCurveError(MarketDataError):
    """Raised when a rate is requested from a yield curve with no points."""


class UninitializedSurfaceError(MarketDataError):
    """Raised when a volatility surface axis has no recorded points."""


class InsufficientDataError(MarketDataError):
    """Raised when an axis has fewer than two distinct points to interpolate."""


class OutOfBoundsError(MarketDataError):
    """Raised when a query falls outside the populated range of an axis.

    Attributes
    ----------
    axis : str
        ``"strike"`` or ``"maturity"``.
    value : float
        The offending query coordinate.
    lower, upper : float
        The recorded range of the axis.
    """

    def __init__(self, axis: str, value: float, lower: float, upper: float):
        self.axis = axis
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"{axis.capitalize()} {value!r} out of bounds [{lower!r}, {upper!r}]"
        )


class MissingDataPointError(MarketDataError):
    """Raised when a grid corner needed for interpolation is absent.

    The surface may be sparse, but every query needs a fully populated
    rectangle around it.
    """

    def __init__(self, strike: float, maturity: float):
        self.strike = strike
        self.maturity = maturity
        super().__init__(
            f"Missing volatility point at (K={strike!r}, T={maturity!r})"
        )


class EngineNotSetError(QuantEngineError, RuntimeError):
    """Raised when pricing is attempted before a pricing engine is attached."""


class GreeksNotImplementedError(QuantEngineError, NotImplementedError):
    """Raised by engines that do not support Greek calculations."""


class ConfigError(QuantEngineError):
    """Raised when a configuration file is missing or malformed."""


class MissingApiKeyError(ConfigError, KeyError):
    """Raised when no API key is configured for a service."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"API key not found for service: {service}")

    def __str__(self) -> str:
        return str(self.args[0])


class DataFetchError(QuantEngineError, RuntimeError):
    """Raised when remote market data cannot be retrieved or parsed."""
