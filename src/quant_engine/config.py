from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .exceptions import ConfigError, MissingApiKeyError

CONFIG_ENV_VAR = "QUANT_ENGINE_CONFIG"
DEFAULT_CONFIG_PATH = "config.json"


@dataclass(frozen=True, slots=True)
class ApiKeys:
    """Service name -> API key lookup.

    Expected JSON layout::

        {"api_keys": {"alpha_vantage": "...", "fred": "..."}}
    """

    keys: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for service, key in self.keys.items():
            if not isinstance(service, str) or not isinstance(key, str):
                raise ValueError("api_keys must map service names to strings")
        object.__setattr__(self, "keys", MappingProxyType(dict(self.keys)))

    @classmethod
    def from_json(cls, path: str | Path) -> ApiKeys:
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file is not valid JSON: {path}") from e

        section = raw.get("api_keys") if isinstance(raw, dict) else None
        if not isinstance(section, dict):
            raise ConfigError(f"Config file has no 'api_keys' object: {path}")
        try:
            return cls(keys=section)
        except ValueError as e:
            raise ConfigError(f"{e}: {path}") from e

    def get_api_key(self, service: str) -> str:
        try:
            return self.keys[service]
        except KeyError:
            raise MissingApiKeyError(service) from None


def default_config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))


def load_config(path: str | Path | None = None) -> ApiKeys:
    """Load API keys from ``path`` (default: ``$QUANT_ENGINE_CONFIG`` or ./config.json)."""
    return ApiKeys.from_json(default_config_path() if path is None else path)


@dataclass(frozen=True, slots=True)
class FetcherConfig:
    timeout_s: float = 10.0
    max_retries: int = 1
    rate_limit_sleep_s: float = 15.0
    history_days: int = 30
    trading_days_per_year: int = 252
    fallback_volatility: float = 0.30
    fallback_risk_free_rate: float = 0.05

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.rate_limit_sleep_s < 0:
            raise ValueError("rate_limit_sleep_s must be >= 0")
        if self.history_days < 2:
            raise ValueError("history_days must be >= 2")
        if self.trading_days_per_year <= 0:
            raise ValueError("trading_days_per_year must be > 0")
        if self.fallback_volatility < 0 or self.fallback_risk_free_rate < 0:
            raise ValueError("fallback values must be >= 0")
