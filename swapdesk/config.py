"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://interview.switcheo.com/prices.json"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeedConfig:
    url: str = DEFAULT_FEED_URL
    timeout_seconds: float = 10.0
    retries: int = 0
    retry_delay_seconds: float = 1.0


@dataclass(frozen=True)
class SwapConfig:
    default_from: str = "USDC"
    default_to: str = "SWTH"
    quote_decimals: int = 6


@dataclass(frozen=True)
class BalanceConfig:
    blockchain: str = ""
    currency: str = ""
    amount: str = "0"


@dataclass(frozen=True)
class WalletConfig:
    precedence: dict[str, int] = field(
        default_factory=lambda: {
            "Osmosis": 100,
            "Ethereum": 50,
            "Arbitrum": 30,
            "Zilliqa": 20,
            "Neo": 20,
        }
    )
    balances: tuple[BalanceConfig, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    feed: FeedConfig = field(default_factory=FeedConfig)
    swap: SwapConfig = field(default_factory=SwapConfig)
    wallet: WalletConfig = field(default_factory=WalletConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_feed(raw: dict[str, Any]) -> FeedConfig:
    return FeedConfig(
        url=str(raw.get("url", DEFAULT_FEED_URL)),
        timeout_seconds=float(raw.get("timeout_seconds", 10.0)),
        retries=int(raw.get("retries", 0)),
        retry_delay_seconds=float(raw.get("retry_delay_seconds", 1.0)),
    )


def _build_swap(raw: dict[str, Any]) -> SwapConfig:
    return SwapConfig(
        default_from=str(raw.get("default_from", "USDC")),
        default_to=str(raw.get("default_to", "SWTH")),
        quote_decimals=int(raw.get("quote_decimals", 6)),
    )


def _build_balances(raw: list[dict[str, Any]]) -> tuple[BalanceConfig, ...]:
    balances: list[BalanceConfig] = []
    for b in raw:
        balances.append(
            BalanceConfig(
                blockchain=str(b.get("blockchain", "")),
                currency=str(b.get("currency", "")),
                amount=str(b.get("amount", "0")),
            )
        )
    return tuple(balances)


def _build_wallet(raw: dict[str, Any]) -> WalletConfig:
    precedence = raw.get("precedence")
    return WalletConfig(
        precedence=(
            dict(precedence) if precedence is not None
            else WalletConfig().precedence
        ),
        balances=_build_balances(raw.get("balances", []) or []),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    try:
        cfg = AppConfig(
            feed=_build_feed(raw.get("feed", {}) or {}),
            swap=_build_swap(raw.get("swap", {}) or {}),
            wallet=_build_wallet(raw.get("wallet", {}) or {}),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Malformed configuration in {config_path}: {e}") from e

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.feed.url:
        raise ConfigError("Feed URL must be configured")
    if cfg.feed.timeout_seconds <= 0:
        raise ConfigError("Feed timeout must be positive")
    if cfg.feed.retries < 0:
        raise ConfigError("Feed retries cannot be negative")
    if cfg.swap.quote_decimals < 0:
        raise ConfigError("Quote decimals cannot be negative")

    for name, value in cfg.wallet.precedence.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(
                f"Precedence for '{name}' must be a non-negative integer, got {value!r}"
            )

    for balance in cfg.wallet.balances:
        if not balance.currency:
            raise ConfigError(f"Balance on '{balance.blockchain}' has no currency")
        try:
            amount = Decimal(balance.amount)
        except InvalidOperation as e:
            raise ConfigError(
                f"Balance '{balance.currency}' has invalid amount {balance.amount!r}"
            ) from e
        if not amount.is_finite():
            raise ConfigError(
                f"Balance '{balance.currency}' has invalid amount {balance.amount!r}"
            )
