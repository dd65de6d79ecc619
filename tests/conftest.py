"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from decimal import Decimal
from pathlib import Path

import pytest

from swapdesk.config import (
    AppConfig,
    BalanceConfig,
    FeedConfig,
    SwapConfig,
    WalletConfig,
)
from swapdesk.models import Balance, Blockchain, TokenPrice


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_feed_config() -> FeedConfig:
    return FeedConfig(
        url="https://prices.example.com/prices.json",
        timeout_seconds=5.0,
        retries=0,
        retry_delay_seconds=0.0,
    )


@pytest.fixture()
def sample_app_config(sample_feed_config: FeedConfig) -> AppConfig:
    return AppConfig(
        feed=sample_feed_config,
        swap=SwapConfig(default_from="USDC", default_to="SWTH", quote_decimals=6),
        wallet=WalletConfig(
            balances=(
                BalanceConfig(blockchain="Ethereum", currency="ETH", amount="2"),
                BalanceConfig(blockchain="Osmosis", currency="OSMO", amount="100"),
                BalanceConfig(blockchain="Solana", currency="SOL", amount="3"),
                BalanceConfig(blockchain="Neo", currency="NEO", amount="0"),
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Feed fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_feed_records() -> list[dict]:
    """Raw feed with duplicates, a stale row, a zero price and junk rows."""
    return [
        {"currency": "ETH", "date": "2023-08-29T07:10:52.000Z", "price": 1645.93},
        {"currency": "ETH", "date": "2023-08-29T07:10:40.000Z", "price": 1600.0},
        {"currency": "OSMO", "date": "2023-08-29T07:10:50.000Z", "price": 0.3771},
        {"currency": "USDC", "date": "2023-08-29T07:10:30.000Z", "price": 1},
        {"currency": "USDC", "date": "2023-08-29T07:10:40.000Z", "price": "0.99985"},
        {"currency": "SWTH", "date": "2023-08-29T07:10:40.000Z", "price": 0.0040},
        {"currency": "ZERO", "date": "2023-08-29T07:10:40.000Z", "price": 0},
        {"currency": "BAD", "date": "not-a-date", "price": 1.0},
        {"currency": "JUNK", "date": "2023-08-29T07:10:40.000Z", "price": "n/a"},
    ]


@pytest.fixture()
def sample_prices() -> dict[str, TokenPrice]:
    return {
        "ETH": TokenPrice("ETH", Decimal("1645.93")),
        "OSMO": TokenPrice("OSMO", Decimal("0.3771")),
        "USDC": TokenPrice("USDC", Decimal("1")),
        "SWTH": TokenPrice("SWTH", Decimal("0.004")),
    }


@pytest.fixture()
def sample_balances() -> list[Balance]:
    return [
        Balance(Blockchain.ARBITRUM, "ARB", Decimal("10")),
        Balance(Blockchain.OSMOSIS, "OSMO", Decimal("100")),
        Balance(Blockchain.ETHEREUM, "ETH", Decimal("2")),
        Balance(Blockchain.UNKNOWN, "SOL", Decimal("3")),
        Balance(Blockchain.NEO, "NEO", Decimal("0")),
    ]


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    feed:
      url: "https://prices.example.com/prices.json"
      timeout_seconds: 5
      retries: 2
      retry_delay_seconds: 0.5
    swap:
      default_from: USDC
      default_to: ETH
      quote_decimals: 4
    wallet:
      precedence:
        Osmosis: 100
        Ethereum: 50
      balances:
        - {blockchain: Osmosis, currency: OSMO, amount: "1.5"}
        - {blockchain: Ethereum, currency: ETH, amount: "2"}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
