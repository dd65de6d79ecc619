"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class Blockchain(str, Enum):
    """Known blockchains. Anything unrecognised parses to ``UNKNOWN``."""

    OSMOSIS = "Osmosis"
    ETHEREUM = "Ethereum"
    ARBITRUM = "Arbitrum"
    ZILLIQA = "Zilliqa"
    NEO = "Neo"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, name: str | Blockchain) -> Blockchain:
        if isinstance(name, cls):
            return name
        for member in cls:
            if member.value.lower() == str(name).strip().lower():
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class RawObservation:
    """One price reading from the feed; may be stale or invalid."""

    symbol: str
    price: Decimal
    observed_at: datetime


@dataclass(frozen=True)
class TokenPrice:
    """Freshest valid observation kept for a symbol."""

    symbol: str
    price: Decimal


@dataclass(frozen=True)
class Balance:
    blockchain: Blockchain
    currency: str
    amount: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "blockchain", Blockchain.parse(self.blockchain))
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))


@dataclass(frozen=True)
class RankedBalance:
    """Balance with its precedence attached once during ranking."""

    blockchain: Blockchain
    currency: str
    amount: Decimal
    precedence: int


@dataclass(frozen=True)
class FormattedBalance:
    blockchain: Blockchain
    currency: str
    amount: Decimal
    precedence: int
    formatted: str
    usd_value: Decimal


@dataclass(frozen=True)
class WalletRow:
    """Display row handed to the renderer."""

    key: str
    blockchain: str
    currency: str
    amount: Decimal
    formatted_amount: str
    usd_value: Decimal


@dataclass(frozen=True)
class SwapQuote:
    """A computed conversion between two tokens. Nothing is executed."""

    from_symbol: str
    to_symbol: str
    from_amount: str
    to_amount: str
    rate: Decimal | None = None
