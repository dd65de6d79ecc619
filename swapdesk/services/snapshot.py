"""Immutable price snapshot produced by one completed feed fetch."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..models import TokenPrice
from ..pipeline.normalizer import normalize_feed, sorted_tokens


@dataclass(frozen=True)
class PriceSnapshot:
    prices: Mapping[str, TokenPrice]
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], fetched_at: datetime | None = None
    ) -> PriceSnapshot:
        prices = MappingProxyType(normalize_feed(records))
        if fetched_at is None:
            return cls(prices=prices)
        return cls(prices=prices, fetched_at=fetched_at)

    @property
    def tokens(self) -> tuple[TokenPrice, ...]:
        return sorted_tokens(self.prices)
