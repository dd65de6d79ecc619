"""Price feed protocol — raw price observation source."""
from typing import Any, Protocol


class PriceFeed(Protocol):
    """Abstract interface for fetching raw ``{currency, price, date}`` records."""

    async def fetch_records(self) -> list[dict[str, Any]]: ...
