"""Protocol interfaces for the swap desk collaborators."""
from .balance_source import BalanceSource
from .price_feed import PriceFeed

__all__ = ["BalanceSource", "PriceFeed"]
