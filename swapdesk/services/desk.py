"""Swap desk orchestration — fetch feed, hold the snapshot, run the pipeline."""
from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import Any

from ..balances import ConfiguredBalances
from ..config import AppConfig
from ..errors import FeedUnavailableError, SwapValidationError
from ..feeds import SwitcheoFeed
from ..interfaces.balance_source import BalanceSource
from ..interfaces.price_feed import PriceFeed
from ..models import Balance, SwapQuote, TokenPrice, WalletRow
from ..pipeline import build_wallet_rows, ranker_from_config
from ..swap import SwapForm
from .snapshot import PriceSnapshot

logger = logging.getLogger(__name__)


class DeskState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class SwapDesk:
    """Holds the latest price snapshot and serves wallet rows and swap quotes.

    Each completed :meth:`refresh` replaces the snapshot wholesale; nothing
    reads a partially built snapshot.
    """

    def __init__(
        self,
        config: AppConfig,
        feed: PriceFeed | None = None,
        balances: BalanceSource | None = None,
    ) -> None:
        self._config = config
        self._feed: PriceFeed = feed or SwitcheoFeed(config.feed)
        self._balances: BalanceSource = balances or ConfiguredBalances(
            config.wallet.balances
        )
        self._ranker = ranker_from_config(config.wallet.precedence)

        self.state = DeskState.IDLE
        self.error = ""
        self._snapshot: PriceSnapshot | None = None

    @property
    def snapshot(self) -> PriceSnapshot | None:
        return self._snapshot

    # ------------------------------------------------------------------
    # Feed
    # ------------------------------------------------------------------

    async def refresh(self) -> PriceSnapshot:
        """Fetch the feed and replace the current snapshot."""
        self.state = DeskState.LOADING
        try:
            records: list[dict[str, Any]] = await self._feed.fetch_records()
        except Exception as e:
            # any feed failure, wrapped or not, leaves the desk unavailable
            self.state = DeskState.UNAVAILABLE
            self._snapshot = None
            self.error = "Failed to load token prices. Please try again later."
            logger.error("Price feed unavailable: %s", e)
            raise

        snapshot = PriceSnapshot.from_records(records)
        self._snapshot = snapshot
        self.state = DeskState.READY
        self.error = ""
        logger.info(
            "Price snapshot updated: %d tokens from %d records",
            len(snapshot.prices),
            len(records),
        )
        return snapshot

    def _require_snapshot(self) -> PriceSnapshot:
        if self._snapshot is None:
            raise FeedUnavailableError(
                "No price snapshot available", url=self._config.feed.url
            )
        return self._snapshot

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def tokens(self) -> tuple[TokenPrice, ...]:
        return self._require_snapshot().tokens

    def wallet_rows(self, balances: list[Balance] | None = None) -> tuple[WalletRow, ...]:
        """Rank, filter, sort and format balances against the current prices."""
        snapshot = self._require_snapshot()
        if balances is None:
            balances = self._balances.get_balances()
        rows = build_wallet_rows(balances, snapshot.prices, self._ranker)
        logger.debug("Built %d wallet rows from %d balances", len(rows), len(balances))
        return rows

    def new_form(self) -> SwapForm:
        """Swap form preloaded with the current snapshot (or marked unavailable)."""
        swap_cfg = self._config.swap
        form = SwapForm(
            default_from=swap_cfg.default_from,
            default_to=swap_cfg.default_to,
            quote_decimals=swap_cfg.quote_decimals,
        )
        if self._snapshot is not None:
            form.load(self._snapshot.tokens)
        elif self.state == DeskState.UNAVAILABLE:
            form.fail(self.error)
        return form

    def quote(self, amount: str | Decimal, from_symbol: str, to_symbol: str) -> SwapQuote:
        """Quote ``amount`` of ``from_symbol`` in ``to_symbol``.

        Raises:
            FeedUnavailableError: no snapshot has been loaded.
            SwapValidationError: the amount or selection is invalid.
            KeyError: a symbol has no valid price.
        """
        self._require_snapshot()
        if from_symbol == to_symbol:
            raise SwapValidationError("Please select two different tokens")
        form = self.new_form()
        form.select_from(from_symbol)
        form.select_to(to_symbol)
        form.set_from_amount(str(amount))
        return form.submit()
