"""Pure data pipeline: normalize → rank/filter/sort → format/convert."""
from __future__ import annotations

from typing import Iterable, Mapping

from ..models import Balance, TokenPrice, WalletRow
from .formatter import convert, exchange_rate, format_amount, format_balances, to_wallet_rows
from .normalizer import normalize, normalize_feed, sorted_tokens
from .ranker import DEFAULT_PRECEDENCE, UNRANKED, Ranker, ranker_from_config


def build_wallet_rows(
    balances: Iterable[Balance],
    prices: Mapping[str, TokenPrice],
    ranker: Ranker | None = None,
) -> tuple[WalletRow, ...]:
    """Run rank → format over one snapshot of balances and prices."""
    ranker = ranker or Ranker()
    return to_wallet_rows(format_balances(ranker.rank(balances), prices))


__all__ = [
    "DEFAULT_PRECEDENCE",
    "UNRANKED",
    "Ranker",
    "build_wallet_rows",
    "convert",
    "exchange_rate",
    "format_amount",
    "format_balances",
    "normalize",
    "normalize_feed",
    "ranker_from_config",
    "sorted_tokens",
    "to_wallet_rows",
]
