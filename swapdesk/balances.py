"""Wallet balances declared in configuration."""
from __future__ import annotations

from decimal import Decimal

from .config import BalanceConfig
from .models import Balance, Blockchain


class ConfiguredBalances:
    """Balance source backed by the ``wallet.balances`` config section."""

    def __init__(self, balances: tuple[BalanceConfig, ...]) -> None:
        self._balances = tuple(
            Balance(
                blockchain=Blockchain.parse(b.blockchain),
                currency=b.currency,
                amount=Decimal(b.amount),
            )
            for b in balances
        )

    def get_balances(self) -> list[Balance]:
        return list(self._balances)
