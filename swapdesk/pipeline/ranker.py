"""Rank, filter and sort wallet balances by blockchain precedence."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from ..models import Balance, Blockchain, RankedBalance

logger = logging.getLogger(__name__)

UNRANKED = -99

DEFAULT_PRECEDENCE: Mapping[Blockchain, int] = MappingProxyType(
    {
        Blockchain.OSMOSIS: 100,
        Blockchain.ETHEREUM: 50,
        Blockchain.ARBITRUM: 30,
        Blockchain.ZILLIQA: 20,
        Blockchain.NEO: 20,
    }
)


class Ranker:
    """Attach precedence once, drop invalid balances, sort the survivors.

    The precedence table is copied at construction and never changes, so two
    calls to :meth:`rank` on the same input always agree.
    """

    def __init__(self, precedence: Mapping[Blockchain, int] = DEFAULT_PRECEDENCE) -> None:
        table: dict[Blockchain, int] = {}
        for chain, value in precedence.items():
            chain = Blockchain.parse(chain)
            if chain is Blockchain.UNKNOWN:
                raise ValueError("UNKNOWN cannot carry a precedence")
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(
                    f"Precedence for {chain.value} must be a non-negative integer"
                )
            table[chain] = value
        self._precedence: Mapping[Blockchain, int] = MappingProxyType(table)

    @property
    def precedence(self) -> Mapping[Blockchain, int]:
        return self._precedence

    def precedence_of(self, blockchain: Blockchain) -> int:
        return self._precedence.get(blockchain, UNRANKED)

    def rank(self, balances: Iterable[Balance]) -> tuple[RankedBalance, ...]:
        """Return surviving balances, highest precedence first.

        A balance survives iff its precedence is above ``UNRANKED`` and its
        amount is a positive finite number. Equal precedences are ordered by currency, then
        blockchain name; fully equal keys keep their input order.
        """
        ranked: list[RankedBalance] = []
        for balance in balances:
            precedence = self.precedence_of(balance.blockchain)
            amount = balance.amount
            if precedence <= UNRANKED or not amount.is_finite() or amount <= 0:
                logger.debug(
                    "Excluding %s on %s (precedence=%d, amount=%s)",
                    balance.currency,
                    balance.blockchain.value,
                    precedence,
                    balance.amount,
                )
                continue
            ranked.append(
                RankedBalance(
                    blockchain=balance.blockchain,
                    currency=balance.currency,
                    amount=balance.amount,
                    precedence=precedence,
                )
            )

        ranked.sort(key=lambda r: (-r.precedence, r.currency, r.blockchain.value))
        return tuple(ranked)


def ranker_from_config(precedence: Mapping[str, int]) -> Ranker:
    """Build a :class:`Ranker` from a name → precedence mapping.

    Names that are not known blockchains are ignored with a warning.
    """
    table: dict[Blockchain, int] = {}
    for name, value in precedence.items():
        chain = Blockchain.parse(name)
        if chain is Blockchain.UNKNOWN:
            logger.warning("Ignoring precedence for unknown blockchain '%s'", name)
            continue
        table[chain] = value
    return Ranker(table)
