"""Swap form state — token selection, two-way amount conversion, submit checks.

The form owns no I/O. A caller loads it with the canonical token list once
the price feed has arrived (or marks it unavailable when the fetch failed)
and then drives it with the same events a user would produce.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from ..errors import SwapValidationError
from ..models import SwapQuote, TokenPrice
from ..pipeline.formatter import convert, exchange_rate, format_amount, to_decimal
from .amount_input import AmountInput

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class SwapForm:
    """Two-sided swap form over a fixed snapshot of token prices."""

    def __init__(
        self,
        default_from: str = "USDC",
        default_to: str = "SWTH",
        quote_decimals: int = 6,
    ) -> None:
        self._default_from = default_from
        self._default_to = default_to
        self._quote_decimals = quote_decimals

        self.state = FormState.LOADING
        self.error = ""
        self.tokens: tuple[TokenPrice, ...] = ()
        self._by_symbol: dict[str, TokenPrice] = {}

        self.from_token: TokenPrice | None = None
        self.to_token: TokenPrice | None = None
        self._from_input = AmountInput()
        self._to_input = AmountInput()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, tokens: Iterable[TokenPrice]) -> None:
        """Install the token list and pick default selections."""
        self.tokens = tuple(sorted(tokens, key=lambda t: t.symbol))
        self._by_symbol = {t.symbol: t for t in self.tokens}
        self.state = FormState.READY
        self.error = ""

        if len(self.tokens) >= 2:
            self.from_token = self._by_symbol.get(self._default_from, self.tokens[0])
            self.to_token = self._by_symbol.get(self._default_to, self.tokens[1])
            if self.to_token.symbol == self.from_token.symbol:
                self.to_token = next(
                    t for t in self.tokens if t.symbol != self.from_token.symbol
                )
        logger.debug("Swap form loaded with %d tokens", len(self.tokens))

    def fail(self, message: str) -> None:
        self.state = FormState.UNAVAILABLE
        self.error = message

    # ------------------------------------------------------------------
    # Amounts
    # ------------------------------------------------------------------

    @property
    def from_amount(self) -> str:
        return self._from_input.value

    @property
    def to_amount(self) -> str:
        return self._to_input.value

    def _calculate(
        self, amount: str, source: TokenPrice | None, target: TokenPrice | None
    ) -> str:
        if not amount or source is None or target is None:
            return ""
        result = convert(amount, source.price, target.price)
        if result is None:
            return ""
        return format_amount(result, self._quote_decimals)

    def set_from_amount(self, text: str) -> bool:
        """Type into the "from" field; returns False if the keystroke is rejected."""
        if self.state is not FormState.READY or not self._from_input.enter(text):
            return False
        self.error = ""
        self._to_input.value = self._calculate(text, self.from_token, self.to_token)
        return True

    def set_to_amount(self, text: str) -> bool:
        """Type into the "to" field; the "from" side is derived from it."""
        if self.state is not FormState.READY or not self._to_input.enter(text):
            return False
        self.error = ""
        self._from_input.value = self._calculate(text, self.to_token, self.from_token)
        return True

    # ------------------------------------------------------------------
    # Token selection
    # ------------------------------------------------------------------

    def _lookup(self, symbol: str) -> TokenPrice:
        try:
            return self._by_symbol[symbol]
        except KeyError:
            raise KeyError(f"Unknown token '{symbol}'") from None

    def select_from(self, symbol: str) -> None:
        token = self._lookup(symbol)
        if self.to_token is not None and token.symbol == self.to_token.symbol:
            self.to_token = self.from_token
        self.from_token = token
        if self.from_amount:
            self._to_input.value = self._calculate(
                self.from_amount, self.from_token, self.to_token
            )

    def select_to(self, symbol: str) -> None:
        token = self._lookup(symbol)
        if self.from_token is not None and token.symbol == self.from_token.symbol:
            self.from_token = self.to_token
        self.to_token = token
        if self.from_amount:
            self._to_input.value = self._calculate(
                self.from_amount, self.from_token, self.to_token
            )

    def flip(self) -> None:
        """Swap both the selected tokens and the entered amounts."""
        self.from_token, self.to_token = self.to_token, self.from_token
        self._from_input.value, self._to_input.value = (
            self._to_input.value,
            self._from_input.value,
        )

    # ------------------------------------------------------------------
    # Display + submit
    # ------------------------------------------------------------------

    def exchange_rate_text(self) -> str | None:
        if self.from_token is None or self.to_token is None:
            return None
        rate = exchange_rate(self.from_token.price, self.to_token.price)
        if rate is None:
            return None
        return (
            f"1 {self.from_token.symbol} = "
            f"{format_amount(rate, self._quote_decimals)} {self.to_token.symbol}"
        )

    def submit(self) -> SwapQuote:
        """Validate the form and return the quote; amounts are then cleared."""
        if self.state is not FormState.READY:
            self.error = "Token prices are not loaded"
            raise SwapValidationError(self.error)

        amount = to_decimal(self.from_amount) if self.from_amount else None
        if amount is None or amount <= 0:
            self.error = "Please enter a valid amount"
            raise SwapValidationError(self.error)

        if self.from_token is None or self.to_token is None:
            self.error = "Please select both tokens"
            raise SwapValidationError(self.error)

        quote = SwapQuote(
            from_symbol=self.from_token.symbol,
            to_symbol=self.to_token.symbol,
            from_amount=self.from_amount,
            to_amount=self.to_amount,
            rate=exchange_rate(self.from_token.price, self.to_token.price),
        )
        logger.info(
            "Swap quoted: %s %s -> %s %s",
            quote.from_amount,
            quote.from_symbol,
            quote.to_amount,
            quote.to_symbol,
        )

        self._from_input.value = ""
        self._to_input.value = ""
        self.error = ""
        return quote
