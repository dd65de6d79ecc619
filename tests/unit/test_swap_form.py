"""Unit tests for the swap form state model."""
from __future__ import annotations

from decimal import Decimal

import pytest

from swapdesk.errors import SwapValidationError
from swapdesk.models import TokenPrice
from swapdesk.swap.form import FormState, SwapForm


@pytest.fixture()
def tokens() -> list[TokenPrice]:
    return [
        TokenPrice("USDC", Decimal("1")),
        TokenPrice("SWTH", Decimal("0.004")),
        TokenPrice("ETH", Decimal("2000")),
        TokenPrice("ATOM", Decimal("4")),
    ]


@pytest.fixture()
def form(tokens: list[TokenPrice]) -> SwapForm:
    f = SwapForm()
    f.load(tokens)
    return f


class TestLoad:
    def test_starts_loading(self) -> None:
        f = SwapForm()
        assert f.state is FormState.LOADING
        assert f.tokens == ()

    def test_tokens_sorted(self, form: SwapForm) -> None:
        assert [t.symbol for t in form.tokens] == ["ATOM", "ETH", "SWTH", "USDC"]

    def test_default_selection(self, form: SwapForm) -> None:
        assert form.state is FormState.READY
        assert form.from_token is not None and form.from_token.symbol == "USDC"
        assert form.to_token is not None and form.to_token.symbol == "SWTH"

    def test_fallback_selection(self) -> None:
        f = SwapForm()
        f.load([TokenPrice("B", Decimal("1")), TokenPrice("A", Decimal("2"))])
        assert f.from_token.symbol == "A"  # type: ignore[union-attr]
        assert f.to_token.symbol == "B"  # type: ignore[union-attr]

    def test_fallback_never_selects_same_token(self) -> None:
        f = SwapForm(default_from="B", default_to="MISSING")
        f.load([TokenPrice("A", Decimal("1")), TokenPrice("B", Decimal("2"))])
        assert f.from_token.symbol == "B"  # type: ignore[union-attr]
        assert f.to_token.symbol == "A"  # type: ignore[union-attr]

    def test_single_token_no_selection(self) -> None:
        f = SwapForm()
        f.load([TokenPrice("A", Decimal("1"))])
        assert f.from_token is None
        assert f.to_token is None

    def test_fail(self) -> None:
        f = SwapForm()
        f.fail("Failed to load token prices")
        assert f.state is FormState.UNAVAILABLE
        assert f.error == "Failed to load token prices"


class TestAmounts:
    def test_from_amount_computes_to(self, form: SwapForm) -> None:
        assert form.set_from_amount("10")
        assert form.to_amount == "2500.000000"

    def test_to_amount_computes_from(self, form: SwapForm) -> None:
        assert form.set_to_amount("2500")
        assert form.from_amount == "10.000000"

    def test_rejected_keystroke(self, form: SwapForm) -> None:
        form.set_from_amount("12.3")
        assert form.set_from_amount("12.3.4") is False
        assert form.from_amount == "12.3"

    def test_empty_clears_other_side(self, form: SwapForm) -> None:
        form.set_from_amount("10")
        form.set_from_amount("")
        assert form.to_amount == ""

    def test_zero_amount_gives_empty(self, form: SwapForm) -> None:
        form.set_from_amount("0")
        assert form.to_amount == ""

    def test_ignored_while_loading(self) -> None:
        f = SwapForm()
        assert f.set_from_amount("1") is False
        assert f.from_amount == ""

    def test_typing_clears_error(self, form: SwapForm) -> None:
        with pytest.raises(SwapValidationError):
            form.submit()
        assert form.error
        form.set_from_amount("1")
        assert form.error == ""


class TestSelection:
    def test_select_from_recomputes(self, form: SwapForm) -> None:
        form.set_from_amount("1")
        form.select_from("ETH")
        assert form.to_amount == "500000.000000"

    def test_select_same_as_other_side_swaps(self, form: SwapForm) -> None:
        form.select_from("SWTH")
        assert form.from_token.symbol == "SWTH"  # type: ignore[union-attr]
        assert form.to_token.symbol == "USDC"  # type: ignore[union-attr]

    def test_select_to_same_as_from_swaps(self, form: SwapForm) -> None:
        form.select_to("USDC")
        assert form.from_token.symbol == "SWTH"  # type: ignore[union-attr]
        assert form.to_token.symbol == "USDC"  # type: ignore[union-attr]

    def test_unknown_symbol(self, form: SwapForm) -> None:
        with pytest.raises(KeyError):
            form.select_to("DOGE")

    def test_flip(self, form: SwapForm) -> None:
        form.set_from_amount("10")
        form.flip()
        assert form.from_token.symbol == "SWTH"  # type: ignore[union-attr]
        assert form.from_amount == "2500.000000"
        assert form.to_amount == "10"


class TestExchangeRateText:
    def test_text(self, form: SwapForm) -> None:
        assert form.exchange_rate_text() == "1 USDC = 250.000000 SWTH"

    def test_none_without_selection(self) -> None:
        assert SwapForm().exchange_rate_text() is None


class TestSubmit:
    def test_success_clears_amounts(self, form: SwapForm) -> None:
        form.set_from_amount("10")
        quote = form.submit()
        assert quote.from_symbol == "USDC"
        assert quote.to_symbol == "SWTH"
        assert quote.from_amount == "10"
        assert quote.to_amount == "2500.000000"
        assert quote.rate == Decimal("250")
        assert form.from_amount == ""
        assert form.to_amount == ""

    @pytest.mark.parametrize("amount", ["", "0", ".", "0.000"])
    def test_invalid_amount(self, form: SwapForm, amount: str) -> None:
        form.set_from_amount(amount)
        with pytest.raises(SwapValidationError, match="valid amount"):
            form.submit()
        assert form.error == "Please enter a valid amount"

    def test_missing_selection(self) -> None:
        f = SwapForm()
        f.load([TokenPrice("A", Decimal("1"))])
        f.set_from_amount("1")
        with pytest.raises(SwapValidationError, match="select both tokens"):
            f.submit()

    def test_not_loaded(self) -> None:
        with pytest.raises(SwapValidationError, match="not loaded"):
            SwapForm().submit()
