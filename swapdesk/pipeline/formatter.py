"""Format ranked balances and convert amounts between tokens — no I/O."""
from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Mapping

from ..models import FormattedBalance, RankedBalance, TokenPrice, WalletRow

AMOUNT_PLACES = 8


def to_decimal(value: Any) -> Decimal | None:
    """Coerce a number or numeric string to a finite Decimal, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    return result if result.is_finite() else None


def format_amount(amount: Decimal, places: int = AMOUNT_PLACES) -> str:
    """Render ``amount`` with exactly ``places`` fractional digits.

    Examples:
        Decimal("5.1") → "5.10000000"
        Decimal("5")   → "5.00000000"
    """
    amount = Decimal(amount)
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize fails when the result needs more digits than the precision
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        return f"{amount.quantize(quantum, rounding=ROUND_HALF_EVEN):f}"


def _price_of(prices: Mapping[str, Any], currency: str) -> Decimal:
    price = prices.get(currency)
    if isinstance(price, TokenPrice):
        price = price.price
    return to_decimal(price) or Decimal(0)


def format_balances(
    ranked: Iterable[RankedBalance],
    prices: Mapping[str, Decimal] | Mapping[str, TokenPrice],
) -> tuple[FormattedBalance, ...]:
    """Attach an 8-decimal string and a USD value to each balance, in order.

    A currency missing from ``prices`` gets ``usd_value == 0`` and is kept.
    """
    return tuple(
        FormattedBalance(
            blockchain=r.blockchain,
            currency=r.currency,
            amount=r.amount,
            precedence=r.precedence,
            formatted=format_amount(r.amount),
            usd_value=r.amount * _price_of(prices, r.currency),
        )
        for r in ranked
    )


def convert(source_amount: Any, source_price: Any, target_price: Any) -> Decimal | None:
    """Cross-rate conversion: ``source_amount * source_price / target_price``.

    Returns None when the source amount is not a positive finite number, or
    when either price is missing or non-positive.
    """
    amount = to_decimal(source_amount)
    source = to_decimal(source_price)
    target = to_decimal(target_price)
    if amount is None or amount <= 0:
        return None
    if source is None or target is None or source <= 0 or target <= 0:
        return None
    return amount * source / target


def exchange_rate(source_price: Any, target_price: Any) -> Decimal | None:
    """Units of the target token worth one unit of the source token."""
    source = to_decimal(source_price)
    target = to_decimal(target_price)
    if source is None or target is None or source <= 0 or target <= 0:
        return None
    return source / target


def to_wallet_rows(formatted: Iterable[FormattedBalance]) -> tuple[WalletRow, ...]:
    return tuple(
        WalletRow(
            key=f"{f.blockchain.value}-{f.currency}",
            blockchain=f.blockchain.value,
            currency=f.currency,
            amount=f.amount,
            formatted_amount=f.formatted,
            usd_value=f.usd_value,
        )
        for f in formatted
    )
