"""Collapse a raw price feed into one canonical price per symbol — no I/O."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..models import RawObservation, TokenPrice
from .formatter import to_decimal

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp. Naive values are read as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_observation(raw: Mapping[str, Any]) -> RawObservation | None:
    """Parse one ``{currency, price, date}`` feed record; None if malformed."""
    symbol = raw.get("currency")
    if not isinstance(symbol, str) or not symbol.strip():
        logger.debug("Dropping feed record without currency: %r", raw)
        return None

    price = to_decimal(raw.get("price"))
    if price is None:
        logger.debug("Dropping %s: unparsable price %r", symbol, raw.get("price"))
        return None

    observed_at = parse_timestamp(raw.get("date"))
    if observed_at is None:
        logger.debug("Dropping %s: unparsable date %r", symbol, raw.get("date"))
        return None

    return RawObservation(symbol=symbol.strip(), price=price, observed_at=observed_at)


def _fresher(candidate: RawObservation, current: RawObservation) -> bool:
    """Latest timestamp wins; on a timestamp tie the higher price wins."""
    if candidate.observed_at != current.observed_at:
        return candidate.observed_at > current.observed_at
    # str() separates equal values like 2 and 2.00
    return (candidate.price, str(candidate.price)) > (current.price, str(current.price))


def normalize(observations: Iterable[RawObservation]) -> dict[str, TokenPrice]:
    """Keep the freshest valid (price > 0) observation per symbol.

    Symbols whose observations are all invalid are absent from the result.
    The result does not depend on input order.
    """
    freshest: dict[str, RawObservation] = {}
    for obs in observations:
        if not obs.price.is_finite() or obs.price <= 0:
            continue
        current = freshest.get(obs.symbol)
        if current is None or _fresher(obs, current):
            freshest[obs.symbol] = obs

    return {
        symbol: TokenPrice(symbol=symbol, price=obs.price)
        for symbol, obs in sorted(freshest.items())
    }


def normalize_feed(records: Iterable[Mapping[str, Any]]) -> dict[str, TokenPrice]:
    """Parse raw feed records and normalize them, dropping malformed ones."""
    observations: list[RawObservation] = []
    dropped = 0
    for raw in records:
        if not isinstance(raw, Mapping):
            dropped += 1
            continue
        obs = parse_observation(raw)
        if obs is None:
            dropped += 1
            continue
        observations.append(obs)

    if dropped:
        logger.debug("Dropped %d malformed feed records", dropped)

    return normalize(observations)


def sorted_tokens(canonical: Mapping[str, TokenPrice]) -> tuple[TokenPrice, ...]:
    """Token list sorted by symbol, as offered in the swap form."""
    return tuple(canonical[symbol] for symbol in sorted(canonical))
