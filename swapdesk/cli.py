"""Command-line interface for the swap desk."""
from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime, timezone

from .config import load_config
from .errors import FeedUnavailableError, SwapValidationError
from .logging_setup import configure_logging
from .models import SwapQuote, TokenPrice, WalletRow
from .services import SwapDesk


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="swapdesk",
        description="Token prices, wallet balances and swap quotes",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("prices", help="List the latest valid price per token")
    sub.add_parser("wallet", help="Ranked wallet balances with USD values")

    quote_parser = sub.add_parser("quote", help="Convert an amount between tokens")
    quote_parser.add_argument("amount", help="Amount of the source token")
    quote_parser.add_argument("from_symbol", metavar="FROM", help="Source token")
    quote_parser.add_argument("to_symbol", metavar="TO", help="Target token")

    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _now_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def render_prices(tokens: tuple[TokenPrice, ...]) -> str:
    if not tokens:
        return "No tokens with a valid price."
    lines = [f"{t.symbol:<12} ${t.price:,.4f}" for t in tokens]
    return "\n".join(lines)


def render_wallet(rows: tuple[WalletRow, ...]) -> str:
    if not rows:
        return "No balances to show."
    lines = [
        f"{r.blockchain:<10} {r.currency:<8} {r.formatted_amount:>20}  ${r.usd_value:,.2f}"
        for r in rows
    ]
    return "\n".join(lines)


def render_quote(quote: SwapQuote) -> str:
    lines = [f"{quote.from_amount} {quote.from_symbol} → {quote.to_amount} {quote.to_symbol}"]
    if quote.rate is not None:
        lines.append(f"1 {quote.from_symbol} = {quote.rate:.6f} {quote.to_symbol}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    desk = SwapDesk(config)

    try:
        await desk.refresh()
    except FeedUnavailableError as e:
        print(f"Cannot load token prices: {e}", file=sys.stderr)
        return 1

    if args.command == "prices":
        print(render_prices(desk.tokens()))
    elif args.command == "wallet":
        print(render_wallet(desk.wallet_rows()))
    elif args.command == "quote":
        try:
            quote = desk.quote(args.amount, args.from_symbol, args.to_symbol)
        except SwapValidationError as e:
            print(f"⚠️ {e}", file=sys.stderr)
            return 2
        except KeyError as e:
            print(f"⚠️ {e.args[0]}", file=sys.stderr)
            return 2
        print(render_quote(quote))
    else:
        build_parser().print_help()
        return 1

    print(f"\n{_now_str()} UTC")
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
