"""
CLI entry point for CoinPulse.

Usage:
    # Start the API and WebSocket server
    python -m coinpulse serve --port 5000

    # Print current prices of the tracked coins
    python -m coinpulse quote

    # Print a moving-average signal for a coin (not recorded)
    python -m coinpulse predict --symbol ethereum
"""

import argparse
import asyncio
import json
import logging
import sys

from coinpulse.core.config import settings
from coinpulse.domain.market.errors import ProviderError
from coinpulse.domain.market.moving_average import predict_signal
from coinpulse.infrastructure.market.coingecko_provider import CoinGeckoQuoteProvider
from coinpulse.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def _provider() -> CoinGeckoQuoteProvider:
    return CoinGeckoQuoteProvider(
        base_url=settings.coingecko_base_url,
        vs_currency=settings.vs_currency,
        timeout=settings.provider_timeout_seconds,
        api_key=settings.coingecko_api_key,
    )


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the full application under uvicorn."""
    import uvicorn

    logger.info("Starting CoinPulse at http://%s:%d", args.host, args.port)
    logger.info("WebSocket: ws://%s:%d/ws", args.host, args.port)
    uvicorn.run("coinpulse.main:app", host=args.host, port=args.port, reload=False)


def cmd_quote(args: argparse.Namespace) -> None:
    """Fetch and print one snapshot of the requested (or tracked) coins."""
    symbols = [s.strip() for s in (args.symbols or "").split(",") if s.strip()]
    symbols = symbols or settings.tracked_symbols
    snapshot = asyncio.run(_provider().get_quotes(symbols))
    print(json.dumps(snapshot.to_payload(), indent=2))
    print(f"Total: {snapshot.total():.2f} {snapshot.vs_currency.upper()}")


def cmd_predict(args: argparse.Namespace) -> None:
    """Compute and print a signal without recording it."""
    points = asyncio.run(_provider().get_price_history(args.symbol, args.days))
    result = predict_signal(
        [p.price for p in points], settings.short_window, settings.long_window
    )
    print(f"{args.symbol.upper()}: {result.signal.value}")
    print(result.rationale)


def main() -> None:
    configure_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(description="CoinPulse CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the API/WebSocket server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument(
        "--port", type=int, default=5000, help="Port to listen on (default 5000)"
    )
    serve_parser.set_defaults(func=cmd_serve)

    quote_parser = subparsers.add_parser("quote", help="Print current prices")
    quote_parser.add_argument(
        "--symbols", default=None, help="Comma-separated coin ids (default: tracked set)"
    )
    quote_parser.set_defaults(func=cmd_quote)

    predict_parser = subparsers.add_parser("predict", help="Print a moving-average signal")
    predict_parser.add_argument("--symbol", default=settings.default_symbol)
    predict_parser.add_argument(
        "--days", type=int, default=settings.prediction_history_days
    )
    predict_parser.set_defaults(func=cmd_predict)

    args = parser.parse_args()
    try:
        args.func(args)
    except ProviderError as exc:
        logger.error("%s", exc.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
