#!/usr/bin/env python3
"""
Auction Resolution Tool

Resolves a proxy-bidding auction described in a JSON file and prints the
result as JSON.

Input format:
    {"bidders": [{"id": "sasha", "name": "Sasha", "starting_bid": 50,
                  "max_bid": 80, "auto_increment": 3}, ...]}

Bidders without an entry_time are ordered by their position in the file.
"""

import sys
import json
import logging
import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from auction import AuctionConfig, AuctionError, AuctionService, Bidder
from observability.metrics import metrics_collector
from observability.tracing import setup_tracing, shutdown_tracing

logger = logging.getLogger("resolve_auction")


def load_bidders(document: Any) -> List[Bidder]:
    """
    Build bidders from a parsed JSON document.

    Accepts either {"bidders": [...]} or a bare list of bidder records.

    Raises:
        ValueError: If the document shape or a record is invalid
    """
    records = document.get("bidders") if isinstance(document, dict) else document
    if not isinstance(records, list):
        raise ValueError("Expected a list of bidders or an object with a 'bidders' list")

    bidders = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Bidder at position {position + 1} is not an object")
        bidders.append(Bidder.from_dict(record, default_entry_time=position))
    return bidders


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve a proxy-bidding auction from a JSON file"
    )

    parser.add_argument(
        'input',
        type=str,
        help="Path to the auction JSON file ('-' for stdin)"
    )

    parser.add_argument(
        '--max-rounds',
        type=int,
        default=None,
        help='Round cap for the bidding loop (default: AUCTION_MAX_ROUNDS or 1000)'
    )

    parser.add_argument(
        '--metrics',
        action='store_true',
        help='Print Prometheus metrics to stderr after resolving'
    )

    parser.add_argument(
        '--trace-console',
        action='store_true',
        help='Export trace spans to the console'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for auction resolution"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AuctionConfig.from_env()
        if args.max_rounds is not None:
            config = replace(config, max_rounds=args.max_rounds)
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        if args.input == '-':
            document = json.load(sys.stdin)
        else:
            with open(args.input) as f:
                document = json.load(f)
        bidders = load_bidders(document)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Could not load auction input: {e}")
        return 2

    if config.tracing_enabled or args.trace_console:
        setup_tracing(
            config.service_name,
            otlp_endpoint=config.otlp_endpoint,
            console_export=args.trace_console,
        )

    exit_code = 0
    try:
        service = AuctionService(config=config)
        result = service.determine_winner(bidders)
        print(json.dumps(result.to_dict(), indent=2))
    except AuctionError as e:
        logger.error(f"Auction failed: {e}")
        print(json.dumps({"error": e.to_dict()}, indent=2))
        exit_code = 1
    finally:
        if args.metrics:
            sys.stderr.write(metrics_collector.get_metrics().decode("utf-8"))
        shutdown_tracing()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
