#!/usr/bin/env python3
"""
Fetch the next 24 hours of day-ahead prices and print them as JSON.
Runs without the server or cache; requires API_KEY in the environment or .env.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import settings
from src.exceptions import PriceAPIException
from src.logging_config import setup_logging
from src.services.price_fetcher import PriceFetcher
from src.utils.time_utils import day_ahead_window


async def fetch_current(domain: str) -> list:
    """Fetch prices for [now, now + 24h) in the given domain."""
    fetcher = PriceFetcher(settings)
    start, end = day_ahead_window()
    points = await fetcher.fetch_prices(start, end, domain)
    return [point.model_dump(mode="json") for point in points]


def main() -> int:
    parser = argparse.ArgumentParser(description="Print day-ahead prices as JSON")
    parser.add_argument(
        "--domain",
        default=settings.default_domain,
        help="ENTSO-E bidding zone code (default: %(default)s)",
    )
    args = parser.parse_args()

    # stdout carries the JSON output only
    setup_logging(log_format="text", stream=sys.stderr)

    try:
        data = asyncio.run(fetch_current(args.domain))
    except PriceAPIException as e:
        print(f"Fetch error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
