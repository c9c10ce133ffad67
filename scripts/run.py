"""
Local runner for the booking cache.

Subscribes to booking updates and logs every element of the sequence:
the cached booking first (if any), then the refreshed one or the error.

Usage:
    source .env && python scripts/run.py [--repeat N] [--interval SECONDS]

Environment variables (all optional):
    BOOKING_TRANSPORT            - "simulator" or "http" (default: simulator)
    BOOKING_API_URL              - booking endpoint (required for http)
    BOOKING_API_KEY              - sent as Api-Key header (http only)
    BOOKING_API_TIMEOUT          - seconds (default: 10)
    BOOKING_SIMULATOR_DELAY      - simulated latency in seconds (default: 1.0)
    BOOKING_FIXTURE_PATH         - JSON file served by the simulator
    BOOKING_CACHE_DIR            - cache directory (default: ~/.cache/booking-sync)
    BOOKING_CACHE_TTL            - seconds before the cache is stale (default: 300)
    BOOKING_CACHE_ALWAYS_EXPIRED - "1" to refresh on every run (debug)
"""

import argparse
import asyncio
import logging
import os
import sys

# Make sure project root is on sys.path when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from booking_sync.data_manager import BookingDataManager, BookingResult
from booking_sync.domain.errors import BusinessError
from booking_sync.factory import build_data_manager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)


def _describe(result: BookingResult) -> str:
    if result.ok:
        b = result.booking
        source = "cached" if result.from_cache else "fresh"
        route = " → ".join(
            [b.segments[0].origin_and_destination_pair.origin_city]
            + [s.origin_and_destination_pair.destination_city for s in b.segments]
        ) if b.segments else "(no segments)"
        return f"{source} booking ref={b.ship_reference} duration={b.duration}min route: {route}"
    if isinstance(result.error, BusinessError):
        return f"business error code={result.error.code} message={result.error.message or ''}"
    return f"error: {result.error}"


async def subscribe_once(manager: BookingDataManager) -> None:
    async for result in manager.publish():
        if result.ok:
            log.info(_describe(result))
        else:
            log.error(_describe(result))


async def main(repeat: int, interval: float) -> None:
    manager = build_data_manager()
    for i in range(repeat):
        await subscribe_once(manager)
        if i < repeat - 1:
            log.info("Sleeping %.0fs …", interval)
            await asyncio.sleep(interval)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--repeat", type=int, default=1, help="number of subscriptions")
    parser.add_argument("--interval", type=float, default=5.0, help="seconds between subscriptions")
    args = parser.parse_args()
    try:
        asyncio.run(main(args.repeat, args.interval))
    except KeyboardInterrupt:
        log.info("Stopped.")
