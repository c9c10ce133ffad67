import os
from pathlib import Path

from booking_sync.adapters.file_booking_cache import FileBookingCache
from booking_sync.adapters.ports import BookingTransport
from booking_sync.data_manager import BookingDataManager
from booking_sync.domain.booking_cache import BookingCache
from booking_sync.domain.staleness import (
    DEFAULT_TTL_SECONDS,
    AlwaysExpiredPolicy,
    StalenessPolicy,
    TtlStalenessPolicy,
)
from booking_sync.service import BookingService

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "booking-sync"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def create_booking_transport(kind: str | None = None) -> BookingTransport:
    """
    Factory: create the right transport based on config.

    The kind can be passed explicitly or read from the BOOKING_TRANSPORT
    env var. Defaults to "simulator".
    """
    kind = kind or os.environ.get("BOOKING_TRANSPORT", "simulator")

    if kind == "http":
        from booking_sync.adapters.http_transport import HttpBookingTransport

        return HttpBookingTransport(
            url=os.environ["BOOKING_API_URL"],
            timeout=float(os.environ.get("BOOKING_API_TIMEOUT", "10")),
            api_key=os.environ.get("BOOKING_API_KEY") or None,
        )

    if kind == "simulator":
        from booking_sync.adapters.simulator_transport import SimulatorBookingTransport

        return SimulatorBookingTransport(
            delay=float(os.environ.get("BOOKING_SIMULATOR_DELAY", "1.0")),
            fixture_path=os.environ.get("BOOKING_FIXTURE_PATH") or None,
        )

    raise ValueError(f"Unknown booking transport: {kind!r}")


def create_booking_cache(cache_dir: str | Path | None = None) -> BookingCache:
    cache_dir = cache_dir or os.environ.get("BOOKING_CACHE_DIR") or DEFAULT_CACHE_DIR
    return FileBookingCache(Path(cache_dir).expanduser())


def create_staleness_policy() -> StalenessPolicy:
    """TTL policy from BOOKING_CACHE_TTL; BOOKING_CACHE_ALWAYS_EXPIRED=1 forces a refresh every time."""
    if _env_flag("BOOKING_CACHE_ALWAYS_EXPIRED"):
        return AlwaysExpiredPolicy()
    ttl = float(os.environ.get("BOOKING_CACHE_TTL", str(DEFAULT_TTL_SECONDS)))
    return TtlStalenessPolicy(ttl_seconds=ttl)


def build_data_manager(
    transport: BookingTransport | None = None,
    cache: BookingCache | None = None,
    policy: StalenessPolicy | None = None,
) -> BookingDataManager:
    """Wire a BookingDataManager; anything not passed in comes from the environment."""
    transport = transport or create_booking_transport()
    cache = cache or create_booking_cache()
    service = BookingService(transport, cache)
    return BookingDataManager(service, cache, policy or create_staleness_policy())
