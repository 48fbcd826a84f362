"""Wall-clock helpers.

Paste timestamps are integers in milliseconds since the Unix epoch.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from loguru import logger

from app.core.config import settings

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_ms() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=timestamp_ms)


def format_timestamp_ms(timestamp_ms: int) -> str:
    """Format an epoch-millisecond timestamp as ISO-8601 UTC, e.g. ``2024-01-01T00:00:00.000Z``."""
    return ms_to_datetime(timestamp_ms).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_current_time_ms(test_now_ms: Optional[str] = None) -> int:
    """
    Get the current time, respecting TEST_MODE for deterministic testing.

    Args:
        test_now_ms: Value of the ``x-test-now-ms`` header, if sent

    Returns:
        The overridden time when TEST_MODE is on and the value is an integer,
        the wall clock otherwise
    """
    if settings.TEST_MODE and test_now_ms:
        try:
            return int(test_now_ms)
        except ValueError:
            logger.warning(f"Ignoring invalid x-test-now-ms header: {test_now_ms!r}")

    return now_ms()
