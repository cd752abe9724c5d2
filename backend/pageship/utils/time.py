"""Clock helpers for stored timestamps and hosting site names."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """Wall-clock milliseconds; suffixes generated site names."""
    return time.time_ns() // 1_000_000


def utc_now() -> datetime:
    # saved_at, updated_at and last_deployed_at are all stored in UTC
    return datetime.now(tz=timezone.utc)
