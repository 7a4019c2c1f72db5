"""Timestamp helpers shared by statistics and exports."""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def stats_timezone() -> tzinfo:
    """Return the zone used to bucket and display timestamps (``STATS_TIMEZONE``)."""
    name = (os.getenv("STATS_TIMEZONE") or "UTC").strip()
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown STATS_TIMEZONE %r, falling back to UTC", name)
        return timezone.utc


def to_local(value: Optional[datetime]) -> Optional[datetime]:
    aware = ensure_aware(value)
    if aware is None:
        return None
    return aware.astimezone(stats_timezone())


def format_display(value: Optional[datetime]) -> Optional[str]:
    local = to_local(value)
    return local.strftime(DISPLAY_FORMAT) if local else None


def hour_key(value: datetime) -> str:
    """Bucket label for the hour of day, e.g. ``9:00`` or ``17:00``."""
    return f"{to_local(value).hour}:00"
