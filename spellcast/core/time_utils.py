"""Helpers for timezone-aware timestamps used by sessions and telemetry."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def elapsed_ms(start: datetime, end: datetime | None = None) -> int:
    """Milliseconds between ``start`` and ``end`` (defaults to now)."""

    if start.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware")
    finish = end or now_utc()
    return int((finish - start).total_seconds() * 1000)


def parse_dt(value: Any) -> datetime | None:
    """Parse an ISO timestamp from persisted JSON; blanks map to ``None``."""

    if isinstance(value, datetime):
        return value
    if not value:
        return None
    return datetime.fromisoformat(value)
