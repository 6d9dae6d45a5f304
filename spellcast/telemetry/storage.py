"""Helpers for persisting analytics events."""
from __future__ import annotations

import json
from pathlib import Path

from spellcast.core.errors import TelemetryError
from spellcast.telemetry.events import AnalyticsEvent


class TelemetryStorage:
    """Append analytics events to ``logs/analytics_YYYYMMDD.jsonl``."""

    def __init__(self, *, logs_dir: Path) -> None:
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)

    def append_event(self, event: AnalyticsEvent) -> Path:
        """Append ``event`` as one JSON line and return the file path."""

        date_str = event.timestamp.strftime("%Y%m%d")
        path = self._logs_dir / f"analytics_{date_str}.jsonl"
        try:
            with path.open("a", encoding="utf-8") as handle:
                json.dump(event.to_dict(), handle, ensure_ascii=False)
                handle.write("\n")
        except OSError as exc:  # pragma: no cover - filesystem errors are rare
            raise TelemetryError(f"Failed to write analytics event: {exc}") from exc
        return path


def default_storage(base_dir: Path) -> TelemetryStorage:
    """Factory returning storage rooted under ``base_dir``."""

    return TelemetryStorage(logs_dir=base_dir / "logs")


__all__ = ["TelemetryStorage", "default_storage"]
