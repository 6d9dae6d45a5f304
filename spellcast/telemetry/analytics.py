"""Analytics tracker: local JSON lines plus optional HTTP forwarding.

Analytics never decide the outcome of a turn. Storage and transport failures
are logged as warnings and dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx

from spellcast.config.models import AnalyticsConfig
from spellcast.core.errors import TelemetryError
from spellcast.core.time_utils import now_utc
from spellcast.telemetry.events import AnalyticsEvent, HitType
from spellcast.telemetry.storage import TelemetryStorage

LOGGER = logging.getLogger(__name__)


class AnalyticsTracker:
    """Record analytics hits for all sessions of the process.

    Parameters
    ----------
    config:
        Analytics switches. Forwarding happens only when ``tracking_id`` is set.
    storage:
        Optional JSON lines sink.
    client:
        Optional pre-configured :class:`httpx.Client` (e.g. for tests).
    """

    def __init__(
        self,
        config: AnalyticsConfig,
        *,
        storage: TelemetryStorage | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._storage = storage
        self._client = client
        if self._client is None and config.enabled and config.tracking_id:
            self._client = httpx.Client(timeout=config.timeout_sec)

    @property
    def forwarding(self) -> bool:
        return bool(self._config.enabled and self._config.tracking_id and self._client is not None)

    def track(self, event: AnalyticsEvent) -> None:
        if not self._config.enabled:
            return
        if self._storage is not None:
            try:
                self._storage.append_event(event)
            except TelemetryError as exc:
                LOGGER.warning("Analytics event not stored: %s", exc)
        if self.forwarding:
            self._forward(event)

    def for_session(self, user_id: str, **dimensions: Any) -> "SessionAnalytics":
        return SessionAnalytics(tracker=self, user_id=user_id, dimensions=dict(dimensions))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _forward(self, event: AnalyticsEvent) -> None:
        assert self._client is not None and self._config.tracking_id
        try:
            response = self._client.post(self._config.endpoint, data=event.to_form(self._config.tracking_id))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            LOGGER.warning(
                "Analytics forward failed: %s",
                exc,
                extra={"category": event.category, "action": event.action},
            )


@dataclass(slots=True)
class SessionAnalytics:
    """Tracker bound to one user and the dimensions of their session."""

    tracker: AnalyticsTracker
    user_id: str
    dimensions: Dict[str, Any] = field(default_factory=dict)

    def event(self, category: str, action: str, *, session_control: str | None = None) -> None:
        self.tracker.track(
            AnalyticsEvent(
                timestamp=now_utc(),
                user_id=self.user_id,
                category=category,
                action=action,
                session_control=session_control,
                dimensions=dict(self.dimensions),
            )
        )

    def timing(self, category: str, variable: str, elapsed_ms: int) -> None:
        self.tracker.track(
            AnalyticsEvent(
                timestamp=now_utc(),
                user_id=self.user_id,
                category=category,
                action=variable,
                hit_type=HitType.TIMING,
                value=elapsed_ms,
                dimensions=dict(self.dimensions),
            )
        )


__all__ = ["AnalyticsTracker", "SessionAnalytics"]
