"""Telemetry and logging subsystem package."""
from .analytics import AnalyticsTracker, SessionAnalytics
from .events import AnalyticsEvent, HitType
from .logging_setup import configure_logging
from .storage import TelemetryStorage, default_storage

__all__ = [
    "AnalyticsEvent",
    "AnalyticsTracker",
    "HitType",
    "SessionAnalytics",
    "TelemetryStorage",
    "configure_logging",
    "default_storage",
]
