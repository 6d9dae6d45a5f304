"""Structured analytics events emitted around skill sessions."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class HitType(str, Enum):
    """Kinds of analytics hits."""

    EVENT = "event"
    TIMING = "timing"


@dataclass(slots=True)
class AnalyticsEvent:
    """One analytics hit, e.g. ``("Main flow", "NextIntent")``.

    ``dimensions`` carries per-session context (locale, platform, device
    interfaces); ``value`` holds the elapsed milliseconds for timing hits.
    """

    timestamp: datetime
    user_id: str
    category: str
    action: str
    hit_type: HitType = HitType.EVENT
    value: int | None = None
    session_control: str | None = None
    dimensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["hit_type"] = self.hit_type.value
        return data

    def to_form(self, tracking_id: str) -> Dict[str, str]:
        """Measurement-protocol form fields for HTTP forwarding."""

        form: Dict[str, str] = {
            "v": "1",
            "tid": tracking_id,
            "cid": self.user_id,
            "t": self.hit_type.value,
        }
        if self.hit_type is HitType.TIMING:
            form.update({"utc": self.category, "utv": self.action, "utt": str(self.value or 0)})
        else:
            form.update({"ec": self.category, "ea": self.action})
        if self.session_control:
            form["sc"] = self.session_control
        for key, value in self.dimensions.items():
            if value is None:
                continue
            form[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return form


__all__ = ["AnalyticsEvent", "HitType"]
