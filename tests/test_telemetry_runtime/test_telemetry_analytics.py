from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx

from spellcast.config.models import AnalyticsConfig
from spellcast.telemetry.analytics import AnalyticsTracker
from spellcast.telemetry.events import AnalyticsEvent, HitType
from spellcast.telemetry.logging_setup import JsonFormatter
from spellcast.telemetry.storage import TelemetryStorage


def _event(**overrides) -> AnalyticsEvent:
    payload = {
        "timestamp": datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
        "user_id": "user-1",
        "category": "Main flow",
        "action": "Launch",
    }
    payload.update(overrides)
    return AnalyticsEvent(**payload)


def test_telemetry_storage_should_append_json_lines(tmp_path) -> None:
    storage = TelemetryStorage(logs_dir=tmp_path / "logs")
    storage.append_event(_event())
    path = storage.append_event(_event(action="NextIntent"))
    assert path.name == "analytics_20240301.jsonl"
    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [line["action"] for line in lines] == ["Launch", "NextIntent"]
    assert lines[0]["hit_type"] == "event"


def test_event_form_should_use_measurement_protocol_fields() -> None:
    event = _event(session_control="start", dimensions={"ul": "en-us", "cd2": True})
    form = event.to_form("UA-1")
    assert form["tid"] == "UA-1"
    assert form["cid"] == "user-1"
    assert form["t"] == "event"
    assert (form["ec"], form["ea"], form["sc"]) == ("Main flow", "Launch", "start")
    assert form["cd2"] == "true"

    timing = _event(hit_type=HitType.TIMING, action="Session Duration", value=1500).to_form("UA-1")
    assert (timing["t"], timing["utv"], timing["utt"]) == ("timing", "Session Duration", "1500")


def test_tracker_should_forward_when_tracking_id_set(tmp_path) -> None:
    received: list[dict] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        received.append(parse_qs(request.content.decode()))
        return httpx.Response(200)

    client = httpx.Client(transport=httpx.MockTransport(_handler))
    tracker = AnalyticsTracker(
        AnalyticsConfig(tracking_id="UA-42", endpoint="https://collect.example/collect"),
        storage=TelemetryStorage(logs_dir=tmp_path),
        client=client,
    )
    tracker.for_session("user-9", ul="en-us").event("Main flow", "HelpIntent")
    assert received and received[0]["ea"] == ["HelpIntent"]
    assert received[0]["cid"] == ["user-9"]
    assert list(tmp_path.glob("analytics_*.jsonl"))


def test_tracker_should_swallow_transport_errors(tmp_path, caplog) -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    tracker = AnalyticsTracker(
        AnalyticsConfig(tracking_id="UA-42"),
        client=httpx.Client(transport=httpx.MockTransport(_handler)),
    )
    with caplog.at_level(logging.WARNING):
        tracker.track(_event())
    assert "Analytics forward failed" in caplog.text


def test_tracker_should_do_nothing_when_disabled(tmp_path) -> None:
    storage = TelemetryStorage(logs_dir=tmp_path)
    tracker = AnalyticsTracker(AnalyticsConfig(enabled=False), storage=storage)
    tracker.track(_event())
    assert not tracker.forwarding
    assert not list(tmp_path.glob("*.jsonl"))


def test_json_formatter_should_include_extra_fields() -> None:
    record = logging.LogRecord("spellcast", logging.INFO, __file__, 1, "Spell served", (), None)
    record.sound_id = 3
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Spell served"
    assert payload["sound_id"] == 3
    assert "pathname" not in payload
