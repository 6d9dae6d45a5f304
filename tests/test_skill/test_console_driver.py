from __future__ import annotations

import io
import random

import pytest

from spellcast.core.enums import Platform
from spellcast.core.errors import ConfigurationError
from spellcast.main import _load_config, build_manager, run_console
from spellcast.skill.session import SessionManager


def test_run_console_should_play_until_stop(app_config, profile_store) -> None:
    manager = SessionManager(app_config, profile_store, rng=random.Random(3))
    out = io.StringIO()
    run_console(
        manager,
        ["next", "", "help", "stop", "next"],
        platform=Platform.ALEXA,
        user_id="console",
        locale="en-US",
        out=out,
    )
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("<speak>Welcome, apprentice.")
    assert "<speak>Say yes for a spell.</speak>" in lines
    assert lines[-1] == "<speak>Goodbye!</speak>"
    assert profile_store.get("console").spell_index == 2


def test_run_console_should_close_session_at_end_of_input(app_config, profile_store) -> None:
    manager = SessionManager(app_config, profile_store, rng=random.Random(3))
    out = io.StringIO()
    run_console(manager, ["AMAZON.YesIntent"], platform=Platform.GOOGLE, user_id="g", locale="en-US", out=out)
    assert "[chips] Cast again | Stop" in out.getvalue()
    assert manager.active_sessions == 0
    assert profile_store.get("g").sessions_count == 1


def test_build_manager_should_root_storage_under_base_dir(app_config, tmp_path) -> None:
    manager, tracker = build_manager(app_config, base_dir=tmp_path)
    try:
        out = io.StringIO()
        run_console(manager, ["stop"], platform=Platform.ALEXA, user_id="u", locale="en-US", out=out)
    finally:
        tracker.close()
    assert list((tmp_path / "data" / "profiles").glob("*.json"))
    assert list((tmp_path / "data" / "logs").glob("analytics_*.jsonl"))


def test_load_config_should_wrap_missing_files(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        _load_config(tmp_path)
