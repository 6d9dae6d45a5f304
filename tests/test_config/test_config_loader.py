from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from spellcast.config.loader import load_app_config, load_content_config, load_settings_config
from spellcast.core.enums import CapabilityTier, Platform

CONTENT_YAML = """
sounds:
  base: [a.mp3, b.mp3]
  google: [c.mp3]
tiers:
  basic:
    sound_sets: [base]
  rich:
    sound_sets: [base, google]
    interjections: false
    suggestion_chips: true
default_locale: en-US
locales:
  en-US:
    interjections: [Zap!]
    after_effects: [Frog., Purple hair.]
    strings:
      Exit: Bye!
      SuggestionChips: [Again, Stop]
"""


def _write_yaml(path: Path, content: str) -> Path:
    path.write_text(dedent(content), encoding="utf-8")
    return path


def test_load_settings_config_should_parse_valid_yaml(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "skill.yml",
        """
        platforms:
          alexa: rich
        break_seconds: 0.75
        storage:
          data_dir: var
        telemetry:
          log_level: DEBUG
          analytics:
            tracking_id: UA-123
        """,
    )
    settings = load_settings_config(path)
    assert settings.tier_for(Platform.ALEXA) is CapabilityTier.RICH
    assert settings.break_seconds == 0.75
    assert settings.storage.data_dir == "var"
    assert settings.telemetry.analytics.tracking_id == "UA-123"


def test_load_settings_config_should_accept_blank_file(tmp_path: Path) -> None:
    settings = load_settings_config(_write_yaml(tmp_path / "skill.yml", ""))
    assert settings.storage.profiles_subdir == "profiles"


def test_load_content_config_should_parse_tiers(tmp_path: Path) -> None:
    content = load_content_config(_write_yaml(tmp_path / "content.yml", CONTENT_YAML))
    assert content.tiers[CapabilityTier.RICH].sound_sets == ["base", "google"]
    assert content.tiers[CapabilityTier.BASIC].interjections is True
    assert content.locales["en-US"].strings["SuggestionChips"] == ["Again", "Stop"]


def test_load_content_config_should_require_sounds(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "content.yml", "locales: {}")
    with pytest.raises(ValueError):
        load_content_config(path)


def test_loader_should_reject_non_mapping_root(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "skill.yml", "- a\n- b\n")
    with pytest.raises(ValueError):
        load_settings_config(path)


def test_loader_should_raise_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings_config(tmp_path / "missing.yml")


def test_load_app_config_should_merge_all_sections(tmp_path: Path) -> None:
    settings_path = _write_yaml(tmp_path / "skill.yml", "platforms:\n  google: rich\n")
    content_path = _write_yaml(tmp_path / "content.yml", CONTENT_YAML)
    config = load_app_config(settings_path=settings_path, content_path=content_path)
    assert config.settings.tier_for(Platform.GOOGLE) is CapabilityTier.RICH
    assert config.describe()["sound_sets"] == {"base": 2, "google": 1}


def test_shipped_config_should_load() -> None:
    config_dir = Path(__file__).resolve().parents[2] / "config"
    config = load_app_config(
        settings_path=config_dir / "skill.yml",
        content_path=config_dir / "content.yml",
    )
    assert config.content.default_locale in config.content.locales
