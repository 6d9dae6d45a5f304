"""YAML loaders for the config subsystem.

Each helper consumes one YAML file, validates it via models.py and returns
typed objects to the caller.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml

from .models import AppConfig, ContentConfig, SkillSettings

_DEFAULT_CONFIG_DIR = Path("config")


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def load_settings_config(path: Path | str = _DEFAULT_CONFIG_DIR / "skill.yml") -> SkillSettings:
    """Load skill.yml (platform tiers, storage, telemetry, media)."""

    data = _read_yaml(Path(path))
    return SkillSettings.model_validate(data)


def load_content_config(path: Path | str = _DEFAULT_CONFIG_DIR / "content.yml") -> ContentConfig:
    """Load content.yml (sound sets, tiers and per-locale phrases).

    The file must declare ``sounds`` and ``locales``; tier references and the
    default locale are cross-checked by :class:`ContentConfig`.
    """

    data = _read_yaml(Path(path))
    for key in ("sounds", "locales"):
        if key not in data:
            raise ValueError(f"content.yml must contain `{key}`")
    return ContentConfig.model_validate(data)


def load_app_config(
    *,
    settings_path: Path | str = _DEFAULT_CONFIG_DIR / "skill.yml",
    content_path: Path | str = _DEFAULT_CONFIG_DIR / "content.yml",
) -> AppConfig:
    """Load and aggregate settings and content into a single AppConfig."""

    settings = load_settings_config(settings_path)
    content = load_content_config(content_path)
    return AppConfig(settings=settings, content=content)
