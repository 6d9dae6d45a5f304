"""Configuration loading and validation package."""

from .loader import load_app_config, load_content_config, load_settings_config
from .models import (
    AnalyticsConfig,
    AppConfig,
    ContentConfig,
    LocaleContent,
    MediaConfig,
    SkillSettings,
    StorageConfig,
    TelemetryConfig,
    TierConfig,
)

__all__ = [
    "AnalyticsConfig",
    "AppConfig",
    "ContentConfig",
    "LocaleContent",
    "MediaConfig",
    "SkillSettings",
    "StorageConfig",
    "TelemetryConfig",
    "TierConfig",
    "load_app_config",
    "load_content_config",
    "load_settings_config",
]
