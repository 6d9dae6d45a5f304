"""Typed configuration models for the skill.

Two YAML files feed the runtime: ``skill.yml`` holds settings (platform tier
mapping, storage, telemetry, media URLs) and ``content.yml`` holds the content
pools and locale strings. Both are validated with pydantic before any session
starts so a broken content edit fails at boot rather than mid-conversation.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, model_validator

from spellcast.core.enums import CapabilityTier, Platform

StringValue = Union[str, List[str]]


class TierConfig(BaseModel):
    """What a capability tier offers.

    ``sound_sets`` are concatenated in order to build the sound pool, so ids
    of the shared sets stay stable between tiers.
    """

    sound_sets: List[str] = Field(..., min_length=1)
    interjections: bool = True
    after_effects: bool = True
    suggestion_chips: bool = False

    model_config = ConfigDict(frozen=True)


class LocaleContent(BaseModel):
    """Phrases and UI strings for one locale."""

    interjections: List[str] = Field(default_factory=list)
    after_effects: List[str] = Field(default_factory=list)
    strings: Dict[str, StringValue] = Field(default_factory=dict)


class ContentConfig(BaseModel):
    """Content pools for all tiers and locales (``content.yml``)."""

    sounds: Dict[str, List[str]]
    tiers: Dict[CapabilityTier, TierConfig]
    default_locale: str = "en-US"
    locales: Dict[str, LocaleContent]

    @model_validator(mode="after")
    def _check_references(self) -> "ContentConfig":
        missing_tiers = [tier.value for tier in CapabilityTier if tier not in self.tiers]
        if missing_tiers:
            raise ValueError(f"content.yml must define tiers: {', '.join(missing_tiers)}")
        for tier, tier_cfg in self.tiers.items():
            unknown = [name for name in tier_cfg.sound_sets if name not in self.sounds]
            if unknown:
                raise ValueError(f"Tier {tier.value} references unknown sound sets: {', '.join(unknown)}")
        if self.default_locale not in self.locales:
            raise ValueError(f"default_locale {self.default_locale!r} is not defined under locales")
        return self


class StorageConfig(BaseModel):
    """Where user profiles are persisted."""

    data_dir: str = Field("data")
    profiles_subdir: str = Field("profiles")


class AnalyticsConfig(BaseModel):
    """Analytics event sink.

    Events are always appended to JSON lines; when ``tracking_id`` is set they
    are also forwarded to ``endpoint`` with measurement-protocol form fields.
    """

    enabled: bool = True
    tracking_id: Optional[str] = None
    endpoint: str = Field("https://www.google-analytics.com/collect")
    timeout_sec: PositiveFloat = 2.0


class TelemetryConfig(BaseModel):
    """Logging and analytics switches."""

    log_level: str = Field("INFO")
    logs_dir: str = Field("data/logs")
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)


class MediaConfig(BaseModel):
    """Card imagery hosted next to the sound files."""

    base_url: str = Field("https://s3.amazonaws.com/avadakedavra")
    small_image: str = Field("720x480.jpg")
    large_image: str = Field("1200x800.jpg")

    def url(self, name: str) -> str:
        return f"{self.base_url.rstrip('/')}/{name}"


def _default_platform_tiers() -> Dict[Platform, CapabilityTier]:
    return {Platform.ALEXA: CapabilityTier.BASIC, Platform.GOOGLE: CapabilityTier.RICH}


class SkillSettings(BaseModel):
    """Top-level settings (``skill.yml``)."""

    platforms: Dict[Platform, CapabilityTier] = Field(default_factory=_default_platform_tiers)
    break_seconds: PositiveFloat = 0.5
    storage: StorageConfig = Field(default_factory=StorageConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)

    @model_validator(mode="after")
    def _fill_platforms(self) -> "SkillSettings":
        defaults = _default_platform_tiers()
        for platform in Platform:
            self.platforms.setdefault(platform, defaults[platform])
        return self

    def tier_for(self, platform: Platform) -> CapabilityTier:
        return self.platforms[platform]


class AppConfig(BaseModel):
    """Runtime config composed of settings and content."""

    settings: SkillSettings
    content: ContentConfig

    def describe(self) -> Dict[str, Any]:
        return {
            "tiers": {platform.value: tier.value for platform, tier in self.settings.platforms.items()},
            "locales": sorted(self.content.locales),
            "sound_sets": {name: len(urls) for name, urls in self.content.sounds.items()},
        }


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
]
