from __future__ import annotations

import random
from pathlib import Path
from typing import Callable

import pytest

from spellcast.config.models import (
    AnalyticsConfig,
    AppConfig,
    ContentConfig,
    LocaleContent,
    SkillSettings,
    TelemetryConfig,
    TierConfig,
)
from spellcast.core.enums import CapabilityTier, Platform
from spellcast.runtime.profiles import ProfileStore
from spellcast.skill.models import SkillRequest


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(scope="session")
def content_config() -> ContentConfig:
    return ContentConfig(
        sounds={
            "base": [f"https://cdn.example/base-{i}.mp3" for i in range(4)],
            "google": [f"https://cdn.example/google-{i}.mp3" for i in range(3)],
        },
        tiers={
            CapabilityTier.BASIC: TierConfig(sound_sets=["base"], interjections=True),
            CapabilityTier.RICH: TierConfig(sound_sets=["base", "google"], interjections=False, suggestion_chips=True),
        },
        default_locale="en-US",
        locales={
            "en-US": LocaleContent(
                interjections=["Zap!", "Kaboom!", "Abracadabra!"],
                after_effects=["You are a frog.", "Your hair is purple.", "It rains on you.", "Shoes swapped.", "Rhymes only."],
                strings={
                    "Spell.Launch": "Welcome, apprentice.",
                    "Spell.Next": "Another one.",
                    "Spell.Previous": "Once more.",
                    "Spell.StartOver": "Starting over.",
                    "Spell.Unhandled": ["Did not catch that."],
                    "Spell.reprompt": "Another spell?",
                    "Spell.CardTitle": "Spell Cast!",
                    "Help.ask": "Say yes for a spell.",
                    "Help.reprompt": "Yes or stop?",
                    "SuggestionChips": ["Cast again", "Stop"],
                    "Exit": "Goodbye!",
                },
            ),
            "de-DE": LocaleContent(
                interjections=["Simsalabim!"],
                after_effects=["Du bist ein Frosch."],
                strings={"Spell.reprompt": "Noch einen Zauber?"},
            ),
        },
    )


@pytest.fixture
def app_config(content_config: ContentConfig) -> AppConfig:
    settings = SkillSettings(telemetry=TelemetryConfig(analytics=AnalyticsConfig(enabled=True)))
    return AppConfig(settings=settings, content=content_config)


@pytest.fixture
def profile_store(tmp_path: Path) -> ProfileStore:
    return ProfileStore(tmp_path / "profiles")


@pytest.fixture
def request_factory() -> Callable[..., SkillRequest]:
    def _factory(intent: str, **overrides: object) -> SkillRequest:
        payload: dict[str, object] = {
            "session_id": "session-1",
            "user_id": "amzn1.ask.account.TEST",
            "platform": Platform.ALEXA,
            "intent": intent,
            "locale": "en-US",
        }
        payload.update(overrides)
        return SkillRequest(**payload)  # type: ignore[arg-type]

    return _factory
