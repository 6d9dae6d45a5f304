from __future__ import annotations

from spellcast.core.enums import CapabilityTier
from spellcast.rotation.models import PoolSizes, Selection
from spellcast.skill.content import ContentCatalog, resolve_locale


def test_catalog_should_build_basic_tier_pools(content_config, rng) -> None:
    catalog = ContentCatalog(content_config, CapabilityTier.BASIC, "en-US", rng=rng)
    assert catalog.pool_sizes() == PoolSizes(sound=4, interjection=3, after_effect=5)
    assert not catalog.suggestion_chips_enabled


def test_catalog_should_extend_sounds_and_drop_interjections_for_rich_tier(content_config, rng) -> None:
    catalog = ContentCatalog(content_config, CapabilityTier.RICH, "en-US", rng=rng)
    assert catalog.pool_sizes() == PoolSizes(sound=7, interjection=0, after_effect=5)
    assert catalog.sounds[:4] == content_config.sounds["base"]
    assert catalog.suggestion_chips_enabled


def test_catalog_should_map_selection_to_content(content_config, rng) -> None:
    catalog = ContentCatalog(content_config, CapabilityTier.BASIC, "en-US", rng=rng)
    selection = Selection(sound=2, interjection=None, after_effect=0)
    assert catalog.sound_url(selection) == "https://cdn.example/base-2.mp3"
    assert catalog.interjection(selection) is None
    assert catalog.after_effect(selection) == "You are a frog."
    assert catalog.sound_url(Selection(sound=99, interjection=None, after_effect=None)) is None


def test_resolve_locale_should_fall_back(content_config) -> None:
    assert resolve_locale(content_config, "de-DE") == "de-DE"
    assert resolve_locale(content_config, "de-AT") == "de-DE"
    assert resolve_locale(content_config, "fr-FR") == "en-US"
    assert resolve_locale(content_config, None) == "en-US"


def test_catalog_strings_should_fall_back_to_default_locale(content_config, rng) -> None:
    catalog = ContentCatalog(content_config, CapabilityTier.BASIC, "de-DE", rng=rng)
    assert catalog.t("Spell.reprompt") == "Noch einen Zauber?"
    assert catalog.t("Exit") == "Goodbye!"
    assert catalog.t("Missing.Key") == "Missing.Key"
    assert catalog.t("Spell.Unhandled") == "Did not catch that."
    assert catalog.t_list("SuggestionChips") == ["Cast again", "Stop"]
    assert catalog.pool_sizes().interjection == 1
