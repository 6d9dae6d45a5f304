"""Content pools and strings resolved for one session.

:class:`ContentCatalog` binds the content config to a capability tier and a
locale. It is the only place that turns ids chosen by the rotation engine back
into audio URLs and phrases.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from spellcast.config.models import ContentConfig, LocaleContent, TierConfig
from spellcast.core.enums import CapabilityTier
from spellcast.rotation.models import PoolSizes, Selection

LOGGER = logging.getLogger(__name__)


def resolve_locale(content: ContentConfig, locale: str | None) -> str:
    """Exact match, then same language, then the default locale."""

    if locale and locale in content.locales:
        return locale
    if locale:
        language = locale.split("-")[0].lower()
        for name in sorted(content.locales):
            if name.split("-")[0].lower() == language:
                return name
    return content.default_locale


class ContentCatalog:
    """Sounds, phrases and UI strings for a tier/locale pair."""

    def __init__(
        self,
        content: ContentConfig,
        tier: CapabilityTier,
        locale: str | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.tier = tier
        self.locale = resolve_locale(content, locale)
        self._tier_cfg: TierConfig = content.tiers[tier]
        self._locale_content: LocaleContent = content.locales[self.locale]
        self._fallback: LocaleContent = content.locales[content.default_locale]
        self._rng = rng or random.Random()
        sounds: List[str] = []
        for name in self._tier_cfg.sound_sets:
            sounds.extend(content.sounds[name])
        self.sounds: List[str] = sounds
        self.interjections: List[str] = list(self._locale_content.interjections) if self._tier_cfg.interjections else []
        self.after_effects: List[str] = list(self._locale_content.after_effects) if self._tier_cfg.after_effects else []

    @property
    def suggestion_chips_enabled(self) -> bool:
        return self._tier_cfg.suggestion_chips

    def pool_sizes(self) -> PoolSizes:
        return PoolSizes(
            sound=len(self.sounds),
            interjection=len(self.interjections),
            after_effect=len(self.after_effects),
        )

    def sound_url(self, selection: Selection) -> Optional[str]:
        return _pick(self.sounds, selection.sound)

    def interjection(self, selection: Selection) -> Optional[str]:
        return _pick(self.interjections, selection.interjection)

    def after_effect(self, selection: Selection) -> Optional[str]:
        return _pick(self.after_effects, selection.after_effect)

    def t(self, key: str) -> str:
        """Translate ``key``; list values pick one variant at random."""

        value = self._raw(key)
        if value is None:
            LOGGER.warning("Missing string", extra={"key": key, "locale": self.locale})
            return key
        if isinstance(value, list):
            return self._rng.choice(value) if value else ""
        return value

    def t_list(self, key: str) -> List[str]:
        value = self._raw(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def _raw(self, key: str):
        if key in self._locale_content.strings:
            return self._locale_content.strings[key]
        return self._fallback.strings.get(key)


def _pick(items: Sequence[str], content_id: Optional[int]) -> Optional[str]:
    if content_id is None or not 0 <= content_id < len(items):
        return None
    return items[content_id]


__all__ = ["ContentCatalog", "resolve_locale"]
