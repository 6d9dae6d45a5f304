"""Request and response shapes exchanged with the platform adapters."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from spellcast.core.enums import Platform


class DeviceInterface(str, Enum):
    """Optional device capabilities reported with a request."""

    SCREEN = "screen"
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True, slots=True)
class SkillRequest:
    """One incoming user turn, already stripped of platform envelopes."""

    session_id: str
    user_id: str
    platform: Platform
    intent: str
    locale: str = "en-US"
    interfaces: FrozenSet[DeviceInterface] = frozenset()
    # Intent a CanFulfillIntentRequest asks about.
    target_intent: Optional[str] = None

    def analytics_dimensions(self) -> Dict[str, object]:
        dimensions: Dict[str, object] = {"ul": self.locale.lower(), "cd1": self.platform.value}
        for key, interface in (("cd2", DeviceInterface.SCREEN), ("cd3", DeviceInterface.AUDIO), ("cd4", DeviceInterface.VIDEO)):
            if interface in self.interfaces:
                dimensions[key] = True
        return dimensions


class CardKind(str, Enum):
    STANDARD = "standard"
    IMAGE = "image"


@dataclass(frozen=True, slots=True)
class Card:
    """Visual card shown next to the spoken response."""

    kind: CardKind
    title: str
    text: str = ""
    small_image_url: Optional[str] = None
    large_image_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SkillResponse:
    """Outgoing response: SSML speech, optional reprompt and visuals.

    ``end_session`` is ``True`` for "tell" responses and ``False`` when the
    skill keeps listening ("ask").
    """

    speech: Optional[str] = None
    reprompt: Optional[str] = None
    end_session: bool = False
    card: Optional[Card] = None
    suggestions: Tuple[str, ...] = field(default_factory=tuple)
    can_fulfill: Optional[bool] = None

    @classmethod
    def ask(cls, speech: str, reprompt: str, **extra: object) -> "SkillResponse":
        return cls(speech=speech, reprompt=reprompt, end_session=False, **extra)  # type: ignore[arg-type]

    @classmethod
    def tell(cls, speech: str) -> "SkillResponse":
        return cls(speech=speech, end_session=True)

    @classmethod
    def empty(cls) -> "SkillResponse":
        return cls(end_session=True)

    @classmethod
    def fulfillment(cls, can_fulfill: bool) -> "SkillResponse":
        return cls(end_session=False, can_fulfill=can_fulfill)


__all__ = ["Card", "CardKind", "DeviceInterface", "SkillRequest", "SkillResponse"]
