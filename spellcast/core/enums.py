"""Enumerations shared across skill subsystems."""
from __future__ import annotations

from enum import Enum


class Platform(str, Enum):
    """Voice platforms able to host the skill."""

    ALEXA = "alexa"
    GOOGLE = "google"


class CapabilityTier(str, Enum):
    """Content tier a platform resolves to for the whole session."""

    BASIC = "basic"
    RICH = "rich"


class Category(str, Enum):
    """Independent rotation categories served on every spell turn."""

    SOUND = "sound"
    INTERJECTION = "interjection"
    AFTER_EFFECT = "after_effect"


class Handler(str, Enum):
    """Handler names the intent mapping resolves to."""

    LAUNCH = "LAUNCH"
    SPELL_REQUEST = "spellRequest"
    NEXT = "NextIntent"
    PREVIOUS = "PreviousIntent"
    REPEAT = "RepeatIntent"
    START_OVER = "StartOverIntent"
    HELP = "HelpIntent"
    STOP = "StopIntent"
    UNHANDLED = "Unhandled"
    END = "END"
    CAN_FULFILL = "CAN_FULFILL_INTENT"
