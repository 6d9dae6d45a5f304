"""Skill runtime: intents, sessions, handlers and speech output."""
from .content import ContentCatalog
from .handlers import SpellHandlers
from .intents import INTENT_MAP, resolve_handler
from .models import Card, CardKind, DeviceInterface, SkillRequest, SkillResponse
from .session import SessionManager, SkillSession
from .speech import SpeechBuilder

__all__ = [
    "Card",
    "CardKind",
    "ContentCatalog",
    "DeviceInterface",
    "INTENT_MAP",
    "SessionManager",
    "SkillRequest",
    "SkillResponse",
    "SkillSession",
    "SpeechBuilder",
    "SpellHandlers",
    "resolve_handler",
]
