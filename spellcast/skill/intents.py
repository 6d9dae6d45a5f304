"""Platform intent names mapped onto skill handlers."""
from __future__ import annotations

from typing import Dict

from spellcast.core.enums import Handler

INTENT_MAP: Dict[str, Handler] = {
    "LaunchIntent": Handler.LAUNCH,
    "WelcomeIntent": Handler.LAUNCH,
    "YesIntent": Handler.SPELL_REQUEST,
    "NoIntent": Handler.STOP,
    "CancelIntent": Handler.STOP,
    "AMAZON.YesIntent": Handler.SPELL_REQUEST,
    "AMAZON.NoIntent": Handler.STOP,
    "AMAZON.NextIntent": Handler.NEXT,
    "AMAZON.PreviousIntent": Handler.PREVIOUS,
    "AMAZON.StartOverIntent": Handler.START_OVER,
    "AMAZON.RepeatIntent": Handler.REPEAT,
    "AMAZON.HelpIntent": Handler.HELP,
    "AMAZON.StopIntent": Handler.STOP,
    "AMAZON.CancelIntent": Handler.STOP,
    "AMAZON.FallbackIntent": Handler.UNHANDLED,
    "DefaultFallbackIntent": Handler.UNHANDLED,
    "SessionEndedRequest": Handler.END,
    "CanFulfillIntentRequest": Handler.CAN_FULFILL,
}

_HANDLERS_BY_NAME: Dict[str, Handler] = {handler.value: handler for handler in Handler}


def resolve_handler(intent_name: str | None) -> Handler:
    """Return the handler for ``intent_name``; unknown names are unhandled."""

    if not intent_name:
        return Handler.UNHANDLED
    if intent_name in INTENT_MAP:
        return INTENT_MAP[intent_name]
    return _HANDLERS_BY_NAME.get(intent_name, Handler.UNHANDLED)


_NOT_FULFILLABLE = frozenset({Handler.UNHANDLED, Handler.END, Handler.CAN_FULFILL})


def can_fulfill_intent(intent_name: str | None) -> bool:
    """Whether a turn for ``intent_name`` would reach a dedicated handler."""

    return resolve_handler(intent_name) not in _NOT_FULFILLABLE


__all__ = ["INTENT_MAP", "can_fulfill_intent", "resolve_handler"]
