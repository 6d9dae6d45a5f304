"""Intent handlers for the spell-casting bit."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Optional

from spellcast.config.models import SkillSettings
from spellcast.core.enums import Category, Handler, Platform
from spellcast.core.time_utils import elapsed_ms, now_utc
from spellcast.rotation.rotation_engine import RotationEngine
from spellcast.skill.intents import can_fulfill_intent, resolve_handler
from spellcast.skill.models import Card, CardKind, SkillResponse
from spellcast.skill.speech import SpeechBuilder, plain_speech

if TYPE_CHECKING:
    from spellcast.skill.session import SkillSession

LOGGER = logging.getLogger(__name__)

MAIN_FLOW = "Main flow"


class SpellHandlers:
    """Handle one turn of a :class:`SkillSession`."""

    def __init__(self, session: "SkillSession", engine: RotationEngine, settings: SkillSettings) -> None:
        self._session = session
        self._engine = engine
        self._settings = settings
        self._catalog = session.catalog
        self._routes: Dict[Handler, Callable[[], SkillResponse]] = {
            Handler.LAUNCH: self.launch,
            Handler.SPELL_REQUEST: lambda: self.spell_request(action="spellRequest"),
            Handler.NEXT: self.next,
            Handler.PREVIOUS: self.previous,
            Handler.REPEAT: self.repeat,
            Handler.START_OVER: self.start_over,
            Handler.HELP: self.help,
            Handler.STOP: self.stop,
            Handler.UNHANDLED: self.unhandled,
            Handler.END: self.end,
        }

    def dispatch(self, intent_name: str | None, *, target_intent: str | None = None) -> SkillResponse:
        handler = resolve_handler(intent_name)
        if handler is Handler.CAN_FULFILL:
            return self.can_fulfill(target_intent)
        LOGGER.debug("Dispatching intent", extra={"intent": intent_name, "handler": handler.value})
        return self._routes[handler]()

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def launch(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "Session Start", session_control="start")
        self._session.track(MAIN_FLOW, "Launch")
        self._session.started_at = now_utc()
        return self.spell_request(self._catalog.t("Spell.Launch"), action="LAUNCH")

    def next(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "NextIntent")
        return self.spell_request(self._catalog.t("Spell.Next"), action="NextIntent")

    def previous(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "PreviousIntent")
        profile = self._session.profile
        profile.rotation = self._engine.rewind(profile.rotation, Category.SOUND, self._session.pool_sizes)
        return self.spell_request(self._catalog.t("Spell.Previous"), action="PreviousIntent")

    def repeat(self) -> SkillResponse:
        if self._session.speech_output:
            self._session.track(MAIN_FLOW, "RepeatIntent")
            return SkillResponse.ask(self._session.speech_output, self._session.reprompt or "")
        self._session.track(MAIN_FLOW, "RepeatIntent at LaunchRequest")
        return self.launch()

    def start_over(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "StartOverIntent")
        return self.spell_request(self._catalog.t("Spell.StartOver"), action="StartOverIntent")

    def help(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "HelpIntent")
        speech = plain_speech(self._catalog.t("Help.ask"))
        reprompt = plain_speech(self._catalog.t("Help.reprompt"))
        return self._remember(SkillResponse.ask(speech, reprompt))

    @staticmethod
    def can_fulfill(target_intent: str | None) -> SkillResponse:
        """Answer a sessionless check on whether ``target_intent`` is supported."""

        answer = can_fulfill_intent(target_intent)
        LOGGER.info("Fulfillment check", extra={"target_intent": target_intent, "can_fulfill": answer})
        return SkillResponse.fulfillment(answer)

    def unhandled(self) -> SkillResponse:
        return self.spell_request(self._catalog.t("Spell.Unhandled"), action="Unhandled")

    def spell_request(self, previous_speech: Optional[str] = None, *, action: str) -> SkillResponse:
        """Advance the rotation and speak sound, interjection and after-effect."""

        self._session.track(MAIN_FLOW, action)
        profile = self._session.profile
        selection, profile.rotation = self._engine.advance(profile.rotation, self._session.pool_sizes)
        pause = self._settings.break_seconds

        builder = SpeechBuilder()
        if previous_speech:
            builder.add_text(previous_speech).add_break(pause)
        sound_url = self._catalog.sound_url(selection)
        if sound_url:
            builder.add_audio(sound_url).add_break(pause)
        interjection = self._catalog.interjection(selection)
        if interjection:
            builder.add_text(interjection).add_break(pause)
        after_effect = self._catalog.after_effect(selection)
        if after_effect:
            builder.add_text(after_effect).add_break(pause)
        reprompt_text = self._catalog.t("Spell.reprompt")
        builder.add_text(reprompt_text)

        LOGGER.info(
            "Spell served",
            extra={
                "session_id": self._session.session_id,
                "sound_id": selection.sound,
                "interjection_id": selection.interjection,
                "after_effect_id": selection.after_effect,
            },
        )
        suggestions = tuple(self._catalog.t_list("SuggestionChips")) if self._catalog.suggestion_chips_enabled else ()
        response = SkillResponse.ask(
            builder.build(),
            plain_speech(reprompt_text),
            card=self._spell_card(),
            suggestions=suggestions,
        )
        return self._remember(response)

    def stop(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "StopIntent")
        self._end_session()
        return SkillResponse.tell(plain_speech(self._catalog.t("Exit")))

    def end(self) -> SkillResponse:
        self._session.track(MAIN_FLOW, "SessionEnded")
        self._end_session()
        if self._session.platform is Platform.GOOGLE:
            return SkillResponse.tell(plain_speech(self._catalog.t("Exit")))
        return SkillResponse.empty()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _spell_card(self) -> Card:
        media = self._settings.media
        title = self._catalog.t("Spell.CardTitle")
        if self._session.platform is Platform.GOOGLE:
            return Card(kind=CardKind.IMAGE, title=title, text="****", small_image_url=media.url(media.small_image))
        return Card(
            kind=CardKind.STANDARD,
            title=title,
            small_image_url=media.url(media.small_image),
            large_image_url=media.url(media.large_image),
        )

    def _remember(self, response: SkillResponse) -> SkillResponse:
        self._session.speech_output = response.speech
        self._session.reprompt = response.reprompt
        return response

    def _end_session(self) -> None:
        self._session.track(MAIN_FLOW, "Session End", session_control="end")
        started = self._session.started_at
        if started is None:
            return
        elapsed = elapsed_ms(started)
        if self._session.analytics is not None:
            self._session.analytics.timing(MAIN_FLOW, "Session Duration", elapsed)
        LOGGER.info("Session duration", extra={"session_id": self._session.session_id, "elapsed_ms": elapsed})


__all__ = ["SpellHandlers"]
