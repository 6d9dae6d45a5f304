"""Session lifecycle: load the profile once, play in memory, save at the end.

``SessionManager`` keeps one :class:`SkillSession` per platform session id.
The first request of a session reads the profile from the store (or starts a
fresh one), resolves the platform to a capability tier and binds the content
catalog. Later turns only mutate the in-memory profile. The profile is written
back when a handler ends the session (stop intent or session-ended request).
"""
from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, Optional

from spellcast.config.models import AppConfig
from spellcast.core.enums import CapabilityTier, Handler, Platform
from spellcast.core.errors import ProfileStoreError
from spellcast.core.time_utils import now_utc
from spellcast.rotation.models import PoolSizes
from spellcast.rotation.rotation_engine import RotationEngine
from spellcast.runtime.profiles import ProfileStore, UserProfile
from spellcast.skill.content import ContentCatalog
from spellcast.skill.handlers import SpellHandlers
from spellcast.skill.intents import resolve_handler
from spellcast.skill.models import SkillRequest, SkillResponse
from spellcast.telemetry.analytics import AnalyticsTracker, SessionAnalytics

LOGGER = logging.getLogger(__name__)

CLOSED_SESSION_MEMORY = 256


@dataclass(slots=True)
class SkillSession:
    """State held between turns of one conversation."""

    session_id: str
    profile: UserProfile
    platform: Platform
    tier: CapabilityTier
    catalog: ContentCatalog
    analytics: Optional[SessionAnalytics] = None
    started_at: Optional[datetime] = None
    speech_output: Optional[str] = None
    reprompt: Optional[str] = None
    closed: bool = field(default=False)

    @property
    def pool_sizes(self) -> PoolSizes:
        return self.catalog.pool_sizes()

    def track(self, category: str, action: str, *, session_control: str | None = None) -> None:
        if self.analytics is not None:
            self.analytics.event(category, action, session_control=session_control)


class SessionManager:
    """Route requests to sessions and persist profiles at session boundaries."""

    def __init__(
        self,
        config: AppConfig,
        store: ProfileStore,
        *,
        engine: RotationEngine | None = None,
        analytics: AnalyticsTracker | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._rng = rng or random.Random()
        self._engine = engine or RotationEngine(self._rng)
        self._analytics = analytics
        self._sessions: Dict[str, SkillSession] = {}
        # Platforms may send SessionEndedRequest after a stop already closed the session.
        self._closed_ids: Deque[str] = deque(maxlen=CLOSED_SESSION_MEMORY)

    @property
    def engine(self) -> RotationEngine:
        return self._engine

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)

    def handle(self, request: SkillRequest) -> SkillResponse:
        handler = resolve_handler(request.intent)
        if handler is Handler.CAN_FULFILL:
            return SpellHandlers.can_fulfill(request.target_intent)
        session = self._sessions.get(request.session_id)
        if session is None:
            if handler is Handler.END and request.session_id in self._closed_ids:
                LOGGER.debug("Session already closed", extra={"session_id": request.session_id})
                return SkillResponse.empty()
            session = self.open(request)
        response = SpellHandlers(session, self._engine, self._config.settings).dispatch(
            request.intent, target_intent=request.target_intent
        )
        if response.end_session:
            self.close(session)
        return response

    def open(self, request: SkillRequest) -> SkillSession:
        tier = self._config.settings.tier_for(request.platform)
        try:
            profile = self._store.load_or_fresh(request.user_id)
        except ProfileStoreError as exc:
            LOGGER.warning("Unreadable profile, starting fresh: %s", exc, extra={"session_id": request.session_id})
            profile = UserProfile.fresh(request.user_id)
            profile.first_seen_at = now_utc()
        catalog = ContentCatalog(self._config.content, tier, request.locale, rng=self._rng)
        session_analytics = None
        if self._analytics is not None:
            session_analytics = self._analytics.for_session(request.user_id, **request.analytics_dimensions())
        session = SkillSession(
            session_id=request.session_id,
            profile=profile,
            platform=request.platform,
            tier=tier,
            catalog=catalog,
            analytics=session_analytics,
        )
        self._sessions[request.session_id] = session
        LOGGER.info(
            "Session opened",
            extra={
                "session_id": request.session_id,
                "platform": request.platform.value,
                "tier": tier.value,
                "locale": catalog.locale,
                "new_user": profile.is_new,
            },
        )
        return session

    def close(self, session: SkillSession) -> None:
        """Flush the profile; a failed write only costs the next session's continuity."""

        self._sessions.pop(session.session_id, None)
        if session.closed:
            return
        session.closed = True
        self._closed_ids.append(session.session_id)
        profile = session.profile
        profile.last_seen_at = now_utc()
        profile.sessions_count += 1
        try:
            self._store.put(profile)
        except ProfileStoreError as exc:
            LOGGER.warning("Profile not saved: %s", exc, extra={"session_id": session.session_id})
            return
        LOGGER.info(
            "Session closed",
            extra={
                "session_id": session.session_id,
                "spell_index": profile.spell_index,
                "interjection_index": profile.interjection_index,
                "after_effect_index": profile.after_effect_index,
            },
        )

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            self.close(session)


__all__ = ["SessionManager", "SkillSession"]
