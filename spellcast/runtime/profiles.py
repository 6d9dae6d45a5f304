"""Per-user profile persistence.

A :class:`UserProfile` is read once when a session opens and written back when
it closes; turns in between only touch the in-memory copy. The store keeps one
JSON document per user under ``<data_dir>/profiles``. File names are a hash of
the platform user id because those ids are long and contain characters that
are awkward on some filesystems.
"""
from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from spellcast.core.errors import ProfileStoreError
from spellcast.core.time_utils import now_utc, parse_dt
from spellcast.core.types import UserId
from spellcast.rotation.models import RotationState, UserRotation

# Flat cursor keys written by the first release, before permutations existed.
_LEGACY_INDEX_KEYS = {
    "sound": "spellIndex",
    "interjection": "interjectionIndex",
    "after_effect": "afterEffectIndex",
}


@dataclass(slots=True)
class UserProfile:
    """Everything the skill remembers about one user.

    ``rotation`` belongs to the rotation engine; ``display_name``,
    ``first_seen_at``, ``last_seen_at`` and ``sessions_count`` are maintained
    by the session layer and are opaque to the engine.
    """

    user_id: UserId
    rotation: UserRotation = field(default_factory=UserRotation)
    display_name: str | None = None
    first_seen_at: datetime | None = None
    last_seen_at: datetime | None = None
    sessions_count: int = 0

    @property
    def spell_index(self) -> int:
        return self.rotation.sound.index

    @property
    def interjection_index(self) -> int:
        return self.rotation.interjection.index

    @property
    def after_effect_index(self) -> int:
        return self.rotation.after_effect.index

    @property
    def is_new(self) -> bool:
        return self.sessions_count == 0

    @classmethod
    def fresh(cls, user_id: str) -> "UserProfile":
        return cls(user_id=UserId(user_id))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "display_name": self.display_name,
            "first_seen_at": self.first_seen_at.isoformat() if self.first_seen_at else None,
            "last_seen_at": self.last_seen_at.isoformat() if self.last_seen_at else None,
            "sessions_count": self.sessions_count,
            "rotation": self.rotation.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "UserProfile":
        user_id = payload.get("user_id") or payload.get("userId")
        if not user_id:
            raise ProfileStoreError("Profile payload is missing user_id")
        if "rotation" in payload:
            rotation = UserRotation.from_dict(payload.get("rotation"))
        else:
            rotation = _legacy_rotation(payload.get("data") or payload)
        return cls(
            user_id=UserId(str(user_id)),
            rotation=rotation,
            display_name=payload.get("display_name"),
            first_seen_at=parse_dt(payload.get("first_seen_at")),
            last_seen_at=parse_dt(payload.get("last_seen_at")),
            sessions_count=int(payload.get("sessions_count", 0) or 0),
        )


def _legacy_rotation(data: Dict[str, Any]) -> UserRotation:
    # No permutation was stored, so each category regenerates on first use.
    states = {
        category: RotationState(index=int(data.get(key, 0) or 0))
        for category, key in _LEGACY_INDEX_KEYS.items()
    }
    return UserRotation(**states)


class ProfileStore:
    """File-based ``get``/``put`` store for user profiles."""

    def __init__(self, profiles_dir: Path) -> None:
        self.profiles_dir = profiles_dir
        self.profiles_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, user_id: str) -> Path:
        digest = hashlib.sha1(user_id.encode("utf-8")).hexdigest()
        return self.profiles_dir / f"{digest}.json"

    def get(self, user_id: str) -> UserProfile | None:
        path = self.path_for(user_id)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ProfileStoreError(f"Failed to read profile {path.name}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ProfileStoreError(f"Profile {path.name} must contain a JSON object")
        try:
            return UserProfile.from_dict(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            raise ProfileStoreError(f"Malformed profile {path.name}: {exc}") from exc

    def put(self, profile: UserProfile) -> UserProfile:
        """Write ``profile`` through a temp file so a crash never leaves a partial document."""

        path = self.path_for(profile.user_id)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            tmp_path.write_text(
                json.dumps(profile.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise ProfileStoreError(f"Failed to write profile {path.name}: {exc}") from exc
        return profile

    def load_or_fresh(self, user_id: str) -> UserProfile:
        """Return the stored profile, or a zero-state one for unknown users."""

        profile = self.get(user_id)
        if profile is None:
            profile = UserProfile.fresh(user_id)
            profile.first_seen_at = now_utc()
        return profile


__all__ = ["ProfileStore", "UserProfile"]
