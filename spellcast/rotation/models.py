"""Value types describing per-user content rotations.

Each rotation category (sound, interjection, after-effect) is a
:class:`RotationState`: a shuffled permutation of pool indices plus a cursor
pointing at the next item to serve. :class:`UserRotation` bundles the three
categories for one user and is what the session layer persists inside the
user profile. All types are immutable; the engine returns new values instead
of mutating the ones it receives.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from spellcast.core.enums import Category


@dataclass(frozen=True, slots=True)
class RotationState:
    """Shuffled order and cursor for a single content category.

    ``permutation`` is valid only while its length equals the current pool
    size. Any other length marks the state as stale and the engine regenerates
    it on the next advance.
    """

    permutation: Tuple[int, ...] = ()
    index: int = 0

    def is_stale(self, pool_size: int) -> bool:
        return len(self.permutation) != pool_size

    def to_dict(self) -> Dict[str, Any]:
        return {"permutation": list(self.permutation), "index": self.index}

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "RotationState":
        if not payload:
            return cls()
        raw_permutation = payload.get("permutation") or ()
        return cls(
            permutation=tuple(int(item) for item in raw_permutation),
            index=int(payload.get("index", 0) or 0),
        )


@dataclass(frozen=True, slots=True)
class PoolSizes:
    """Sizes of the three content pools for the active capability tier."""

    sound: int
    interjection: int
    after_effect: int

    def __post_init__(self) -> None:
        for category in Category:
            if self.for_category(category) < 0:
                raise ValueError(f"Pool size for {category.value} must be non-negative")

    def for_category(self, category: Category) -> int:
        return getattr(self, category.value)


@dataclass(frozen=True, slots=True)
class Selection:
    """Content ids chosen for one turn.

    ``None`` means the category has no content for the current tier and the
    renderer should leave it out of the response.
    """

    sound: Optional[int]
    interjection: Optional[int]
    after_effect: Optional[int]


@dataclass(frozen=True, slots=True)
class UserRotation:
    """Rotation progress of one user across all three categories."""

    sound: RotationState = field(default_factory=RotationState)
    interjection: RotationState = field(default_factory=RotationState)
    after_effect: RotationState = field(default_factory=RotationState)

    def for_category(self, category: Category) -> RotationState:
        return getattr(self, category.value)

    def with_category(self, category: Category, state: RotationState) -> "UserRotation":
        return replace(self, **{category.value: state})

    def to_dict(self) -> Dict[str, Any]:
        return {category.value: self.for_category(category).to_dict() for category in Category}

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "UserRotation":
        payload = payload or {}
        return cls(**{category.value: RotationState.from_dict(payload.get(category.value)) for category in Category})


__all__ = ["PoolSizes", "RotationState", "Selection", "UserRotation"]
