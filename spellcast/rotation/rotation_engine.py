"""Content rotation engine.

``RotationEngine`` picks the next sound, interjection and after-effect for a
user. Every category walks a shuffled permutation of its pool so nothing
repeats inside one full pass. Reaching the end of the permutation wraps the
cursor back to the start and the same order is replayed; a new shuffle happens
only when the stored permutation length no longer matches the pool size (first
use, or the platform/content set changed).

Pool sizes arrive as plain integers, the engine never sees content payloads or
platform details.
"""
from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from spellcast.core.enums import Category
from spellcast.rotation.models import PoolSizes, RotationState, Selection, UserRotation

LOGGER = logging.getLogger(__name__)


def shuffled_permutation(pool_size: int, rng: random.Random) -> Tuple[int, ...]:
    """Return a uniformly random ordering of ``range(pool_size)``."""

    order = list(range(pool_size))
    rng.shuffle(order)
    return tuple(order)


def advance_category(
    state: RotationState,
    pool_size: int,
    rng: random.Random,
) -> Tuple[Optional[int], RotationState]:
    """Serve the next id of one category and return the moved state.

    An empty pool means the category is not offered: nothing is served and
    the stored state is kept as is for when the pool comes back.
    """

    if pool_size <= 0:
        return None, state

    permutation = state.permutation
    index = state.index
    if state.is_stale(pool_size):
        permutation = shuffled_permutation(pool_size, rng)
        index = 0
    elif not 0 <= index < pool_size:
        index %= pool_size

    selected = permutation[index]
    index += 1
    if index >= pool_size:
        index = 0
    return selected, RotationState(permutation=permutation, index=index)


def rewind_category(state: RotationState, pool_size: int) -> RotationState:
    """Step the cursor back so the next advance replays the last served id.

    Stale or empty states are returned untouched; ``advance_category`` will
    regenerate them anyway.
    """

    if pool_size <= 0 or state.is_stale(pool_size):
        return state
    index = (state.index - 1) % pool_size
    return RotationState(permutation=state.permutation, index=index)


class RotationEngine:
    """Select the next content triple for a user."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def advance(self, state: UserRotation, pool_sizes: PoolSizes) -> Tuple[Selection, UserRotation]:
        """Return the ids to render this turn and the state to keep."""

        chosen: dict[str, Optional[int]] = {}
        updated = state
        for category in Category:
            pool_size = pool_sizes.for_category(category)
            current = state.for_category(category)
            if pool_size > 0 and current.is_stale(pool_size):
                LOGGER.debug(
                    "Reshuffling rotation",
                    extra={
                        "category": category.value,
                        "pool_size": pool_size,
                        "stored_size": len(current.permutation),
                    },
                )
            selected, moved = advance_category(current, pool_size, self._rng)
            chosen[category.value] = selected
            updated = updated.with_category(category, moved)
        return Selection(**chosen), updated

    def rewind(self, state: UserRotation, category: Category, pool_sizes: PoolSizes) -> UserRotation:
        """Move one category back by a single item."""

        moved = rewind_category(state.for_category(category), pool_sizes.for_category(category))
        return state.with_category(category, moved)


__all__ = ["RotationEngine", "advance_category", "rewind_category", "shuffled_permutation"]
