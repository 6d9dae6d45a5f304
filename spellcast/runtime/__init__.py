"""Runtime persistence helpers (per-user profiles)."""
from .profiles import ProfileStore, UserProfile

__all__ = ["ProfileStore", "UserProfile"]
