"""Error hierarchy shared by the skill subsystems.

Only configuration problems are fatal at startup. Everything that can happen
during a turn (stale rotation state, empty pools, missing profiles) is absorbed
locally, and storage/telemetry errors are raised to the session layer which
logs them without failing the response.
"""
from __future__ import annotations


class SpellcastError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(SpellcastError):
    """Raised when configuration files are missing or inconsistent."""


class ProfileStoreError(SpellcastError):
    """Raised when a user profile cannot be read from or written to storage."""


class TelemetryError(SpellcastError):
    """Raised for analytics/logging persistence issues."""
