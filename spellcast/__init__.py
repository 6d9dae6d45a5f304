"""Top-level package for the spell-casting voice skill.

Subpackages mirror the runtime layers: ``config`` (YAML + pydantic),
``core`` (enums, errors, shared types), ``rotation`` (content rotation engine),
``runtime`` (per-user profile persistence), ``skill`` (intent handling and
speech output) and ``telemetry`` (logging and analytics).
"""

__version__ = "1.0.0"

__all__: list[str] = ["__version__"]
