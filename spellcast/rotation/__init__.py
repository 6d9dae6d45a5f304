"""Per-user content rotation package."""
from .models import PoolSizes, RotationState, Selection, UserRotation
from .rotation_engine import RotationEngine

__all__ = ["PoolSizes", "RotationEngine", "RotationState", "Selection", "UserRotation"]
