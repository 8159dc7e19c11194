"""Session modification and cross-training equivalency."""

from physio_engine.modification.cross_training import (
    allowed_modalities,
    equivalent_volume,
    recommend_substitute,
)
from physio_engine.modification.workout_modifier import modify_session

__all__ = [
    "allowed_modalities",
    "equivalent_volume",
    "modify_session",
    "recommend_substitute",
]
