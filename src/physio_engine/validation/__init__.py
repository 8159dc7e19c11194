"""Multi-system validation: priority-ordered rules over an athlete snapshot."""

from physio_engine.validation.registry import RuleRegistry
from physio_engine.validation.validator import MultiSystemValidator

__all__ = ["MultiSystemValidator", "RuleRegistry"]
