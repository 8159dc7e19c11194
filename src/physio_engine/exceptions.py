"""Exception and warning hierarchy for the physio engine.

Structural and numerical problems raise. Quality concerns never raise:
they are attached to results as notes whose kind names one of the warning
classes below, so callers can route them through coach approval.
"""

from __future__ import annotations


class PhysioEngineError(Exception):
    """Base exception for all physio_engine errors."""


class InsufficientDataError(PhysioEngineError):
    """Too few samples for the requested fit or estimate."""

    def __init__(self, message: str, required: int | None = None, received: int | None = None) -> None:
        super().__init__(message)
        self.required = required
        self.received = received


class InvalidThresholdOrderError(PhysioEngineError):
    """LT1 is not strictly below LT2 (or max HR is not above LT2 HR)."""


class ModalityExcludedError(PhysioEngineError):
    """A cross-training modality is excluded by the athlete's injury constraints."""

    def __init__(self, message: str, modality: object = None) -> None:
        super().__init__(message)
        self.modality = modality


class SnapshotFormatError(PhysioEngineError):
    """Serialized input could not be decoded into engine models."""


class LowConfidenceWarning(UserWarning):
    """Result is usable but should be gated behind human approval."""


class DataQualityWarning(UserWarning):
    """Input data has quality problems; computation still proceeded."""
