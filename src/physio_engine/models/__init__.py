"""Data models for the physio engine."""

from physio_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from physio_engine.models.enums import (
    Action,
    BodyRegion,
    ConfidenceTier,
    InjuryType,
    IntensityUnit,
    LoadConfidence,
    Modality,
    ModificationAction,
    MovementRestriction,
    NoteKind,
    RaceDistance,
    ReadinessCategory,
    RiskZone,
    SessionType,
    Severity,
    ThresholdMethod,
    ValidationTier,
    ZoneType,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.load import LoadSample, LoadState
from physio_engine.models.measurements import (
    FieldTestResult,
    IncrementalTest,
    RaceResult,
    StageSample,
)
from physio_engine.models.readiness import ReadinessDecision, ReadinessInput
from physio_engine.models.session import (
    CrossTrainingRecommendation,
    PlannedSession,
    SessionModification,
)
from physio_engine.models.snapshot import AthleteSnapshot, ProtocolState, ScheduledTest
from physio_engine.models.thresholds import EstimateNote, ThresholdEstimate, ThresholdPair
from physio_engine.models.validation import (
    ActionDecision,
    RuleFindings,
    ValidationBlocker,
    ValidationResult,
    ValidationWarning,
)

__all__ = [
    "Action",
    "ActionDecision",
    "AthleteSnapshot",
    "BodyRegion",
    "ConfidenceTier",
    "CrossTrainingRecommendation",
    "DecisionTrace",
    "EstimateNote",
    "FieldTestResult",
    "IncrementalTest",
    "InjuryConstraint",
    "InjuryType",
    "IntensityUnit",
    "LoadConfidence",
    "LoadSample",
    "LoadState",
    "Modality",
    "ModificationAction",
    "MovementRestriction",
    "NoteKind",
    "PlannedSession",
    "ProtocolState",
    "RaceDistance",
    "RaceResult",
    "ReadinessCategory",
    "ReadinessDecision",
    "ReadinessInput",
    "RiskZone",
    "RuleFindings",
    "RuleResult",
    "RuleStatus",
    "ScheduledTest",
    "SessionModification",
    "SessionType",
    "Severity",
    "StageSample",
    "ThresholdEstimate",
    "ThresholdMethod",
    "ThresholdPair",
    "ValidationBlocker",
    "ValidationResult",
    "ValidationTier",
    "ValidationWarning",
    "ZoneType",
]
