"""Enumerations and physiological constants for the physio engine.

All thresholds and constants cite their published research source where
one exists.
"""

from enum import IntEnum, auto


class ValidationTier(IntEnum):
    """Validator precedence tiers: lower value = higher precedence.

    Injury findings always outrank protocol, readiness and schedule findings.
    """

    INJURY = 0
    PROTOCOL = 1
    READINESS = 2
    SCHEDULE = 3


class Severity(IntEnum):
    """Severity tag on validator blockers and warnings."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class ConfidenceTier(IntEnum):
    """Threshold estimate confidence: higher value = more trustworthy."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4


class ThresholdMethod(IntEnum):
    """How a threshold estimate was produced."""

    DMAX = auto()
    FIELD_TEST = auto()
    RACE_RESULT = auto()


class IntensityUnit(IntEnum):
    """Unit of the intensity axis (speed or power)."""

    KMH = auto()
    WATTS = auto()


class NoteKind(IntEnum):
    """Kind of advisory note attached to an estimate."""

    LOW_CONFIDENCE = auto()
    DATA_QUALITY = auto()


class RiskZone(IntEnum):
    """ACWR injury-risk zone."""

    DETRAINING = auto()
    OPTIMAL = auto()
    CAUTION = auto()
    DANGER = auto()


class LoadConfidence(IntEnum):
    """Whether the load windows had enough history behind them."""

    NORMAL = auto()
    LOW_CONFIDENCE = auto()


class ReadinessCategory(IntEnum):
    """Readiness decision: higher value = more restrictive."""

    PROCEED = 1
    MINOR_MOD = 2
    MAJOR_MOD = 3
    REST = 4


class SessionType(IntEnum):
    """Individual workout session types ordered by intensity."""

    REST = auto()
    RECOVERY = auto()
    EASY = auto()
    LONG_RUN = auto()
    TEMPO = auto()
    THRESHOLD = auto()
    VO2MAX_INTERVALS = auto()
    MARATHON_PACE = auto()
    RACE_SIMULATION = auto()
    FIELD_TEST = auto()


class Modality(IntEnum):
    """Training modality of a session."""

    RUNNING = auto()
    DEEP_WATER_RUNNING = auto()
    ANTI_GRAVITY_TREADMILL = auto()
    SWIMMING = auto()
    ELLIPTICAL = auto()
    CYCLING = auto()
    ROWING = auto()


class ModificationAction(IntEnum):
    """What the workout modifier did to a planned session."""

    UNCHANGED = auto()
    SCALED = auto()
    REPLACED = auto()
    CONVERTED = auto()
    REST = auto()
    CANCELLED = auto()


class Action(IntEnum):
    """Actions the validator can allow or deny."""

    EASY_RUN = auto()
    LONG_RUN = auto()
    THRESHOLD_WORKOUT = auto()
    INTERVAL_WORKOUT = auto()
    FIELD_TEST = auto()
    START_PROTOCOL = auto()
    CONTINUE_PROTOCOL = auto()
    PROGRAM_PROGRESSION = auto()
    CROSS_TRAINING = auto()


class BodyRegion(IntEnum):
    """Injured body region."""

    FOOT = auto()
    ANKLE = auto()
    LOWER_LEG = auto()
    KNEE = auto()
    THIGH = auto()
    HIP = auto()
    LOWER_BACK = auto()
    UPPER_BODY = auto()


class InjuryType(IntEnum):
    """Common running injuries with known cross-training restrictions."""

    PLANTAR_FASCIITIS = auto()
    ACHILLES_TENDINOPATHY = auto()
    IT_BAND_SYNDROME = auto()
    PATELLOFEMORAL_SYNDROME = auto()
    SHIN_SPLINTS = auto()
    STRESS_FRACTURE = auto()
    HAMSTRING_STRAIN = auto()
    CALF_STRAIN = auto()
    HIP_FLEXOR_STRAIN = auto()
    OTHER = auto()


class MovementRestriction(IntEnum):
    """Movement restriction tags attached to an injury by the physio."""

    NO_IMPACT = auto()
    NO_KNEE_FLEXION = auto()
    NO_ANKLE_DORSIFLEXION = auto()
    NO_HIP_FLEXION = auto()
    NO_UPPER_BODY_LOAD = auto()


class RaceDistance(IntEnum):
    """Standard road race distances."""

    FIVE_K = auto()
    TEN_K = auto()
    HALF_MARATHON = auto()
    MARATHON = auto()


class ZoneType(IntEnum):
    """Five-zone intensity model anchored on LT1 and LT2."""

    ZONE_1 = 1
    ZONE_2 = 2
    ZONE_3 = 3
    ZONE_4 = 4
    ZONE_5 = 5


# ---------------------------------------------------------------------------
# Physiological constants with literature citations
# ---------------------------------------------------------------------------

# D-max threshold detection: Cheng et al. (1992), Int J Sports Med 13(7):518-522
MIN_STAGES_FOR_FIT = 4  # Cubic fit needs 4 coefficients
DMAX_GRID_POINTS = 1001  # Curve samples between first and last stage
DMAX_MIN_RELATIVE_DISTANCE = 0.05  # Below this the curve is effectively linear
R_SQUARED_VERY_HIGH = 0.95
R_SQUARED_HIGH = 0.85
LACTATE_DROP_TOLERANCE_MMOL = 0.2  # Stage-to-stage drop tolerated as noise

# Aerobic threshold: Kindermann et al. (1979), Eur J Appl Physiol 42(1):25-34
LT1_LACTATE_MMOL = 2.0

# LT1 from LT2 when only one threshold is measured: Seiler (2010), IJSPP 5(3)
LT1_FRACTION_OF_LT2 = 0.85

# Field test duration: Friel (2009), The Triathlete's Training Bible (30-min TT)
FIELD_TEST_MIN_DURATION_MIN = 20.0

# Race pace → LT2 pace coefficients (s/km multiplier): Daniels' Running Formula
RACE_LT2_PACE_FACTOR = {
    RaceDistance.FIVE_K: 1.08,
    RaceDistance.TEN_K: 1.02,
    RaceDistance.HALF_MARATHON: 0.98,
    RaceDistance.MARATHON: 0.94,
}

RACE_DISTANCE_KM = {
    RaceDistance.FIVE_K: 5.0,
    RaceDistance.TEN_K: 10.0,
    RaceDistance.HALF_MARATHON: 21.0975,
    RaceDistance.MARATHON: 42.195,
}

RACE_CONFIDENCE = {
    RaceDistance.FIVE_K: ConfidenceTier.HIGH,
    RaceDistance.TEN_K: ConfidenceTier.VERY_HIGH,
    RaceDistance.HALF_MARATHON: ConfidenceTier.HIGH,
    RaceDistance.MARATHON: ConfidenceTier.MEDIUM,
}

# Zone model anchored on LT1/LT2: Seiler & Kjerland (2006), Scand J Med Sci Sports
ZONE2_SPLIT_FRACTION = 0.85  # Z2/Z3 boundary: 85% of the way from LT1 to LT2
ZONE4_UPPER_LT2_MULTIPLIER = 1.06  # VO2max-approach band above LT2
ZONE5_INTENSITY_LT2_MULTIPLIER = 1.20  # Default Z5 ceiling when no max is known
ZONE1_PACE_CAP_MULTIPLIER = 1.5  # Very easy pace cap (s/km) for zone 1

# ACWR thresholds: Gabbett (2016), Br J Sports Med 50(5):273-280
ACWR_DANGER_THRESHOLD = 1.5
ACWR_CAUTION_HIGH = 1.3
ACWR_OPTIMAL_LOW = 0.8

# EWMA spans for ACWR calculation: Williams et al. (2017)
EWMA_ACUTE_SPAN = 7
EWMA_CHRONIC_SPAN = 28

# Banister TRIMP coefficients: Banister (1991)
TRIMP_COEFFICIENT_MALE = 0.64
TRIMP_EXPONENT_MALE = 1.92
TRIMP_COEFFICIENT_FEMALE = 0.86
TRIMP_EXPONENT_FEMALE = 1.67

# Foster monotony window: Foster (1998)
MONOTONY_WINDOW_DAYS = 7

# Readiness composite weights: McLean et al. (2010), IJSPP 5(3):367-383
READINESS_WEIGHTS = {
    "sleep": 0.20,
    "soreness": 0.15,
    "fatigue": 0.20,
    "stress": 0.15,
    "mood": 0.15,
    "motivation": 0.15,
}
READINESS_INVERTED_FIELDS = frozenset({"soreness", "fatigue", "stress"})
READINESS_PROCEED_MIN = 70.0
READINESS_MINOR_MOD_MIN = 50.0
READINESS_MAJOR_MOD_MIN = 30.0

# HRV / RHR overrides: Plews et al. (2013), Sports Med 43(9):773-781
HRV_SUPPRESSED_PCT = -20.0
HRV_REST_FLOOR_PCT = -40.0  # Hard floor, combined with RHR elevation
RHR_REST_FLOOR_BPM = 8.0

# Pain monitoring: Silbernagel et al. (2007), Am J Sports Med 35(6):897-906
PAIN_CROSS_TRAINING_ONLY = 3  # 3-5: cross-training only
PAIN_STOP = 5  # Above this: stop loading
PAIN_FIELD_TEST_MAX = 2
LOWER_LIMB_PAIN_RUN_FRACTION = 0.5

LOWER_LIMB_REGIONS = frozenset({
    BodyRegion.FOOT,
    BodyRegion.ANKLE,
    BodyRegion.LOWER_LEG,
    BodyRegion.KNEE,
    BodyRegion.THIGH,
    BodyRegion.HIP,
})

# Cross-training fitness retention (%): Eyestone et al. (1993); Tanaka (1994)
CROSS_TRAINING_RETENTION_PCT = {
    Modality.DEEP_WATER_RUNNING: 98.0,
    Modality.ANTI_GRAVITY_TREADMILL: 95.0,
    Modality.SWIMMING: 90.0,
    Modality.ELLIPTICAL: 88.0,
    Modality.CYCLING: 85.0,
    Modality.ROWING: 80.0,
}

# Readiness below which an active high-intensity protocol is questioned
PROTOCOL_MIN_READINESS_SCORE = 60.0
