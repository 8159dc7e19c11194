"""Serialization module: JSON-friendly encoding of results and snapshot decoding."""

from physio_engine.serialization.json_codec import (
    injury_from_dict,
    load_state_to_dict,
    modification_to_dict,
    planned_session_from_dict,
    readiness_input_from_dict,
    readiness_to_dict,
    snapshot_from_dict,
    thresholds_to_dict,
    to_json_string,
    validation_to_dict,
    zones_to_dict,
)

__all__ = [
    "injury_from_dict",
    "load_state_to_dict",
    "modification_to_dict",
    "planned_session_from_dict",
    "readiness_input_from_dict",
    "readiness_to_dict",
    "snapshot_from_dict",
    "thresholds_to_dict",
    "to_json_string",
    "validation_to_dict",
    "zones_to_dict",
]
