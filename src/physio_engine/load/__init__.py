"""Training load ledger and ACWR load model."""

from physio_engine.load.ledger import LoadLedger
from physio_engine.load.model import compute_load_state, daily_series, project_load_state

__all__ = ["LoadLedger", "compute_load_state", "daily_series", "project_load_state"]
