"""Daily readiness scoring."""

from physio_engine.readiness.scorer import categorize, score_readiness, subjective_score

__all__ = ["categorize", "score_readiness", "subjective_score"]
