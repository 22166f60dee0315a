"""Deterministic receipt points scoring."""

from receipt_points.scoring.engine import ScoringError, points_breakdown, score

__all__ = ["ScoringError", "points_breakdown", "score"]
