"""Evaluation module for batches of compatibility scores."""

from .metrics import (
    results_to_frame,
    compute_score_distribution_stats,
    check_symmetry,
    ScoreDistributionStats,
    SymmetryCheck,
    ScoringReport,
    create_scoring_report
)

__all__ = [
    "results_to_frame",
    "compute_score_distribution_stats",
    "check_symmetry",
    "ScoreDistributionStats",
    "SymmetryCheck",
    "ScoringReport",
    "create_scoring_report"
]
