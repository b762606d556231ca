"""
Diagnostics for batches of compatibility scores.

There are no ground-truth compatibility labels, so these checks describe
how the scorer behaves rather than how accurate it is:
1. Score distribution per dimension and overall
2. Symmetry: score(A, B) must equal score(B, A)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import json

import numpy as np
import pandas as pd

from ..aggregation.dimension_aggregator import DimensionAggregator, ProfileInput
from ..profiles.schema import DIMENSIONS, CompatibilityResult

logger = logging.getLogger(__name__)

SCORE_COLUMNS = list(DIMENSIONS) + ["overall"]


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SymmetryCheck:
    """Results of the symmetry sanity check."""
    n_pairs: int
    n_violations: int
    max_difference: float
    is_symmetric: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_pairs": int(self.n_pairs),
            "n_violations": int(self.n_violations),
            "max_difference": float(self.max_difference),
            "is_symmetric": bool(self.is_symmetric)
        }


@dataclass
class ScoringReport:
    """
    Diagnostic report for a batch of scored pairs.

    Contains distribution statistics per score column and an optional
    symmetry check.
    """
    name: str
    n_results: int
    distribution_stats: Dict[str, ScoreDistributionStats]
    symmetry_check: Optional[SymmetryCheck] = None
    additional_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "n_results": self.n_results,
            "distribution_stats": {
                column: stats.to_dict() for column, stats in self.distribution_stats.items()
            },
            "additional_metrics": self.additional_metrics
        }
        if self.symmetry_check:
            result["symmetry_check"] = self.symmetry_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Scoring Report: {self.name} ({self.n_results} pairs)",
            "=" * 50,
            "",
            f"{'score':<15} {'mean':>8} {'std':>8} {'min':>8} {'max':>8}",
        ]

        for column, stats in self.distribution_stats.items():
            lines.append(
                f"{column:<15} {stats.mean:>8.4f} {stats.std:>8.4f} "
                f"{stats.min:>8.4f} {stats.max:>8.4f}"
            )

        if self.symmetry_check:
            lines.extend([
                "",
                "Symmetry Check:",
                f"  Pairs checked: {self.symmetry_check.n_pairs}",
                f"  Violations: {self.symmetry_check.n_violations}",
                f"  Max difference: {self.symmetry_check.max_difference:.2e}",
                f"  Is symmetric: {self.symmetry_check.is_symmetric}",
            ])

        return "\n".join(lines)


def results_to_frame(results: Sequence[CompatibilityResult]) -> pd.DataFrame:
    """
    Tabulate compatibility results.

    Args:
        results: Scored pairs

    Returns:
        DataFrame with one row per result and one column per dimension
        plus "overall"
    """
    records = [
        {**result.dimension_scores(), "overall": result.overall}
        for result in results
    ]
    return pd.DataFrame.from_records(records, columns=SCORE_COLUMNS)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics of an empty score array")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def check_symmetry(
    aggregator: DimensionAggregator,
    pairs: Sequence[Tuple[ProfileInput, ProfileInput]],
    tolerance: float = 1e-9
) -> SymmetryCheck:
    """
    Check that score(A, B) == score(B, A) for every pair.

    Every score column is compared; a pair violates symmetry if any
    column differs by more than the tolerance.

    Args:
        aggregator: Scorer to check
        pairs: (profile_a, profile_b) pairs
        tolerance: Maximum allowed absolute difference

    Returns:
        SymmetryCheck instance
    """
    n_violations = 0
    max_difference = 0.0

    for profile_a, profile_b in pairs:
        forward = aggregator.score(profile_a, profile_b)
        backward = aggregator.score(profile_b, profile_a)

        diffs = [
            abs(getattr(forward, column) - getattr(backward, column))
            for column in SCORE_COLUMNS
        ]
        pair_max = max(diffs)
        max_difference = max(max_difference, pair_max)
        if pair_max > tolerance:
            n_violations += 1

    if n_violations:
        logger.warning(f"Symmetry violated for {n_violations}/{len(pairs)} pairs")

    return SymmetryCheck(
        n_pairs=len(pairs),
        n_violations=n_violations,
        max_difference=max_difference,
        is_symmetric=n_violations == 0
    )


def create_scoring_report(
    name: str,
    results: Sequence[CompatibilityResult],
    aggregator: Optional[DimensionAggregator] = None,
    pairs: Optional[Sequence[Tuple[ProfileInput, ProfileInput]]] = None,
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> ScoringReport:
    """
    Create a complete scoring report.

    Args:
        name: Name of the scored batch
        results: Scored pairs
        aggregator: Scorer used (for the symmetry check)
        pairs: Profile pairs behind the results (for the symmetry check)
        quantiles: Quantiles to compute

    Returns:
        ScoringReport instance

    Raises:
        ValueError: If results is empty
    """
    if not results:
        raise ValueError("Cannot create a scoring report without results")

    frame = results_to_frame(results)
    dist_stats = {
        column: compute_score_distribution_stats(frame[column].to_numpy(), quantiles)
        for column in SCORE_COLUMNS
    }

    symmetry = None
    if aggregator is not None and pairs:
        symmetry = check_symmetry(aggregator, pairs)

    return ScoringReport(
        name=name,
        n_results=len(results),
        distribution_stats=dist_stats,
        symmetry_check=symmetry
    )
