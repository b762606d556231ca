"""
Weighted aggregation of per-dimension compatibility scores.

Each profile dimension is scored with structural similarity and the
dimension scores are combined into one overall score.

Aggregation Formula:
    overall = sum(weight[d] * score[d]) / sum(weight[d])

Weights do not have to sum to 1: dividing by the total re-normalizes them.
A total weight of 0 yields an overall score of 0.

Reference weights:
    values: 0.25, personality: 0.20, interests: 0.15,
    goals: 0.25, communication: 0.15
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional, Union
import json

import numpy as np

from ..profiles.schema import (
    DEFAULT_MAX_DEPTH,
    DIMENSIONS,
    MAX_DEPTH_LIMIT,
    CompatibilityResult,
    ProfileAttributeSet,
)
from ..similarity.structural import structural_similarity

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION_WEIGHTS = {
    "values": 0.25,
    "personality": 0.20,
    "interests": 0.15,
    "goals": 0.25,
    "communication": 0.15,
}

ProfileInput = Union[ProfileAttributeSet, Mapping[str, Any]]


def is_valid_weight(weight: Any) -> bool:
    """Whether a weight is a finite, non-negative number that fits in a float."""
    if not isinstance(weight, (int, float)):
        return False
    try:
        return math.isfinite(weight) and weight >= 0
    except OverflowError:
        return False


@dataclass
class DimensionWeights:
    """
    Configuration for dimension aggregation.

    Attributes:
        weights: Non-negative weight per dimension; omitted dimensions weigh 0
        max_depth: Maximum group nesting depth scored by structural similarity
    """
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_DIMENSION_WEIGHTS))
    max_depth: int = DEFAULT_MAX_DEPTH

    def validate(self) -> None:
        """Validate configuration values."""
        for dim, weight in self.weights.items():
            if dim not in DIMENSIONS:
                raise ValueError(f"Unknown dimension: {dim}")
            if not is_valid_weight(weight):
                raise ValueError(f"Weight for {dim} must be a finite non-negative number, got {weight}")
        if not math.isfinite(self.total()):
            raise ValueError("Dimension weights must sum to a finite number")
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth}")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be at most {MAX_DEPTH_LIMIT}, got {self.max_depth}")

    def get(self, dimension: str) -> float:
        """Weight of a dimension (0 if omitted)."""
        return float(self.weights.get(dimension, 0.0))

    def total(self) -> float:
        """Sum of all weights."""
        return float(sum(self.get(dim) for dim in DIMENSIONS))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DimensionWeights":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DimensionWeights":
        """
        Create from main config dictionary.

        Empty (null) sections and keys fall back to the defaults.
        """
        scoring_config = config.get("scoring") or {}
        if not isinstance(scoring_config, Mapping):
            raise ValueError(f"scoring must be a mapping, got {type(scoring_config).__name__}")

        weights = scoring_config.get("weights")
        if weights is None:
            weights = DEFAULT_DIMENSION_WEIGHTS
        elif not isinstance(weights, Mapping):
            raise ValueError(f"scoring.weights must be a mapping, got {type(weights).__name__}")

        max_depth = scoring_config.get("max_depth")
        if max_depth is None:
            max_depth = DEFAULT_MAX_DEPTH

        return cls(weights=dict(weights), max_depth=max_depth)

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved dimension weights to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "DimensionWeights":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


class DimensionAggregator:
    """
    Compatibility scorer combining per-dimension similarities.

    Scores every profile dimension with structural similarity and combines
    the scores with the configured weights. Holds no mutable state, so one
    instance can be shared across threads.

    Attributes:
        config: DimensionWeights with aggregation parameters
    """

    def __init__(self, config: Optional[DimensionWeights] = None):
        """
        Initialize the aggregator.

        Args:
            config: DimensionWeights instance (reference weights if None)
        """
        self.config = config if config is not None else DimensionWeights()
        self.config.validate()
        self._weights = np.array([self.config.get(dim) for dim in DIMENSIONS])
        logger.debug(f"Initialized DimensionAggregator with weights={self.config.weights}")

    def score_dimensions(
        self,
        profile_a: ProfileAttributeSet,
        profile_b: ProfileAttributeSet
    ) -> Dict[str, float]:
        """
        Score each dimension independently.

        A dimension missing from either profile scores 0.

        Args:
            profile_a: Attribute set of Person A
            profile_b: Attribute set of Person B

        Returns:
            Dictionary mapping dimension name to similarity in [0, 1]
        """
        return {
            dim: structural_similarity(
                profile_a.get(dim), profile_b.get(dim), self.config.max_depth
            )
            for dim in DIMENSIONS
        }

    def score(self, profile_a: ProfileInput, profile_b: ProfileInput) -> CompatibilityResult:
        """
        Compute compatibility between two profiles.

        Args:
            profile_a: Attribute set (or raw profile data) of Person A
            profile_b: Attribute set (or raw profile data) of Person B

        Returns:
            CompatibilityResult with dimension scores and overall score
        """
        profile_a = _as_attribute_set(profile_a)
        profile_b = _as_attribute_set(profile_b)

        dimension_scores = self.score_dimensions(profile_a, profile_b)
        scores = np.array([dimension_scores[dim] for dim in DIMENSIONS])

        total_weight = self._weights.sum()
        if total_weight > 0:
            overall = float(np.dot(self._weights, scores) / total_weight)
            # Guard against floating point drift just outside [0, 1]
            overall = float(np.clip(overall, 0, 1))
        else:
            overall = 0.0

        return CompatibilityResult(overall=overall, **dimension_scores)

    def get_effective_weights(self) -> Dict[str, float]:
        """
        Get weights normalized to sum to 1.

        Returns:
            Dictionary mapping dimension to normalized weight (all 0 if
            the total weight is 0)
        """
        total_weight = self._weights.sum()
        if total_weight == 0:
            return {dim: 0.0 for dim in DIMENSIONS}
        return {
            dim: float(weight / total_weight)
            for dim, weight in zip(DIMENSIONS, self._weights)
        }


def _as_attribute_set(profile: ProfileInput) -> ProfileAttributeSet:
    if isinstance(profile, ProfileAttributeSet):
        return profile
    if isinstance(profile, Mapping):
        return ProfileAttributeSet.from_dict(profile)
    logger.debug(f"Unrecognized profile of type {type(profile).__name__}, treating as empty")
    return ProfileAttributeSet()


def compute_compatibility(
    profile_a: ProfileInput,
    profile_b: ProfileInput,
    weights: Optional[Union[DimensionWeights, Mapping[str, float]]] = None
) -> CompatibilityResult:
    """
    Compute compatibility between two profiles.

    Args:
        profile_a: Attribute set (or raw profile data) of Person A
        profile_b: Attribute set (or raw profile data) of Person B
        weights: Optional weight override, either a DimensionWeights or a
            mapping from dimension to weight

    Returns:
        CompatibilityResult with dimension scores and overall score
    """
    if weights is not None and not isinstance(weights, DimensionWeights):
        weights = DimensionWeights(weights=dict(weights))
    return DimensionAggregator(weights).score(profile_a, profile_b)


def create_aggregator_from_config(config: Dict[str, Any]) -> DimensionAggregator:
    """
    Factory function to create DimensionAggregator from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured DimensionAggregator instance
    """
    weights = DimensionWeights.from_config(config)
    return DimensionAggregator(weights)
