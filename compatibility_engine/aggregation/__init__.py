"""Dimension aggregation module for overall compatibility scores."""

from .dimension_aggregator import (
    DEFAULT_DIMENSION_WEIGHTS,
    DimensionWeights,
    DimensionAggregator,
    compute_compatibility,
    create_aggregator_from_config,
)

__all__ = [
    "DEFAULT_DIMENSION_WEIGHTS",
    "DimensionWeights",
    "DimensionAggregator",
    "compute_compatibility",
    "create_aggregator_from_config",
]
