"""
Compatibility Scoring Engine

This package scores how compatible two dating profiles are across five
profile dimensions (values, personality, interests, goals, communication).

Key Design Decisions:
- Attribute values are an explicit tagged union (TagSet, Scalar, Category, Group)
- Each dimension is scored by a recursive structural similarity in [0, 1]
- Dimension scores are combined with a configurable weight table and
  re-normalized by the total weight
- Scoring is pure and stateless: degenerate inputs produce a defined score,
  never an exception
"""

__version__ = "1.0.0"

from .aggregation import DimensionAggregator, DimensionWeights, compute_compatibility
from .profiles import CompatibilityResult, ProfileAttributeSet
from .similarity import compute_vector_similarity, structural_similarity

__all__ = [
    "DimensionAggregator",
    "DimensionWeights",
    "compute_compatibility",
    "CompatibilityResult",
    "ProfileAttributeSet",
    "compute_vector_similarity",
    "structural_similarity",
]
