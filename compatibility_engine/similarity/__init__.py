"""Similarity functions for vectors and structured profile attributes."""

from .vector import compute_vector_similarity, compute_batch_vector_similarity
from .structural import (
    DEFAULT_MAX_DEPTH,
    structural_similarity,
    jaccard_similarity,
    ratio_similarity,
    category_similarity,
    group_similarity,
)

__all__ = [
    "compute_vector_similarity",
    "compute_batch_vector_similarity",
    "DEFAULT_MAX_DEPTH",
    "structural_similarity",
    "jaccard_similarity",
    "ratio_similarity",
    "category_similarity",
    "group_similarity",
]
