"""
Structural similarity between attribute values.

Scores two attribute values in [0, 1] by dispatching on their kind:

    TagSet   vs TagSet   -> Jaccard similarity |A & B| / |A | B|
    Scalar   vs Scalar   -> ratio similarity min(a, b) / max(a, b)
    Category vs Category -> 1.0 on exact match, else 0.0
    Group    vs Group    -> mean similarity over the keys both groups share
    anything else        -> 0.0

Edge cases:
- An empty tag set has no overlap with anything, including another empty set
- Two zero scalars are identical and score 1.0
- Groups with no shared keys score 0.0; keys present on one side only are ignored
- Nesting deeper than max_depth scores 0.0 for the over-deep sub-tree;
  max_depth itself is capped at MAX_DEPTH_LIMIT

All functions are pure and symmetric in their arguments.
"""

import logging
from typing import Optional

from ..profiles.schema import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    AttributeKind,
    AttributeValue,
    Category,
    Group,
    Scalar,
    TagSet,
)

logger = logging.getLogger(__name__)


def jaccard_similarity(a: TagSet, b: TagSet) -> float:
    """
    Jaccard similarity of two tag sets.

    Returns:
        |intersection| / |union|, or 0.0 if either set is empty
    """
    if not a.tags or not b.tags:
        return 0.0
    return len(a.tags & b.tags) / len(a.tags | b.tags)


def ratio_similarity(a: Scalar, b: Scalar) -> float:
    """
    Bounded ratio similarity of two non-negative scalars.

    Returns:
        min / max; 1.0 if both are zero, 0.0 if exactly one is zero
    """
    high = max(a.value, b.value)
    if high == 0:
        return 1.0
    return min(a.value, b.value) / high


def category_similarity(a: Category, b: Category) -> float:
    """Exact, case-sensitive label match."""
    return 1.0 if a.label == b.label else 0.0


def group_similarity(a: Group, b: Group, max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 0) -> float:
    """
    Mean structural similarity over the keys shared by two groups.

    Args:
        a: First group
        b: Second group
        max_depth: Maximum nesting depth that is still scored

    Returns:
        Mean of the recursive scores, or 0.0 if no key is shared
    """
    if _depth >= max_depth:
        logger.debug(f"Group nesting exceeds max_depth={max_depth}, scoring 0")
        return 0.0

    # Sorted so that summation order is the same for (a, b) and (b, a)
    common_keys = sorted(a.keys() & b.keys())
    if not common_keys:
        return 0.0

    total = sum(
        _dispatch(a[key], b[key], max_depth, _depth + 1)
        for key in common_keys
    )
    return total / len(common_keys)


def _dispatch(
    a: Optional[AttributeValue],
    b: Optional[AttributeValue],
    max_depth: int,
    depth: int
) -> float:
    kind_a = getattr(a, "kind", None)
    kind_b = getattr(b, "kind", None)

    if kind_a is None or kind_a != kind_b:
        return 0.0

    if kind_a == AttributeKind.TAG_SET:
        return jaccard_similarity(a, b)
    if kind_a == AttributeKind.SCALAR:
        return ratio_similarity(a, b)
    if kind_a == AttributeKind.CATEGORY:
        return category_similarity(a, b)
    if kind_a == AttributeKind.GROUP:
        return group_similarity(a, b, max_depth, depth)

    return 0.0


def structural_similarity(
    a: Optional[AttributeValue],
    b: Optional[AttributeValue],
    max_depth: int = DEFAULT_MAX_DEPTH
) -> float:
    """
    Compute similarity between two attribute values.

    Args:
        a: First attribute value (None for missing data)
        b: Second attribute value (None for missing data)
        max_depth: Maximum group nesting depth that is still scored

    Returns:
        Similarity in [0, 1]; 0.0 for missing, mismatched or
        unrecognized values
    """
    return _dispatch(a, b, min(max_depth, MAX_DEPTH_LIMIT), 0)
