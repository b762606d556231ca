"""
Cosine similarity between numeric vectors.

Intended for embedding-based comparison of profiles. Inputs that cannot
be compared (different dimensionality, zero vectors) score 0 instead of
raising, so a best-effort matching job never fails on a malformed vector.
"""

import logging
from typing import Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

Vector = Union[Sequence[float], np.ndarray]


def compute_vector_similarity(vector_a: Vector, vector_b: Vector) -> float:
    """
    Compute cosine similarity between two vectors.

    Formula: dot(a, b) / (||a|| * ||b||)

    No clamping is applied: vectors with negative components can produce
    negative similarities.

    Args:
        vector_a: First vector
        vector_b: Second vector

    Returns:
        Cosine similarity in [-1, 1]; 0.0 if the dimensions differ
        or either vector has zero norm
    """
    a = np.asarray(vector_a, dtype=float).ravel()
    b = np.asarray(vector_b, dtype=float).ravel()

    if a.shape != b.shape:
        logger.warning(f"Vector dimensions don't match: {a.size} vs {b.size}")
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def compute_batch_vector_similarity(matrix_a: np.ndarray, matrix_b: np.ndarray) -> np.ndarray:
    """
    Compute row-wise cosine similarity between two matrices.

    Row i of the result is the cosine similarity of matrix_a[i] and
    matrix_b[i]. Rows with zero norm score 0.

    Args:
        matrix_a: First matrix (N x D)
        matrix_b: Second matrix (N x D)

    Returns:
        Array of cosine similarities (N,)

    Raises:
        ValueError: If the matrices have a different number of rows
    """
    a = np.atleast_2d(np.asarray(matrix_a, dtype=float))
    b = np.atleast_2d(np.asarray(matrix_b, dtype=float))

    if a.shape[0] != b.shape[0]:
        raise ValueError(
            f"Matrices must have the same number of rows: {a.shape[0]} vs {b.shape[0]}"
        )

    if a.shape[1] != b.shape[1]:
        logger.warning(f"Vector dimensions don't match: {a.shape[1]} vs {b.shape[1]}")
        return np.zeros(a.shape[0])

    norm_a = np.linalg.norm(a, axis=1)
    norm_b = np.linalg.norm(b, axis=1)
    denominator = norm_a * norm_b

    # Row-wise dot product
    dot_products = np.sum(a * b, axis=1)

    similarity = np.zeros(a.shape[0])
    nonzero = denominator != 0
    similarity[nonzero] = dot_products[nonzero] / denominator[nonzero]

    return similarity
