"""
Vector arithmetic and similarity functions.
"""

from typing import Sequence

import numpy as np

from .errors import DimensionMismatch, EmptyInput


def _check_shapes(a: np.ndarray, b: np.ndarray) -> None:
    if np.shape(a) != np.shape(b):
        raise DimensionMismatch(f"Shape mismatch: {np.shape(a)} vs {np.shape(b)}")


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Elementwise sum of two vectors."""
    _check_shapes(a, b)
    return np.add(a, b)


def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Elementwise difference of two vectors."""
    _check_shapes(a, b)
    return np.subtract(a, b)


def _stack(vectors: Sequence[np.ndarray]) -> np.ndarray:
    if len(vectors) == 0:
        raise EmptyInput("Cannot combine an empty sequence of vectors")

    first = np.shape(vectors[0])
    for vec in vectors[1:]:
        if np.shape(vec) != first:
            raise DimensionMismatch(f"Shape mismatch: {first} vs {np.shape(vec)}")

    return np.stack(vectors)


def sum_vectors(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """Elementwise sum of a non-empty sequence of vectors."""
    return _stack(vectors).sum(axis=0)


def average_vectors(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """Elementwise mean of a non-empty sequence of vectors."""
    return _stack(vectors).mean(axis=0)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Compute cosine similarity between two vectors.

    Returns 0.0 when either vector has zero norm.
    """
    _check_shapes(a, b)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Compute the L2 distance between two vectors."""
    _check_shapes(a, b)
    return float(np.linalg.norm(np.subtract(a, b)))


def cosine_similarities(query: np.ndarray, vectors: np.ndarray) -> np.ndarray:
    """Compute cosine similarities between query and all vectors."""
    query_norm = np.linalg.norm(query)
    norms = np.linalg.norm(vectors, axis=1)

    # Zero rows or a zero query score 0.0
    denom = norms * query_norm
    dots = vectors @ query
    return np.divide(dots, denom, out=np.zeros(dots.shape, dtype=np.float64), where=denom > 0)


def euclidean_distances(query: np.ndarray, vectors: np.ndarray) -> np.ndarray:
    """Compute L2 distances between query and all vectors."""
    return np.linalg.norm(vectors - query, axis=1)
