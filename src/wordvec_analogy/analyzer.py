"""
Nearest-neighbor search over an embedding table.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from .algebra import cosine_similarities, euclidean_distances
from .errors import DimensionMismatch
from .loader import EmbeddingTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metric:
    """A scoring function and the direction in which it improves."""
    name: str
    label: str
    maximize: bool
    score_all: Callable[[np.ndarray, np.ndarray], np.ndarray]

    def format_score(self, score: float) -> str:
        return f"{self.label}: {score:.4f}"


METRICS = {
    "cosine": Metric("cosine", "cosine similarity", True, cosine_similarities),
    "euclidean": Metric("euclidean", "euclidean distance", False, euclidean_distances),
}


def get_metric(metric: str | Metric) -> Metric:
    """Look up a metric by name."""
    if isinstance(metric, Metric):
        return metric
    try:
        return METRICS[metric]
    except KeyError:
        raise ValueError(f"Unknown metric: {metric}") from None


@dataclass
class NeighborResult:
    """A table entry matched by a search."""
    word: str
    score: float
    index: int
    metric: str

    def describe(self) -> str:
        return f"{self.word} {get_metric(self.metric).format_score(self.score)}"


def _candidates(table: EmbeddingTable, exclude: Iterable[str]) -> np.ndarray:
    """Boolean mask of rows that may be returned."""
    mask = np.ones(table.n_vectors, dtype=bool)
    for word in exclude:
        if word in table:
            mask[table.index_of(word)] = False
    return mask


def rank_neighbors(
    table: EmbeddingTable,
    query: np.ndarray,
    k: int = 10,
    exclude: Iterable[str] = (),
    metric: str | Metric = "cosine",
) -> list[NeighborResult]:
    """
    Find the k best-scoring table entries for a query vector.

    Args:
        table: The embedding table to search
        query: Query vector
        k: Number of neighbors to return
        exclude: Words that may not be returned
        metric: 'cosine' (higher is better) or 'euclidean' (lower is better)

    Returns:
        Up to k NeighborResult objects, best first. Ties keep table order.
    """
    metric = get_metric(metric)
    if k <= 0 or table.n_vectors == 0:
        return []

    query = np.asarray(query)
    if query.shape != (table.dimensions,):
        raise DimensionMismatch(
            f"Query has shape {query.shape}, table has {table.dimensions} dimensions"
        )

    candidates = np.flatnonzero(_candidates(table, exclude))
    if len(candidates) == 0:
        return []

    scores = np.asarray(metric.score_all(query, table.vectors), dtype=np.float64)

    keys = -scores[candidates] if metric.maximize else scores[candidates]
    # Stable sort keeps table order among equal scores
    order = candidates[np.argsort(keys, kind="stable")][:k]

    return [
        NeighborResult(
            word=table.words[idx],
            score=float(scores[idx]),
            index=int(idx),
            metric=metric.name,
        )
        for idx in order
    ]


def find_nearest(
    table: EmbeddingTable,
    query: np.ndarray,
    exclude: Iterable[str] = (),
    metric: str | Metric = "cosine",
) -> Optional[NeighborResult]:
    """
    Find the single table entry that best matches a query vector.

    Every entry not in ``exclude`` is scored. With cosine the highest
    similarity wins, with euclidean the smallest distance wins. On a tie
    the entry that comes first in the table wins.

    Returns:
        The best NeighborResult, or None if the table is empty or every
        entry is excluded.
    """
    exclude = set(exclude)
    results = rank_neighbors(table, query, k=1, exclude=exclude, metric=metric)
    if not results:
        logger.debug("No candidates left in %d words after excluding %d", table.n_vectors, len(exclude))
        return None
    return results[0]
