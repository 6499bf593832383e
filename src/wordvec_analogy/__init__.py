"""
wordvec-analogy: Word vector arithmetic and nearest-neighbor lookup.

Load a word embedding table from a text file, combine the vectors of a
few words, and find the vocabulary word closest to the result.
"""

__version__ = "0.1.0"

from .loader import load_table, EmbeddingTable
from .algebra import (
    add,
    subtract,
    sum_vectors,
    average_vectors,
    cosine_similarity,
    euclidean_distance,
)
from .analyzer import find_nearest, rank_neighbors, NeighborResult, METRICS
from .expression import combine, evaluate_expression, parse_expression, Combination
from .config import QueryConfig
from .errors import (
    AnalogyError,
    TableIOError,
    ParseError,
    DimensionMismatch,
    EmptyInput,
    UnknownWord,
)

__all__ = [
    "load_table",
    "EmbeddingTable",
    "add",
    "subtract",
    "sum_vectors",
    "average_vectors",
    "cosine_similarity",
    "euclidean_distance",
    "find_nearest",
    "rank_neighbors",
    "NeighborResult",
    "METRICS",
    "combine",
    "evaluate_expression",
    "parse_expression",
    "Combination",
    "QueryConfig",
    "AnalogyError",
    "TableIOError",
    "ParseError",
    "DimensionMismatch",
    "EmptyInput",
    "UnknownWord",
]
