"""
Combine the vectors of input words into a single query vector.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Container, Iterable, Optional, Sequence

import numpy as np

from .algebra import add, average_vectors, subtract, sum_vectors
from .errors import EmptyInput, UnknownWord
from .loader import EmbeddingTable

logger = logging.getLogger(__name__)

OPERATORS = ("+", "-")

_OPERATOR_SPLIT = re.compile(r"([+-])")


@dataclass
class Combination:
    """A combined query vector and the words that produced it."""
    vector: np.ndarray
    mode: str
    words: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)


def parse_expression(
    tokens: str | Iterable[str],
    vocabulary: Optional[Container[str]] = None,
) -> list[str]:
    """
    Split an expression into word and operator tokens.

    ``"king - man + woman"`` and ``"king-man+woman"`` both give
    ``["king", "-", "man", "+", "woman"]``. A piece found in ``vocabulary``
    is kept whole, so hyphenated words survive.
    """
    if isinstance(tokens, str):
        tokens = tokens.split()

    result = []
    for piece in tokens:
        if piece in OPERATORS or (vocabulary is not None and piece in vocabulary):
            result.append(piece)
            continue
        result.extend(p for p in _OPERATOR_SPLIT.split(piece) if p)
    return result


def _lookup(table: EmbeddingTable, word: str, unknown: list[str]) -> Optional[np.ndarray]:
    try:
        return table.get_vector(word)
    except UnknownWord as e:
        logger.warning("%s, skipping", e)
        unknown.append(word)
        return None


def evaluate_expression(tokens: Sequence[str], table: EmbeddingTable) -> Combination:
    """
    Evaluate a signed sequence of words into one vector.

    Operators set the sign applied to the next word; a word with no
    preceding operator is added. Repeated operators overwrite each other.
    Words missing from the table are skipped with a warning.

    Raises:
        EmptyInput: No word in the expression is in the table
    """
    result = table.zeros()
    sign = "+"
    words: list[str] = []
    unknown: list[str] = []

    for token in tokens:
        if token in OPERATORS:
            sign = token
            continue

        vector = _lookup(table, token, unknown)
        if vector is None:
            continue

        result = add(result, vector) if sign == "+" else subtract(result, vector)
        words.append(token)

    if not words:
        raise EmptyInput("No valid input words")

    return Combination(vector=result, mode="expression", words=words, unknown=unknown)


def combine(tokens: Sequence[str], table: EmbeddingTable, mode: str = "expression") -> Combination:
    """
    Combine input words using the given mode.

    Args:
        tokens: Words, and for 'expression' mode '+'/'-' operators
        table: The embedding table
        mode: 'expression', 'sum' or 'average'

    Returns:
        Combination with the query vector

    Raises:
        EmptyInput: None of the words are in the table
    """
    if mode == "expression":
        return evaluate_expression(tokens, table)

    if mode == "sum":
        aggregate = sum_vectors
    elif mode == "average":
        aggregate = average_vectors
    else:
        raise ValueError(f"Unknown combination mode: {mode}")

    vectors = []
    words: list[str] = []
    unknown: list[str] = []

    for token in tokens:
        if token in OPERATORS:
            logger.warning("Operator %r has no effect in %s mode", token, mode)
            continue

        vector = _lookup(table, token, unknown)
        if vector is not None:
            vectors.append(vector)
            words.append(token)

    try:
        result = aggregate(vectors)
    except EmptyInput:
        raise EmptyInput("No valid input words") from None

    return Combination(vector=result, mode=mode, words=words, unknown=unknown)
