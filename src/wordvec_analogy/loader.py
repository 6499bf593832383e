"""
Load word embedding tables from whitespace-delimited text files.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import numpy as np

from .errors import ParseError, TableIOError, UnknownWord

logger = logging.getLogger(__name__)

DTYPE = np.float32


@dataclass
class EmbeddingTable:
    """A vocabulary of words and their vectors, one row per word."""
    words: list[str]
    vectors: np.ndarray  # Shape: (n_words, dimensions)
    metadata: dict = field(default_factory=dict)
    _index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self):
        if self.vectors.ndim != 2 or self.vectors.shape[0] != len(self.words):
            raise ValueError(
                f"Expected {len(self.words)} rows of vectors, got shape {self.vectors.shape}"
            )
        self._index = {word: i for i, word in enumerate(self.words)}
        if len(self._index) != len(self.words):
            raise ValueError("Duplicate words in embedding table")
        self.vectors.setflags(write=False)

    @classmethod
    def from_dict(cls, entries: dict[str, list[float]], dimensions: int = 0) -> "EmbeddingTable":
        """Build a table from a word -> vector mapping, keeping its order."""
        words = list(entries)
        if words:
            vectors = np.array([entries[w] for w in words], dtype=DTYPE)
        else:
            vectors = np.zeros((0, dimensions), dtype=DTYPE)
        return cls(words=words, vectors=vectors, metadata={"format": "dict"})

    @property
    def n_vectors(self) -> int:
        """Number of words in the table."""
        return self.vectors.shape[0]

    @property
    def dimensions(self) -> int:
        """Dimensionality of vectors."""
        return self.vectors.shape[1]

    def __len__(self) -> int:
        return self.n_vectors

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def index_of(self, word: str) -> int:
        """Row index of a word."""
        try:
            return self._index[word]
        except KeyError:
            raise UnknownWord(word) from None

    def get_vector(self, word: str) -> np.ndarray:
        """Get the vector for a word, raising UnknownWord if absent."""
        return self.vectors[self.index_of(word)]

    def get(self, word: str) -> Optional[np.ndarray]:
        """Get the vector for a word, or None if absent."""
        index = self._index.get(word)
        if index is None:
            return None
        return self.vectors[index]

    def zeros(self) -> np.ndarray:
        """A zero vector of the table's dimension."""
        return np.zeros(self.dimensions, dtype=DTYPE)


def load_table(
    source: str | Path,
    expected_dim: Optional[int] = None,
    strict: bool = True,
) -> EmbeddingTable:
    """
    Load an embedding table from a text file.

    Each non-blank line holds a word followed by its vector components,
    separated by whitespace. The dimension is ``expected_dim`` when given.
    Otherwise strict loads take the component count of the first row, and
    lenient loads take the most common count in the file.

    Args:
        source: Path to the table file
        expected_dim: Required vector length, if known
        strict: If True, a malformed row aborts the load; otherwise the
            row is skipped with a warning

    Returns:
        EmbeddingTable with the loaded vectors

    Raises:
        TableIOError: The file is missing or unreadable
        ParseError: A row is malformed and ``strict`` is set
    """
    if expected_dim is not None and expected_dim <= 0:
        raise ValueError(f"expected_dim must be positive, got {expected_dim}")

    path = Path(source)

    if not path.exists():
        raise TableIOError(f"File not found: {path}")
    if path.is_dir():
        raise TableIOError(f"Not a file: {path}")

    dim = expected_dim
    words: list[str] = []
    rows: list[np.ndarray] = []
    index: dict[str, int] = {}
    skipped = 0

    try:
        with open(path, encoding="utf-8") as f:
            lines = [(n, line.split()) for n, line in enumerate(f, 1)]
    except UnicodeDecodeError as e:
        raise TableIOError(f"Could not decode {path} as UTF-8: {e}") from e
    except OSError as e:
        raise TableIOError(f"Could not read {path}: {e}") from e

    lines = [(n, parts) for n, parts in lines if parts]

    if dim is None and not strict:
        dim = _dominant_dimension(lines)

    for line_number, parts in lines:
        try:
            vector = _parse_row(parts, dim, line_number, path)
        except ParseError as e:
            if strict:
                raise
            logger.warning("Skipping row %d of %s: %s", line_number, path, e.reason)
            skipped += 1
            continue

        if dim is None:
            dim = len(vector)

        word = parts[0]
        if word in index:
            # Last occurrence wins, first position is kept
            logger.debug("Duplicate word %r on line %d replaces earlier row", word, line_number)
            rows[index[word]] = vector
        else:
            index[word] = len(words)
            words.append(word)
            rows.append(vector)

    if rows:
        vectors = np.stack(rows)
    else:
        vectors = np.zeros((0, dim or 0), dtype=DTYPE)

    logger.info("Loaded %d words with %d dimensions from %s", len(words), vectors.shape[1], path)

    return EmbeddingTable(
        words=words,
        vectors=vectors,
        metadata={
            "source": str(path),
            "format": "text",
            "strict": strict,
            "skipped_rows": skipped,
        },
    )


def _dominant_dimension(lines: list[tuple[int, list[str]]]) -> Optional[int]:
    """Most common component count among rows that have components."""
    counts = Counter(len(parts) - 1 for _, parts in lines if len(parts) > 1)
    if not counts:
        return None
    # Ties go to the count seen first
    return counts.most_common(1)[0][0]


def _parse_row(parts: list[str], dim: Optional[int], line_number: int, path: Path) -> np.ndarray:
    fields = parts[1:]
    if not fields:
        raise ParseError(f"no vector components for {parts[0]!r}", line_number, path)

    if dim is not None and len(fields) != dim:
        raise ParseError(
            f"expected {dim} components for {parts[0]!r}, found {len(fields)}",
            line_number,
            path,
        )

    try:
        values = [float(x) for x in fields]
    except ValueError as e:
        raise ParseError(f"non-numeric component for {parts[0]!r}: {e}", line_number, path) from None

    with np.errstate(over="ignore"):
        vector = np.array(values, dtype=DTYPE)
    if not np.isfinite(vector).all():
        raise ParseError(f"non-finite component for {parts[0]!r}", line_number, path)
    return vector
