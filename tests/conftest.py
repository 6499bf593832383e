"""
Shared test fixtures.
"""

from pathlib import Path
from typing import Callable

import pytest

from wordvec_analogy.loader import EmbeddingTable, load_table


@pytest.fixture
def royal_table() -> EmbeddingTable:
    """The king/queen/man table."""
    return EmbeddingTable.from_dict({
        "king": [1.0, 0.0],
        "queen": [0.9, 0.1],
        "man": [0.1, 1.0],
    })


@pytest.fixture
def abc_table() -> EmbeddingTable:
    """Two unit axes and their diagonal."""
    return EmbeddingTable.from_dict({
        "a": [1.0, 0.0],
        "b": [0.0, 1.0],
        "c": [1.0, 1.0],
    })


@pytest.fixture
def write_table(tmp_path: Path) -> Callable[[str], Path]:
    """Write table text to a file and return its path."""
    def _write(text: str, name: str = "vectors.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def analogy_file(write_table) -> Path:
    """A small 3-dimensional table with an analogy built in."""
    return write_table(
        "king 0.9 0.8 0.1\n"
        "queen 0.9 0.1 0.8\n"
        "man 0.1 0.9 0.1\n"
        "woman 0.1 0.2 0.9\n"
        "apple -0.5 0.1 0.1\n"
    )


@pytest.fixture
def analogy_table(analogy_file) -> EmbeddingTable:
    return load_table(analogy_file)
