"""
Exception types raised by wordvec-analogy.
"""

from pathlib import Path
from typing import Optional


class AnalogyError(Exception):
    """Base class for all wordvec-analogy errors."""


class TableIOError(AnalogyError, OSError):
    """The embedding table file could not be opened or read."""


class ParseError(AnalogyError, ValueError):
    """A row of the embedding table is malformed."""

    def __init__(self, reason: str, line_number: int, path: Optional[Path] = None):
        self.reason = reason
        self.line_number = line_number
        self.path = path
        location = f"{path}:{line_number}" if path else f"line {line_number}"
        super().__init__(f"{location}: {reason}")


class DimensionMismatch(AnalogyError, ValueError):
    """Two vectors that must share a shape do not."""


class EmptyInput(AnalogyError, ValueError):
    """An aggregate was requested over no vectors."""


class UnknownWord(AnalogyError, KeyError):
    """A word is not present in the embedding table."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(word)

    def __str__(self) -> str:
        return f"'{self.word}' not in vocabulary"
