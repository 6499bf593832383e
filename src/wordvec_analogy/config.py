"""
Query configuration shared by the library and the CLI.
"""

from dataclasses import dataclass
from typing import Optional

from .analyzer import METRICS

# Options may also be set as WORDVEC_<OPTION> environment variables
ENV_PREFIX = "WORDVEC"

COMBINATION_MODES = ("expression", "sum", "average")
METRIC_NAMES = tuple(METRICS)


@dataclass
class QueryConfig:
    """How input words are combined and matched against the table."""
    mode: str = "expression"
    metric: str = "cosine"
    exclude_inputs: bool = True
    top: int = 1
    strict: bool = True
    expected_dim: Optional[int] = None

    def __post_init__(self):
        if self.mode not in COMBINATION_MODES:
            raise ValueError(f"Unknown combination mode: {self.mode}")
        if self.metric not in METRIC_NAMES:
            raise ValueError(f"Unknown metric: {self.metric}")
        if self.top < 1:
            raise ValueError(f"top must be at least 1, got {self.top}")
        if self.expected_dim is not None and self.expected_dim <= 0:
            raise ValueError(f"expected_dim must be positive, got {self.expected_dim}")
