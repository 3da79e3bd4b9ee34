"""
Verdict model for the Banker's Safety Checker.

Result of one safety analysis over a snapshot.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SafetyVerdict:
    """
    Outcome of the safety algorithm.

    Attributes:
        is_safe: True if every process could complete
        residual: Process indices that never completed, increasing order
        completion_order: Process indices in the order they were marked completed
        passes: Number of scan passes run, including the final no-progress pass
    """
    is_safe: bool
    residual: Tuple[int, ...] = ()
    completion_order: Tuple[int, ...] = ()
    passes: int = 0

    def __post_init__(self):
        """Keep is_safe and residual consistent."""
        if self.is_safe == bool(self.residual):
            raise ValueError(
                f"Inconsistent verdict: is_safe={self.is_safe}, residual={self.residual}"
            )

    @property
    def num_completed(self) -> int:
        """Number of processes the scan managed to complete."""
        return len(self.completion_order)
