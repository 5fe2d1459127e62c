"""
Module: builder.selection.config

Purpose:
    Configuration dataclass for the selection algorithm.
    Immutable configuration with validation on construction.

Key Classes:
    - SelectionConfig: Curriculum-priority ratio and optional seed

Dependencies:
    - dataclasses (std)

Used By:
    - builder.selection.selector: Selector
    - builder.assembler: PaperAssembler
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional


DEFAULT_PRIORITY_RATIO = 0.5


@dataclass(frozen=True)
class SelectionConfig:
    """
    Configuration for the selection algorithm (immutable).

    Attributes:
        priority_ratio: Fraction of each target drawn from "Exercise"
            questions before "Additional" ones (0.0 - 1.0)
        seed: Random seed for reproducible selection (None = unseeded)

    Invariants:
        - 0.0 <= priority_ratio <= 1.0

    Example:
        >>> config = SelectionConfig(priority_ratio=0.5)
        >>> config.exercise_target(7), config.additional_target(7)
        (4, 3)
    """

    priority_ratio: float = DEFAULT_PRIORITY_RATIO
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not (0.0 <= self.priority_ratio <= 1.0):
            raise ValueError(
                f"priority_ratio must be between 0 and 1: {self.priority_ratio}"
            )

    def exercise_target(self, target: int) -> int:
        """Exercise share of a target, rounded up."""
        # Epsilon keeps 10 * 0.3 from rounding up to 4
        return math.ceil(max(0, target) * self.priority_ratio - 1e-9)

    def additional_target(self, target: int) -> int:
        """Remainder of a target after the Exercise share."""
        return max(0, target) - self.exercise_target(target)

    def make_rng(self) -> random.Random:
        """Fresh generator seeded from this config."""
        return random.Random(self.seed)
