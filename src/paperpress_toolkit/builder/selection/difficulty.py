"""
Module: builder.selection.difficulty

Purpose:
    Difficulty filter applied to a pool before selection. "mixed" passes
    the pool through unchanged.

Key Classes:
    - DifficultyFilter: easy / medium / hard / mixed

Key Functions:
    - filter_by_difficulty(): Reduce a pool to one difficulty level

Used By:
    - builder.assembler: PaperAssembler
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from paperpress_toolkit.core.models import Difficulty, QuestionRecord


class DifficultyFilter(str, Enum):
    """Requested paper difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value: "DifficultyFilter | Difficulty | str") -> "DifficultyFilter":
        """
        Parse a difficulty request; "all" is accepted as an alias of "mixed".

        Raises:
            ValueError: If value is not a known difficulty
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Difficulty):
            return cls(value.value)
        text = str(value).strip().lower()
        if text == "all":
            return cls.MIXED
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None

    @property
    def is_mixed(self) -> bool:
        return self is DifficultyFilter.MIXED

    def matches(self, question: QuestionRecord) -> bool:
        return self.is_mixed or question.difficulty.value == self.value


def filter_by_difficulty(
    pool: Iterable[QuestionRecord],
    difficulty: DifficultyFilter | Difficulty | str,
) -> List[QuestionRecord]:
    """
    Reduce a pool to one difficulty level.

    Returns a new list in pool order; "mixed" returns a copy of the pool.
    """
    level = DifficultyFilter.parse(difficulty)
    if level.is_mixed:
        return list(pool)
    return [q for q in pool if level.matches(q)]
