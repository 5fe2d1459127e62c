"""
Module: selection

Purpose:
    Provides SelectionResult - the output of one Selector run for one
    question type. Wraps the chosen records with the requested target so
    callers can report shortfalls.

Key Functions:
    - SelectionResult.ids: Identifiers in selection order
    - SelectionResult.shortfall: How many fewer than requested

Dependencies:
    - dataclasses (std)
    - .questions.QuestionRecord

Used By:
    - builder.assembler
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from functools import cached_property

from .questions import QuestionRecord, QuestionType


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of selecting one question type (immutable).

    Attributes:
        question_type: Type every record in questions shares
        questions: Selected records in paper order
        requested: Target count requested for this type
        available: Filtered pool size the selection was drawn from

    Invariants:
        - No duplicate ids
        - len(questions) == min(requested, available)

    Example:
        >>> result = SelectionResult(QuestionType.MCQ, (q1, q2), requested=5, available=2)
        >>> result.shortfall
        3
    """

    question_type: QuestionType
    questions: tuple[QuestionRecord, ...]
    requested: int
    available: int

    def __post_init__(self) -> None:
        """Validate selection result on construction."""
        ids = [q.id for q in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate questions in selection result")

    @cached_property
    def ids(self) -> tuple[str, ...]:
        return tuple(q.id for q in self.questions)

    @property
    def count(self) -> int:
        return len(self.questions)

    @property
    def shortfall(self) -> int:
        """Number of questions requested but not supplied."""
        return max(0, self.requested - self.count)

    @cached_property
    def exercise_count(self) -> int:
        return sum(1 for q in self.questions if q.is_exercise)

    @cached_property
    def chapter_distribution(self) -> Counter[int]:
        """Selected question count per chapter number."""
        return Counter(q.chapter_number for q in self.questions)

    @cached_property
    def total_marks(self) -> int:
        return sum(q.marks for q in self.questions)

    def __repr__(self) -> str:
        return (
            f"SelectionResult({self.question_type.value}, "
            f"{self.count}/{self.requested}, available={self.available})"
        )
