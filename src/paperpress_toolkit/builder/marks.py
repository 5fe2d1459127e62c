"""
Module: builder.marks

Purpose:
    Marks breakdown for an assembled paper. Marks come from the per-type
    mark value (board default or a custom override), not from the
    individual records, so the header total always matches the printed
    "n × m = t" formulas.

Key Classes:
    - TypeMarks: Count / marks-per-question / totals for one type
    - MarksBreakdown: Breakdown across all three types
    - MarksValidation: Header total vs calculated total

Key Functions:
    - calculate_marks(): Breakdown for three question lists
    - validate_marks(): Compare a header total to the calculated total
    - format_marks_display(): "MCQ: 12 × 1 = 12 | ... | Total: 60 marks"
    - generate_attempt_text(): "Attempt any 5 (5 × 2 = 10 Marks)"

Used By:
    - builder.assembler: AssembledPaper.marks()
    - paperpress_toolkit.cli
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from paperpress_toolkit.core.models import DEFAULT_MARKS, QuestionRecord, QuestionType


@dataclass(frozen=True)
class TypeMarks:
    """Marks for one question type."""

    count: int
    marks_per_question: int
    total: int
    attempt_count: int
    attempted_marks: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "count": self.count,
            "marksPerQuestion": self.marks_per_question,
            "total": self.total,
            "attemptCount": self.attempt_count,
            "attemptedMarks": self.attempted_marks,
        }


@dataclass(frozen=True)
class MarksBreakdown:
    """
    Marks across a paper (immutable).

    Attributes:
        mcq: MCQ marks (always attempted in full)
        short: Short question marks
        long: Long question marks
        total: Marks of every printed question
        attempt_total: Marks a candidate can actually score
    """

    mcq: TypeMarks
    short: TypeMarks
    long: TypeMarks
    total: int
    attempt_total: int

    def for_type(self, question_type: QuestionType) -> TypeMarks:
        return getattr(self, QuestionType.parse(question_type).value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mcq": self.mcq.to_dict(),
            "short": self.short.to_dict(),
            "long": self.long.to_dict(),
            "total": self.total,
            "attemptTotal": self.attempt_total,
        }


@dataclass(frozen=True)
class MarksValidation:
    valid: bool
    header_total: int
    calculated_total: int
    mismatch: int
    error: Optional[str] = None


def _marks_per_question(
    question_type: QuestionType,
    custom_marks: Optional[Mapping[QuestionType | str, int]],
) -> int:
    if custom_marks:
        for key, value in custom_marks.items():
            if QuestionType.parse(key) is question_type and value:
                return int(value)
    return DEFAULT_MARKS[question_type]


def _type_marks(
    count: int,
    marks_per_question: int,
    attempt: Optional[int] = None,
) -> TypeMarks:
    # Zero or missing attempt count means "attempt all"; never more than were picked
    attempt_count = min(attempt, count) if attempt else count
    return TypeMarks(
        count=count,
        marks_per_question=marks_per_question,
        total=count * marks_per_question,
        attempt_count=attempt_count,
        attempted_marks=attempt_count * marks_per_question,
    )


def calculate_marks(
    mcqs: Sequence[QuestionRecord],
    shorts: Sequence[QuestionRecord],
    longs: Sequence[QuestionRecord],
    *,
    short_attempt: Optional[int] = None,
    long_attempt: Optional[int] = None,
    custom_marks: Optional[Mapping[QuestionType | str, int]] = None,
) -> MarksBreakdown:
    """
    Marks breakdown for three question lists.

    Args:
        mcqs: Selected MCQs
        shorts: Selected short questions
        longs: Selected long questions
        short_attempt: Short questions to attempt (None = all)
        long_attempt: Long questions to attempt (None = all)
        custom_marks: Per-type marks overriding the board defaults

    Example:
        >>> breakdown = calculate_marks(mcqs[:12], shorts[:15], longs[:3], short_attempt=10)
        >>> breakdown.total, breakdown.attempt_total
        (57, 47)
    """
    mcq = _type_marks(len(mcqs), _marks_per_question(QuestionType.MCQ, custom_marks))
    short = _type_marks(
        len(shorts), _marks_per_question(QuestionType.SHORT, custom_marks), short_attempt
    )
    long = _type_marks(
        len(longs), _marks_per_question(QuestionType.LONG, custom_marks), long_attempt
    )

    return MarksBreakdown(
        mcq=mcq,
        short=short,
        long=long,
        total=mcq.total + short.total + long.total,
        attempt_total=mcq.total + short.attempted_marks + long.attempted_marks,
    )


def validate_marks(
    header_total: int,
    mcqs: Sequence[QuestionRecord],
    shorts: Sequence[QuestionRecord],
    longs: Sequence[QuestionRecord],
    *,
    custom_marks: Optional[Mapping[QuestionType | str, int]] = None,
) -> MarksValidation:
    """Compare the total printed in a paper header with the calculated total."""
    calculated_total = calculate_marks(mcqs, shorts, longs, custom_marks=custom_marks).total
    mismatch = abs(header_total - calculated_total)
    if mismatch == 0:
        return MarksValidation(True, header_total, calculated_total, 0)
    return MarksValidation(
        valid=False,
        header_total=header_total,
        calculated_total=calculated_total,
        mismatch=mismatch,
        error=(
            f"Total marks mismatch: Header shows {header_total}, "
            f"but calculated total is {calculated_total}"
        ),
    )


def format_marks_display(breakdown: MarksBreakdown) -> str:
    """One-line summary; types with no questions are left out."""
    parts = []
    for label, marks in (("MCQ", breakdown.mcq), ("Short", breakdown.short), ("Long", breakdown.long)):
        if marks.count > 0:
            parts.append(f"{label}: {marks.count} × {marks.marks_per_question} = {marks.total}")
    parts.append(f"Total: {breakdown.total} marks")
    return " | ".join(parts)


def generate_attempt_text(attempt_count: int, total_questions: int, marks_per_question: int) -> str:
    total_marks = attempt_count * marks_per_question
    formula = f"({attempt_count} × {marks_per_question} = {total_marks} Marks)"
    if attempt_count >= total_questions:
        return f"Attempt all {formula}"
    return f"Attempt any {attempt_count} {formula}"
