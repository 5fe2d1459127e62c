"""
Module: questions

Purpose:
    Provides the QuestionRecord dataclass - the single record type shared by
    the repository, the selector and the assembler. One record per question
    in the bank, tagged with its type, difficulty, topic and owning chapter.

Key Classes:
    - QuestionType: mcq / short / long
    - Difficulty: easy / medium / hard
    - QuestionRecord: Immutable question with chapter ownership

Key Functions:
    - QuestionRecord.is_exercise: True for textbook "Exercise" questions
    - QuestionRecord.to_dict() / QuestionRecord.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.chapters.Chapter
    - builder.loading.parser
    - builder.selection.selector
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


EXERCISE_TOPIC = "Exercise"
ADDITIONAL_TOPIC = "Additional"


class QuestionType(str, Enum):
    """Question type; the value matches the shard's type keys."""

    MCQ = "mcq"
    SHORT = "short"
    LONG = "long"

    @classmethod
    def parse(cls, value: "QuestionType | str") -> "QuestionType":
        """
        Parse a question type from its string value.

        Raises:
            ValueError: If value is not mcq, short or long
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown question type: {value!r}") from None


class Difficulty(str, Enum):
    """Difficulty level stored on each question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Default marks per type (Punjab Board standard)
DEFAULT_MARKS: Dict[QuestionType, int] = {
    QuestionType.MCQ: 1,
    QuestionType.SHORT: 2,
    QuestionType.LONG: 5,
}


@dataclass(frozen=True)
class QuestionRecord:
    """
    Single question from the bank (immutable).

    Attributes:
        id: Unique identifier like "9_phy_ch1_mcq_3"
        question_type: mcq, short or long
        text: Question text
        difficulty: easy, medium or hard
        marks: Positive mark value
        chapter_number: Owning chapter's 1-based ordinal
        chapter_id: Owning chapter's identifier
        chapter_name: Owning chapter's display name
        topic: "Exercise", "Additional" or None (untagged)
        options: Answer options (MCQ only)
        correct_option: Index into options (MCQ only)
        subtopics: Optional finer-grained tags

    Invariants:
        - marks > 0
        - MCQ records have at least two options and a valid correct_option

    Example:
        >>> q = QuestionRecord(
        ...     id="9_phy_ch1_mcq_1",
        ...     question_type=QuestionType.MCQ,
        ...     text="SI unit of length is",
        ...     difficulty=Difficulty.EASY,
        ...     marks=1,
        ...     chapter_number=1,
        ...     chapter_id="9_phy_ch_1",
        ...     options=("metre", "second", "kilogram", "kelvin"),
        ...     correct_option=0,
        ...     topic="Exercise",
        ... )
        >>> q.is_exercise
        True
    """

    id: str
    question_type: QuestionType
    text: str
    difficulty: Difficulty
    marks: int
    chapter_number: int
    chapter_id: str
    chapter_name: str = ""
    topic: Optional[str] = None
    options: tuple[str, ...] = ()
    correct_option: Optional[int] = None
    subtopics: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate record on construction."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if self.marks <= 0:
            raise ValueError(f"marks must be positive: {self.marks} ({self.id})")
        if self.question_type is QuestionType.MCQ:
            if len(self.options) < 2:
                raise ValueError(f"MCQ {self.id} needs at least two options")
            if self.correct_option is None or not (0 <= self.correct_option < len(self.options)):
                raise ValueError(
                    f"correct_option out of range for {self.id}: {self.correct_option}"
                )

    @property
    def is_exercise(self) -> bool:
        """True for textbook exercise questions; everything else counts as Additional."""
        return self.topic == EXERCISE_TOPIC

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the shard's field names."""
        data: Dict[str, Any] = {
            "id": self.id,
            "questionText": self.text,
            "difficulty": self.difficulty.value,
            "marks": self.marks,
        }
        if self.topic is not None:
            data["topic"] = self.topic
        if self.subtopics:
            data["subtopics"] = list(self.subtopics)
        if self.question_type is QuestionType.MCQ:
            data["options"] = list(self.options)
            data["correctOption"] = self.correct_option
        return data

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        *,
        question_type: QuestionType,
        chapter_number: int,
        chapter_id: str,
        chapter_name: str = "",
    ) -> QuestionRecord:
        """
        Build a record from a shard question entry.

        Chapter ownership comes from the enclosing chapter, not the entry.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field value is invalid
        """
        options = tuple(data.get("options") or ())
        return cls(
            id=data["id"],
            question_type=question_type,
            text=data["questionText"],
            difficulty=Difficulty(data["difficulty"]),
            marks=int(data.get("marks") or DEFAULT_MARKS[question_type]),
            chapter_number=chapter_number,
            chapter_id=chapter_id,
            chapter_name=chapter_name,
            topic=data.get("topic"),
            options=options,
            correct_option=data.get("correctOption"),
            subtopics=tuple(data.get("subtopics") or ()),
        )
