"""
Module: chapters

Purpose:
    Provides Chapter and SubjectData - the read-only shape of one
    (class, subject) question shard. Chapters carry their curriculum
    ordinal as an explicit field so selection never has to infer it
    from the chapter identifier.

Key Classes:
    - Chapter: One chapter with typed question collections
    - SubjectData: All chapters for a (class, subject) pair

Dependencies:
    - dataclasses (std)
    - .questions.QuestionRecord

Used By:
    - builder.loading.parser
    - builder.loading.repository
    - builder.assembler
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from .questions import QuestionRecord, QuestionType


@dataclass(frozen=True)
class Chapter:
    """
    Chapter with its three typed question collections (immutable).

    Attributes:
        id: Chapter identifier like "9_phy_ch_3"
        number: 1-based ordinal in curriculum order
        name: Display name
        mcqs: Multiple-choice questions
        shorts: Short-answer questions
        longs: Long-answer questions

    Invariants:
        - number >= 1
        - every question's chapter_number/chapter_id match this chapter
    """

    id: str
    number: int
    name: str
    mcqs: tuple[QuestionRecord, ...] = ()
    shorts: tuple[QuestionRecord, ...] = ()
    longs: tuple[QuestionRecord, ...] = ()

    def __post_init__(self) -> None:
        """Validate chapter on construction."""
        if self.number < 1:
            raise ValueError(f"chapter number must be >= 1: {self.number} ({self.id})")
        for question in self.iter_questions():
            if question.chapter_id != self.id or question.chapter_number != self.number:
                raise ValueError(
                    f"Question {question.id} does not belong to chapter {self.id}"
                )

    def questions(self, question_type: QuestionType) -> tuple[QuestionRecord, ...]:
        """Get the collection for one question type."""
        if question_type is QuestionType.MCQ:
            return self.mcqs
        if question_type is QuestionType.SHORT:
            return self.shorts
        return self.longs

    def iter_questions(self) -> Iterator[QuestionRecord]:
        """Iterate every question in the chapter (mcqs, shorts, longs)."""
        yield from self.mcqs
        yield from self.shorts
        yield from self.longs

    @property
    def mcq_count(self) -> int:
        return len(self.mcqs)

    @property
    def short_count(self) -> int:
        return len(self.shorts)

    @property
    def long_count(self) -> int:
        return len(self.longs)

    def summary(self) -> Dict[str, Any]:
        """Chapter listing without question bodies."""
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "mcqCount": self.mcq_count,
            "shortCount": self.short_count,
            "longCount": self.long_count,
        }

    def __repr__(self) -> str:
        return (
            f"Chapter({self.id!r}, number={self.number}, "
            f"mcq={self.mcq_count}, short={self.short_count}, long={self.long_count})"
        )


@dataclass(frozen=True)
class SubjectData:
    """
    All chapters of one (class, subject) shard (immutable).

    An empty SubjectData is a valid value: unknown shards load as empty.
    """

    class_id: str
    subject: str
    chapters: tuple[Chapter, ...] = ()

    @classmethod
    def empty(cls, class_id: str, subject: str) -> SubjectData:
        return cls(class_id=class_id, subject=subject, chapters=())

    @property
    def is_empty(self) -> bool:
        return not self.chapters

    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def iter_questions(self) -> Iterator[QuestionRecord]:
        for chapter in self.chapters:
            yield from chapter.iter_questions()
