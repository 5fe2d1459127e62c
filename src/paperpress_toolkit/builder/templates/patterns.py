"""
Module: builder.templates.patterns

Purpose:
    Punjab Board exam paper structures, one PaperPattern per class group
    and subject:
        - Matric:       Class 9th & 10th
        - Intermediate: Class 11th & 12th
    Sections are listed in question-number order (Q1, Q2, Q3...).

Key Classes:
    - SectionType: mcq / short / long / writing
    - QuestionSection: One numbered section of a paper
    - PaperPattern: Full board paper structure

Key Functions:
    - resolve_paper_pattern(): Pattern for a class and subject
    - distribute_shorts(): Split short questions across short sections
    - distribute_longs(): Attach long questions to long sections

Used By:
    - builder.templates.catalog: Predefined templates
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from paperpress_toolkit.common.curriculum import ClassGroup, class_group
from paperpress_toolkit.core.models import QuestionRecord, QuestionType


class SectionType(str, Enum):
    MCQ = "mcq"
    SHORT = "short"
    LONG = "long"
    WRITING = "writing"

    @property
    def question_type(self) -> Optional[QuestionType]:
        """Bank question type fed by this section (None for writing)."""
        if self is SectionType.WRITING:
            return None
        return QuestionType(self.value)


@dataclass(frozen=True)
class QuestionSection:
    """
    One numbered section of a paper (immutable).

    Attributes:
        q_number: Question number on the paper (Q1, Q2...)
        title: Section heading
        instruction: Attempt instruction printed under the heading
        total_marks: Marks the section carries
        total_questions: Questions printed in the section
        attempt_count: Questions a candidate must attempt
        marks_per_question: Marks per attempted question
        section_type: mcq, short, long or writing
    """

    q_number: int
    title: str
    instruction: str
    total_marks: int
    total_questions: int
    attempt_count: int
    marks_per_question: int
    section_type: SectionType
    has_sub_parts: bool = False
    sub_part_a_marks: Optional[int] = None
    sub_part_b_marks: Optional[int] = None
    special_note: Optional[str] = None
    writing_prompt: Optional[str] = None
    answer_lines: Optional[int] = None

    @property
    def marks_formula(self) -> str:
        """Display formula like "5 × 2 = 10"."""
        return f"{self.attempt_count} × {self.marks_per_question} = {self.total_marks}"

    def scaled(self, divisor: int) -> QuestionSection:
        """Copy with counts and marks divided by divisor, rounded up."""
        return replace(
            self,
            total_questions=-(-self.total_questions // divisor),
            attempt_count=-(-self.attempt_count // divisor),
            total_marks=-(-self.total_marks // divisor),
        )


@dataclass(frozen=True)
class PaperPattern:
    """Full board paper structure (immutable)."""

    class_group: ClassGroup
    subject: str
    total_marks: int
    time_allowed: str
    sections: Tuple[QuestionSection, ...]

    def sections_of(self, section_type: SectionType) -> Tuple[QuestionSection, ...]:
        return tuple(s for s in self.sections if s.section_type is section_type)


def _mcq(q: int, count: int, instruction: str = "Circle the correct answer.") -> QuestionSection:
    return QuestionSection(q, "Objective (MCQs)", instruction, count, count, count, 1, SectionType.MCQ)


def _short(q: int, total: int, attempt: int, title: str = "Short Questions") -> QuestionSection:
    return QuestionSection(
        q, title, f"Attempt any {attempt} short questions.",
        attempt * 2, total, attempt, 2, SectionType.SHORT,
    )


def _long(q: int, total: int, attempt: int, marks: int, **extra) -> QuestionSection:
    return QuestionSection(
        q, "Long Questions", extra.pop("instruction", f"Attempt any {attempt} questions."),
        attempt * marks, total, attempt, marks, SectionType.LONG, **extra,
    )


def _writing(
    q: int, title: str, instruction: str, total: int, attempt: int, marks: int,
    prompt: str, lines: int,
) -> QuestionSection:
    return QuestionSection(
        q, title, instruction, attempt * marks, total, attempt, marks, SectionType.WRITING,
        writing_prompt=prompt, answer_lines=lines,
    )


# ─────────────────────────────────────────────────────────────────────────────
# MATRIC: CLASS 9th & 10th
# ─────────────────────────────────────────────────────────────────────────────

MATRIC_SCIENCE = PaperPattern("matric", "Science", 60, "2 Hours", (
    _mcq(1, 12),
    _short(2, 8, 5),
    _short(3, 8, 5),
    _short(4, 8, 5),
    _long(5, 3, 2, 9, has_sub_parts=True, sub_part_a_marks=5, sub_part_b_marks=4),
))

MATRIC_COMPUTER = PaperPattern("matric", "Computer", 60, "2 Hours", (
    _mcq(1, 12),
    _short(2, 6, 4),
    _short(3, 6, 4),
    _short(4, 6, 4),
    _long(5, 3, 2, 8),
))

MATRIC_MATHEMATICS = PaperPattern("matric", "Mathematics", 75, "2.5 Hours", (
    _mcq(1, 15),
    _short(2, 9, 6),
    _short(3, 9, 6),
    _short(4, 9, 6),
    _long(
        5, 5, 3, 8,
        instruction="Attempt any 3 questions. Q9 (Theorem) is Compulsory.",
        has_sub_parts=True, sub_part_a_marks=4, sub_part_b_marks=4,
        special_note="Note: Q9 (Theorem) is Compulsory (8 Marks).",
    ),
))

MATRIC_ENGLISH = PaperPattern("matric", "English", 75, "2.5 Hours", (
    _mcq(1, 19, "Choose the correct answer. (Spelling / Synonyms / Grammar)"),
    _short(2, 8, 5),
    _writing(
        3, "Translation of Paragraphs into Urdu", "Attempt any 2 out of 3 paragraphs.",
        3, 2, 4, "Translate the following paragraph(s) into Urdu:", 12,
    ),
    _writing(
        4, "Summary / Poem Paraphrase",
        "Write the summary of the poem or paraphrase the given stanza.",
        1, 1, 5, "Write the summary of the poem / Paraphrase the given stanza:", 10,
    ),
    _writing(
        5, "Essay / Letter / Story / Dialogue", "Attempt the following.",
        1, 1, 15, "Write an essay / letter / story / dialogue on the given topic:", 22,
    ),
    _writing(
        6, "Change of Voice (Active / Passive)", "Change the voice of the following sentences.",
        5, 5, 1, "Change the voice of the following sentences:", 10,
    ),
    _writing(
        7, "Translation (Urdu to English)", "Translate the following sentences into English.",
        5, 5, 1, "Translate the following sentences from Urdu into English:", 10,
    ),
))

# ─────────────────────────────────────────────────────────────────────────────
# INTERMEDIATE: CLASS 11th & 12th
# ─────────────────────────────────────────────────────────────────────────────

INTER_SCIENCE = PaperPattern("intermediate", "Science", 85, "3 Hours", (
    _mcq(1, 17),
    _short(2, 12, 8),
    _short(3, 12, 8),
    _short(4, 9, 6),
    _long(5, 5, 3, 8, has_sub_parts=True, sub_part_a_marks=4, sub_part_b_marks=4),
))

INTER_COMPUTER = PaperPattern("intermediate", "Computer", 75, "3 Hours", (
    _mcq(1, 15),
    _short(2, 9, 6),
    _short(3, 9, 6),
    _short(4, 9, 6),
    _long(5, 5, 3, 8),
))

INTER_MATHEMATICS = PaperPattern("intermediate", "Mathematics", 100, "3 Hours", (
    _mcq(1, 20),
    _short(2, 12, 8),
    _short(3, 12, 8),
    _short(4, 13, 9),
    _long(5, 5, 3, 10, has_sub_parts=True, sub_part_a_marks=5, sub_part_b_marks=5),
))

INTER_ENGLISH = PaperPattern("intermediate", "English", 100, "3 Hours", (
    _mcq(1, 20, "Choose the correct answer. (Synonyms / Prepositions / Grammar)"),
    _short(2, 9, 6, "Short Questions (Book I / II, Prose)"),
    _short(3, 9, 6, "Short Questions (Plays / Heroes)"),
    _short(4, 6, 4, "Short Questions (Poems / Novel)"),
    _writing(
        5, "Letter / Application Writing", "Write a letter / application on the given topic.",
        1, 1, 10, "Write a letter / application on the given topic:", 16,
    ),
    _writing(
        6, "Story Writing", "Write a story on the given topic.",
        1, 1, 10, "Write a story on the given topic:", 16,
    ),
    _writing(
        7, "Explanation with Reference to Context",
        "Explain the following stanza with reference to the context.",
        1, 1, 5, "Explain the following stanza with reference to the context:", 10,
    ),
    _writing(
        8, "Punctuation / Translation of Passage", "Punctuate the passage OR translate into Urdu.",
        1, 1, 15, "Punctuate the following passage OR translate it into Urdu:", 20,
    ),
))


PAPER_PATTERNS: Dict[str, PaperPattern] = {
    "matric_science": MATRIC_SCIENCE,
    "matric_computer": MATRIC_COMPUTER,
    "matric_mathematics": MATRIC_MATHEMATICS,
    "matric_english": MATRIC_ENGLISH,
    "intermediate_science": INTER_SCIENCE,
    "intermediate_computer": INTER_COMPUTER,
    "intermediate_mathematics": INTER_MATHEMATICS,
    "intermediate_english": INTER_ENGLISH,
}


def resolve_paper_pattern(class_id: str, subject: str) -> PaperPattern:
    """
    Pattern for a class and subject.

    English, Mathematics (or "maths") and Computer have their own pattern;
    every other subject uses the group's science pattern.

    Example:
        >>> resolve_paper_pattern("9th", "Physics").total_marks
        60
    """
    group = class_group(class_id)
    name = subject.strip().lower()
    if name == "maths":
        name = "mathematics"
    if name not in ("english", "mathematics", "computer"):
        name = "science"
    return PAPER_PATTERNS[f"{group}_{name}"]


def distribute_shorts(
    pattern: PaperPattern,
    shorts: Sequence[QuestionRecord],
) -> List[Tuple[QuestionSection, List[QuestionRecord]]]:
    """
    Split short questions across the pattern's short sections in order.

    Each section takes up to its total_questions; the last one takes
    whatever remains.
    """
    sections = pattern.sections_of(SectionType.SHORT)
    if not sections or not shorts:
        return []

    remaining = list(shorts)
    result = []
    for index, section in enumerate(sections):
        is_last = index == len(sections) - 1
        take = len(remaining) if is_last else min(section.total_questions, len(remaining))
        result.append((section, remaining[:take]))
        remaining = remaining[take:]
    return result


def distribute_longs(
    pattern: PaperPattern,
    longs: Sequence[QuestionRecord],
) -> List[Tuple[QuestionSection, List[QuestionRecord]]]:
    """Attach the full long-question list to every long section."""
    sections = pattern.sections_of(SectionType.LONG)
    if not sections or not longs:
        return []
    return [(section, list(longs)) for section in sections]
