"""
Module: builder.templates.catalog

Purpose:
    Predefined paper templates derived from the board patterns, and the
    conversion from a template's sections to per-type question targets.

Key Classes:
    - TemplateCategory: full_book / half_book / chapter_wise / multi_chapter
    - PaperTemplate: Named set of sections for one class and subject
    - QuestionTargets: MCQ / short / long counts fed to the assembler

Key Functions:
    - predefined_templates(): The four templates for a class and subject
    - get_template(): Lookup by category or template id
    - question_targets(): Per-type targets from a template
    - attempt_targets(): Per-type attempt counts from a template
    - chapter_numbers_for_half(): Chapter ordinals for a half-book paper

Used By:
    - builder.assembler: PaperAssembler.assemble_from_template
    - paperpress_toolkit.cli
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Literal, Tuple

from paperpress_toolkit.core.models import QuestionType

from .patterns import QuestionSection, resolve_paper_pattern


class TemplateCategory(str, Enum):
    FULL_BOOK = "full_book"
    HALF_BOOK = "half_book"
    CHAPTER_WISE = "chapter_wise"
    MULTI_CHAPTER = "multi_chapter"

    @classmethod
    def parse(cls, value: "TemplateCategory | str") -> "TemplateCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError:
            raise ValueError(f"Unknown template category: {value!r}") from None

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: Dict[TemplateCategory, str] = {
    TemplateCategory.FULL_BOOK: "Full Book Paper",
    TemplateCategory.HALF_BOOK: "Half Book Paper",
    TemplateCategory.CHAPTER_WISE: "Chapter Wise Test",
    TemplateCategory.MULTI_CHAPTER: "Multi Chapters Test",
}


def category_display_name(category: TemplateCategory | str) -> str:
    return TemplateCategory.parse(category).display_name


@dataclass(frozen=True)
class QuestionTargets:
    """Per-type question counts for one paper."""

    mcq: int = 0
    short: int = 0
    long: int = 0

    def __post_init__(self) -> None:
        for name in ("mcq", "short", "long"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} target must be non-negative: {getattr(self, name)}")

    def for_type(self, question_type: QuestionType) -> int:
        return getattr(self, question_type.value)

    @property
    def total(self) -> int:
        return self.mcq + self.short + self.long


@dataclass(frozen=True)
class PaperTemplate:
    """
    Predefined paper template (immutable).

    Attributes:
        id: "<class>_<subject>_<category>", e.g. "9th_physics_half_book"
        name: Display name
        description: One-line description
        category: Template category
        class_id: Class the template is for
        subject: Subject the template is for
        total_marks: Marks printed in the paper header
        time_allowed: Time printed in the paper header
        sections: Sections in question-number order
    """

    id: str
    name: str
    description: str
    category: TemplateCategory
    class_id: str
    subject: str
    total_marks: int
    time_allowed: str
    sections: Tuple[QuestionSection, ...]

    @property
    def question_count(self) -> int:
        return sum(s.total_questions for s in self.sections)

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "totalMarks": self.total_marks,
            "timeAllowed": self.time_allowed,
            "sectionCount": len(self.sections),
            "questionCount": self.question_count,
        }


def _template(
    category: TemplateCategory,
    class_id: str,
    subject: str,
    description: str,
    total_marks: int,
    time_allowed: str,
    sections: Tuple[QuestionSection, ...],
) -> PaperTemplate:
    key = f"{class_id}_{subject.strip().lower()}"
    return PaperTemplate(
        id=f"{key}_{category.value}",
        name=category.display_name,
        description=description,
        category=category,
        class_id=class_id,
        subject=subject,
        total_marks=total_marks,
        time_allowed=time_allowed,
        sections=sections,
    )


def predefined_templates(class_id: str, subject: str) -> List[PaperTemplate]:
    """
    The four predefined templates for a class and subject.

    - Full book: the board pattern unchanged
    - Half book: section counts halved (rounded up), marks halved (down)
    - Chapter wise: section counts quartered (rounded up), 30 minutes
    - Multi chapter: pattern sections, half marks, 1 hour
    """
    pattern = resolve_paper_pattern(class_id, subject)
    half_sections = tuple(s.scaled(2) for s in pattern.sections)
    quarter_sections = tuple(s.scaled(4) for s in pattern.sections)

    return [
        _template(
            TemplateCategory.FULL_BOOK, class_id, subject,
            "Complete syllabus paper covering all chapters",
            pattern.total_marks, pattern.time_allowed, pattern.sections,
        ),
        _template(
            TemplateCategory.HALF_BOOK, class_id, subject,
            "Half syllabus paper - for half-yearly exams",
            pattern.total_marks // 2, pattern.time_allowed, half_sections,
        ),
        _template(
            TemplateCategory.CHAPTER_WISE, class_id, subject,
            "Test from single chapter",
            pattern.total_marks // 4, "30 Minutes", quarter_sections,
        ),
        _template(
            TemplateCategory.MULTI_CHAPTER, class_id, subject,
            "Test from multiple selected chapters",
            pattern.total_marks // 2, "1 Hour", pattern.sections,
        ),
    ]


def get_template(class_id: str, subject: str, key: TemplateCategory | str) -> PaperTemplate:
    """
    Find a predefined template by category or by template id.

    Raises:
        ValueError: If nothing matches
    """
    templates = predefined_templates(class_id, subject)
    for template in templates:
        if template.id == key:
            return template
    category = TemplateCategory.parse(key)
    for template in templates:
        if template.category is category:
            return template
    raise ValueError(f"No template {key!r} for {class_id}/{subject}")


def question_targets(template: PaperTemplate) -> QuestionTargets:
    """
    Per-type question targets for a template.

    Sums total_questions across the sections of each type; writing
    sections are not drawn from the bank and are ignored.
    """
    counts = {qtype: 0 for qtype in QuestionType}
    for section in template.sections:
        qtype = section.section_type.question_type
        if qtype is not None:
            counts[qtype] += section.total_questions
    return QuestionTargets(
        mcq=counts[QuestionType.MCQ],
        short=counts[QuestionType.SHORT],
        long=counts[QuestionType.LONG],
    )


def attempt_targets(template: PaperTemplate) -> QuestionTargets:
    """Per-type attempt counts for a template; writing sections are ignored."""
    counts = {qtype: 0 for qtype in QuestionType}
    for section in template.sections:
        qtype = section.section_type.question_type
        if qtype is not None:
            counts[qtype] += section.attempt_count
    return QuestionTargets(
        mcq=counts[QuestionType.MCQ],
        short=counts[QuestionType.SHORT],
        long=counts[QuestionType.LONG],
    )


def chapter_numbers_for_half(
    total_chapters: int,
    half: Literal["first", "second"],
) -> List[int]:
    """
    Chapter ordinals for a half-book paper.

    Example:
        >>> chapter_numbers_for_half(5, "first")
        [1, 2, 3]
        >>> chapter_numbers_for_half(5, "second")
        [4, 5]
    """
    half_count = math.ceil(total_chapters / 2)
    if half == "first":
        return list(range(1, half_count + 1))
    if half == "second":
        return list(range(half_count + 1, total_chapters + 1))
    raise ValueError(f"half must be 'first' or 'second': {half!r}")
