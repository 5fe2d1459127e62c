"""
Module: builder.templates

Purpose:
    Board paper patterns and the predefined templates built from them.
    A template's sections convert to per-type question targets.

Key Functions:
    - resolve_paper_pattern(): Pattern for a class and subject
    - predefined_templates(): Four templates per class and subject
    - get_template(): Lookup by category or id
    - question_targets(): Template -> MCQ / short / long targets

Used By:
    - builder.assembler: PaperAssembler.assemble_from_template
    - paperpress_toolkit.cli
"""

from .patterns import (
    SectionType,
    QuestionSection,
    PaperPattern,
    PAPER_PATTERNS,
    resolve_paper_pattern,
    distribute_shorts,
    distribute_longs,
)
from .catalog import (
    TemplateCategory,
    PaperTemplate,
    QuestionTargets,
    predefined_templates,
    get_template,
    question_targets,
    attempt_targets,
    chapter_numbers_for_half,
    category_display_name,
)

__all__ = [
    "SectionType",
    "QuestionSection",
    "PaperPattern",
    "PAPER_PATTERNS",
    "resolve_paper_pattern",
    "distribute_shorts",
    "distribute_longs",
    "TemplateCategory",
    "PaperTemplate",
    "QuestionTargets",
    "predefined_templates",
    "get_template",
    "question_targets",
    "attempt_targets",
    "chapter_numbers_for_half",
    "category_display_name",
]
