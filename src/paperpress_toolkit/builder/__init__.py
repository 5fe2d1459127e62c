"""
PaperPress Builder

Question selection and paper assembly from per-subject question banks.

Pipeline:
    Load → Pool per type → Difficulty filter → Select → AssembledPaper

Usage:
    >>> from paperpress_toolkit.builder import BuilderConfig, PaperAssembler, QuestionRepository
    >>> config = BuilderConfig(data_root=Path("data/questions"), seed=42)
    >>> assembler = PaperAssembler(QuestionRepository(config.data_root), config)
    >>> paper = asyncio.run(
    ...     assembler.assemble_from_template("9th", "Physics", "half_book", ["9_phy_ch_1"])
    ... )
"""

from .config import BuilderConfig
from .assembler import AssembledPaper, AssemblyError, PaperAssembler
from .loading import LoaderError, ParseError, QuestionRepository, questions_by_type
from .marks import (
    MarksBreakdown,
    MarksValidation,
    calculate_marks,
    format_marks_display,
    generate_attempt_text,
    validate_marks,
)
from .selection import (
    DifficultyFilter,
    SelectionConfig,
    Selector,
    filter_by_difficulty,
    select_questions,
)
from .templates import (
    PaperTemplate,
    QuestionTargets,
    TemplateCategory,
    get_template,
    predefined_templates,
    question_targets,
)

__all__ = [
    "BuilderConfig",
    "AssembledPaper",
    "AssemblyError",
    "PaperAssembler",
    "LoaderError",
    "ParseError",
    "QuestionRepository",
    "questions_by_type",
    "MarksBreakdown",
    "MarksValidation",
    "calculate_marks",
    "format_marks_display",
    "generate_attempt_text",
    "validate_marks",
    "DifficultyFilter",
    "SelectionConfig",
    "Selector",
    "filter_by_difficulty",
    "select_questions",
    "PaperTemplate",
    "QuestionTargets",
    "TemplateCategory",
    "get_template",
    "predefined_templates",
    "question_targets",
]
