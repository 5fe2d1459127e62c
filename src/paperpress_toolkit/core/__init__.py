"""
PaperPress Core Package

Shared data models and shard schema validation. These models are the
single source of truth for the builder modules.
"""

from .models import (
    Chapter,
    Difficulty,
    QuestionRecord,
    QuestionType,
    SelectionResult,
    SubjectData,
)

__all__ = [
    "Chapter",
    "Difficulty",
    "QuestionRecord",
    "QuestionType",
    "SelectionResult",
    "SubjectData",
]
