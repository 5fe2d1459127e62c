"""
Core Models Package

Immutable, validated data models shared by loading, selection and assembly.

All models in this package are frozen dataclasses. This ensures:
1. No component can mutate a loaded question bank
2. Cached shards are safe to share between concurrent callers
3. Records can be used in sets and as dict keys
"""

from .questions import (
    ADDITIONAL_TOPIC,
    DEFAULT_MARKS,
    EXERCISE_TOPIC,
    Difficulty,
    QuestionRecord,
    QuestionType,
)
from .chapters import Chapter, SubjectData
from .selection import SelectionResult

__all__ = [
    "ADDITIONAL_TOPIC",
    "DEFAULT_MARKS",
    "EXERCISE_TOPIC",
    "Difficulty",
    "QuestionRecord",
    "QuestionType",
    "Chapter",
    "SubjectData",
    "SelectionResult",
]
