"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .curriculum import (
    CLASS_IDS,
    MATRIC_CLASSES,
    SUBJECTS,
    ClassGroup,
    class_group,
    parse_chapter_number,
    resolve_chapter_numbers,
)

__all__ = [
    "CLASS_IDS",
    "MATRIC_CLASSES",
    "SUBJECTS",
    "ClassGroup",
    "class_group",
    "parse_chapter_number",
    "resolve_chapter_numbers",
]
