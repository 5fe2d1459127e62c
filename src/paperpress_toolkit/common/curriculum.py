"""
Module: common.curriculum

Purpose:
    Fixed curriculum facts shared across the toolkit: the supported
    classes, their board group, and chapter ordinal resolution.

Key Functions:
    - class_group(): "matric" for 9th/10th, "intermediate" otherwise
    - parse_chapter_number(): Numeric suffix of a chapter id
    - resolve_chapter_numbers(): Ordinals for a set of chapter ids

Used By:
    - builder.selection.selector: Per-chapter quotas
    - builder.templates.patterns: Pattern resolution
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Literal, Mapping, Optional

logger = logging.getLogger(__name__)


ClassGroup = Literal["matric", "intermediate"]

CLASS_IDS: tuple[str, ...] = ("9th", "10th", "11th", "12th")
MATRIC_CLASSES = frozenset({"9th", "10th"})

SUBJECTS: tuple[str, ...] = (
    "Physics",
    "Chemistry",
    "Biology",
    "Mathematics",
    "Computer",
    "English",
)


def class_group(class_id: str) -> ClassGroup:
    """
    Board group for a class.

    Example:
        >>> class_group("10th")
        'matric'
        >>> class_group("12th")
        'intermediate'
    """
    return "matric" if class_id.strip() in MATRIC_CLASSES else "intermediate"


def parse_chapter_number(chapter_id: str) -> Optional[int]:
    """
    Parse the chapter ordinal from the last "_" segment of an id.

    Returns None when the segment is not a positive integer.

    Example:
        >>> parse_chapter_number("9_phy_ch_5")
        5
        >>> parse_chapter_number("9_eng_ch1") is None
        True
    """
    tail = chapter_id.rsplit("_", 1)[-1].strip()
    # ASCII only; "²".isdigit() is True but int("²") fails
    if not (tail.isascii() and tail.isdecimal()):
        return None
    number = int(tail)
    return number if number > 0 else None


def resolve_chapter_numbers(
    chapter_ids: Iterable[str],
    known: Optional[Mapping[str, int]] = None,
) -> List[int]:
    """
    Resolve chapter ordinals for a set of chapter ids.

    Explicit ordinals from `known` (chapter id -> Chapter.number) win;
    otherwise the id suffix is parsed. Ids that resolve to nothing are
    dropped, and duplicate ordinals collapse (first occurrence order kept).

    Args:
        chapter_ids: Chapter ids in scope
        known: Optional explicit id -> ordinal mapping

    Returns:
        Unique ordinals in input order (possibly empty)
    """
    numbers: List[int] = []
    seen: set[int] = set()
    unresolved: List[str] = []

    for chapter_id in chapter_ids:
        number = known.get(chapter_id) if known else None
        if number is None:
            number = parse_chapter_number(chapter_id)
        if number is None:
            unresolved.append(chapter_id)
            continue
        if number not in seen:
            seen.add(number)
            numbers.append(number)

    if unresolved:
        logger.debug(f"Ignoring unresolvable chapter ids for fairness: {unresolved}")
    return numbers
