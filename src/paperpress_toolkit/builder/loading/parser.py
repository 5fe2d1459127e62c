"""
Module: builder.loading.parser

Purpose:
    Parse decoded subject shard JSON into SubjectData. Schema validation
    runs first (optional), then every chapter and question is converted
    into frozen models.

Key Functions:
    - parse_subject(): Decoded shard dict -> SubjectData
    - parse_subject_file(): Read + decode + parse a shard file

Key Classes:
    - ParseError: Exception for parse failures

Dependencies:
    - json (std)
    - paperpress_toolkit.core.models: Chapter, QuestionRecord, SubjectData
    - paperpress_toolkit.core.schemas: Schema validation

Used By:
    - builder.loading.repository: QuestionRepository
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from paperpress_toolkit.core.models import (
    Chapter,
    QuestionRecord,
    QuestionType,
    SubjectData,
)
from paperpress_toolkit.core.schemas import validate_subject

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error turning shard data into models."""
    pass


# Shard key for each question collection
_COLLECTION_KEYS: Dict[QuestionType, str] = {
    QuestionType.MCQ: "mcqs",
    QuestionType.SHORT: "shortQuestions",
    QuestionType.LONG: "longQuestions",
}


def _parse_questions(
    entries: List[Any],
    question_type: QuestionType,
    chapter_id: str,
    chapter_number: int,
    chapter_name: str,
) -> tuple[QuestionRecord, ...]:
    key = _COLLECTION_KEYS[question_type]
    records = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ParseError(
                f"Invalid {question_type.value} at chapter {chapter_id!r} "
                f"{key}[{index}]: expected an object, got {type(entry).__name__}"
            )
        try:
            records.append(
                QuestionRecord.from_dict(
                    entry,
                    question_type=question_type,
                    chapter_number=chapter_number,
                    chapter_id=chapter_id,
                    chapter_name=chapter_name,
                )
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ParseError(
                f"Invalid {question_type.value} at chapter {chapter_id!r} "
                f"{key}[{index}]: {e}"
            ) from e
    return tuple(records)


def _parse_chapter(chapter_data: Dict[str, Any]) -> Chapter:
    chapter_id = chapter_data["id"]
    # Coerced once so the chapter and its questions agree
    number = int(chapter_data["number"])
    name = chapter_data.get("name", "")

    def collection(question_type: QuestionType) -> tuple[QuestionRecord, ...]:
        entries = chapter_data.get(_COLLECTION_KEYS[question_type]) or []
        return _parse_questions(entries, question_type, chapter_id, number, name)

    return Chapter(
        id=chapter_id,
        number=number,
        name=name,
        mcqs=collection(QuestionType.MCQ),
        shorts=collection(QuestionType.SHORT),
        longs=collection(QuestionType.LONG),
    )


def parse_subject(
    data: Dict[str, Any],
    *,
    class_id: str,
    subject: str,
    validate: bool = True,
) -> SubjectData:
    """
    Parse a decoded subject shard.

    Args:
        data: Decoded shard JSON
        class_id: Class the shard belongs to (used if "class" is absent)
        subject: Subject the shard belongs to (used if "subject" is absent)
        validate: Whether to run schema validation first

    Returns:
        SubjectData with chapters in file order

    Raises:
        SchemaValidationError: If validate=True and data violates the schema
        ParseError: If a chapter or question cannot be built
    """
    if validate:
        validate_subject(data)

    if not isinstance(data, dict) or not isinstance(data.get("chapters"), list):
        raise ParseError("Shard must be an object with a 'chapters' list")

    chapters = []
    seen_ids: set[str] = set()
    for index, chapter_data in enumerate(data["chapters"]):
        if not isinstance(chapter_data, dict):
            raise ParseError(
                f"Chapter entry {index} must be an object, got {type(chapter_data).__name__}"
            )
        chapter_id = chapter_data.get("id")
        if not isinstance(chapter_id, str):
            raise ParseError(f"Chapter entry {index} has no string 'id'")
        if chapter_id in seen_ids:
            raise ParseError(f"Duplicate chapter id: {chapter_id!r}")
        seen_ids.add(chapter_id)

        try:
            chapter = _parse_chapter(chapter_data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ParseError(f"Invalid chapter {chapter_id!r}: {e}") from e
        chapters.append(chapter)

    # Ids are namespaced per question type
    question_keys: set[tuple[QuestionType, str]] = set()
    for chapter in chapters:
        for question in chapter.iter_questions():
            key = (question.question_type, question.id)
            if key in question_keys:
                raise ParseError(
                    f"Duplicate {question.question_type.value} id: {question.id!r}"
                )
            question_keys.add(key)

    return SubjectData(
        class_id=data.get("class") or class_id,
        subject=data.get("subject") or subject,
        chapters=tuple(chapters),
    )


def parse_subject_file(
    path: Path,
    *,
    class_id: str,
    subject: str,
    validate: bool = True,
) -> SubjectData:
    """
    Read and parse a shard file.

    Raises:
        ParseError: If the file is not valid JSON or cannot be parsed
        SchemaValidationError: If validate=True and data violates the schema
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON in {path}: {e}") from e

    subject_data = parse_subject(data, class_id=class_id, subject=subject, validate=validate)
    logger.debug(
        f"Parsed {path.name}: {len(subject_data.chapters)} chapters, "
        f"{sum(1 for _ in subject_data.iter_questions())} questions"
    )
    return subject_data
