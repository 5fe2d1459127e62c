"""
Module: builder.loading.repository

Purpose:
    Question repository for (class, subject) shards. Loads a shard on
    first access, caches it for the repository's lifetime, and flattens
    chapters into per-type question pools.

Key Functions:
    - questions_by_type(): Flatten matching chapters for one type

Key Classes:
    - QuestionRepository: Async load + cache + lookup helpers
    - LoaderError: Exception for shard load failures

Dependencies:
    - asyncio (std): File reads run in a worker thread
    - builder.loading.parser: Shard parsing
    - paperpress_toolkit.core.models: Chapter, QuestionRecord, SubjectData

Used By:
    - builder.assembler: PaperAssembler
    - paperpress_toolkit.cli
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from paperpress_toolkit.core.models import (
    Chapter,
    QuestionRecord,
    QuestionType,
    SubjectData,
)
from paperpress_toolkit.core.schemas import SchemaValidationError

from .parser import ParseError, parse_subject_file

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading a subject shard."""
    pass


CacheKey = Tuple[str, str]


def _cache_key(class_id: str, subject: str) -> CacheKey:
    return (class_id.strip(), subject.strip().lower())


def questions_by_type(
    chapters: Iterable[Chapter],
    chapter_ids: Iterable[str],
    question_type: QuestionType | str,
) -> List[QuestionRecord]:
    """
    Flatten the collections of the requested chapters for one type.

    Chapters are visited in their loaded order, so identical inputs always
    yield an identical pool. An empty chapter id set yields an empty pool.

    Args:
        chapters: Loaded chapters of one shard
        chapter_ids: Chapter ids in scope
        question_type: Type to flatten

    Returns:
        New list of records (callers may reorder it freely)
    """
    question_type = QuestionType.parse(question_type)
    wanted = set(chapter_ids)
    if not wanted:
        return []

    pool: List[QuestionRecord] = []
    for chapter in chapters:
        if chapter.id in wanted:
            pool.extend(chapter.questions(question_type))
    return pool


class QuestionRepository:
    """
    Cached access to subject shards under a data root.

    Shards live at `<data_root>/<class_id>/<subject lower-case>.json`.
    A missing shard loads as an empty SubjectData; a shard that exists but
    cannot be read or parsed raises LoaderError.

    The cache is the only shared mutable state. Concurrent loads of the
    same key may both read the file; the last writer wins, which is safe
    because identical files parse to identical data.

    Example:
        >>> repo = QuestionRepository(Path("data/questions"))
        >>> subject = asyncio.run(repo.load("9th", "Physics"))
        >>> pool = repo.questions_by_type(subject.chapters, ["9_phy_ch_1"], "mcq")
    """

    questions_by_type = staticmethod(questions_by_type)

    def __init__(self, data_root: Path, *, validate_schema: bool = True):
        self.data_root = Path(data_root)
        self.validate_schema = validate_schema
        self._cache: Dict[CacheKey, SubjectData] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Loading & Cache
    # ─────────────────────────────────────────────────────────────────────────

    def shard_path(self, class_id: str, subject: str) -> Path:
        return self.data_root / class_id.strip() / f"{subject.strip().lower()}.json"

    def is_loaded(self, class_id: str, subject: str) -> bool:
        return _cache_key(class_id, subject) in self._cache

    async def load(self, class_id: str, subject: str) -> SubjectData:
        """
        Load (or return the cached) shard for a class and subject.

        Returns:
            SubjectData; empty when no shard exists for the pair

        Raises:
            LoaderError: If the shard exists but cannot be loaded
        """
        key = _cache_key(class_id, subject)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        subject_data = await asyncio.to_thread(self._read_shard, class_id, subject)
        self._cache[key] = subject_data
        return subject_data

    def _read_shard(self, class_id: str, subject: str) -> SubjectData:
        path = self.shard_path(class_id, subject)
        if not path.exists():
            logger.warning(f"No question data for {class_id}/{subject} at {path}")
            return SubjectData.empty(class_id, subject)

        try:
            subject_data = parse_subject_file(
                path,
                class_id=class_id,
                subject=subject,
                validate=self.validate_schema,
            )
        except (ParseError, SchemaValidationError, OSError) as e:
            raise LoaderError(f"Failed to load {class_id}/{subject}: {e}") from e

        logger.info(
            f"Loaded {class_id}/{subject}: {len(subject_data.chapters)} chapters"
        )
        return subject_data

    async def load_chapters(self, class_id: str, subject: str) -> tuple[Chapter, ...]:
        """Chapters of a shard (empty for an unknown pair)."""
        subject_data = await self.load(class_id, subject)
        return subject_data.chapters

    def invalidate(self, class_id: Optional[str] = None, subject: Optional[str] = None) -> None:
        """
        Drop cached shards.

        With both arguments, drops that pair only; with neither, clears
        everything; with only class_id, drops every subject of that class.
        """
        if class_id is None and subject is None:
            self._cache.clear()
            logger.debug("Cleared question shard cache")
            return
        if subject is None:
            class_key = class_id.strip()
            for key in [k for k in self._cache if k[0] == class_key]:
                del self._cache[key]
            return
        if class_id is None:
            raise ValueError("subject given without class_id")
        self._cache.pop(_cache_key(class_id, subject), None)

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup Helpers
    # ─────────────────────────────────────────────────────────────────────────

    async def pool(
        self,
        class_id: str,
        subject: str,
        chapter_ids: Iterable[str],
        question_type: QuestionType | str,
    ) -> List[QuestionRecord]:
        """Per-type pool for the given chapters."""
        chapters = await self.load_chapters(class_id, subject)
        return questions_by_type(chapters, chapter_ids, question_type)

    async def chapter_summaries(self, class_id: str, subject: str) -> List[dict]:
        chapters = await self.load_chapters(class_id, subject)
        return [chapter.summary() for chapter in chapters]

    async def get_question(
        self,
        class_id: str,
        subject: str,
        question_id: str,
        question_type: QuestionType | str | None = None,
    ) -> Optional[QuestionRecord]:
        """
        Find a question by id (first match in chapter order).

        Pass question_type to disambiguate ids shared across types.
        """
        qtype = QuestionType.parse(question_type) if question_type is not None else None
        subject_data = await self.load(class_id, subject)
        for question in subject_data.iter_questions():
            if question.id == question_id and (qtype is None or question.question_type is qtype):
                return question
        return None

    async def get_questions(
        self,
        class_id: str,
        subject: str,
        question_ids: Sequence[str],
        question_type: QuestionType | str | None = None,
    ) -> List[QuestionRecord]:
        """Questions for ids in the given order; unknown ids are skipped."""
        if not question_ids:
            return []
        qtype = QuestionType.parse(question_type) if question_type is not None else None
        subject_data = await self.load(class_id, subject)

        index: Dict[str, QuestionRecord] = {}
        for question in subject_data.iter_questions():
            if qtype is None or question.question_type is qtype:
                index.setdefault(question.id, question)

        found = [index[qid] for qid in question_ids if qid in index]
        missing = len(question_ids) - len(found)
        if missing:
            logger.debug(f"{missing} requested question ids not found in {class_id}/{subject}")
        return found

    async def available_counts(
        self,
        class_id: str,
        subject: str,
        chapter_ids: Iterable[str],
    ) -> Dict[QuestionType, int]:
        """Pool size per type for the given chapters."""
        chapters = await self.load_chapters(class_id, subject)
        chapter_ids = list(chapter_ids)
        return {
            qtype: len(questions_by_type(chapters, chapter_ids, qtype))
            for qtype in QuestionType
        }

    async def search(
        self,
        class_id: str,
        subject: str,
        chapter_ids: Iterable[str],
        query: str,
        question_type: QuestionType | str,
    ) -> List[QuestionRecord]:
        """Case-insensitive substring search over question text."""
        term = query.strip().lower()
        chapter_ids = list(chapter_ids)
        if not term or not chapter_ids:
            return []
        pool = await self.pool(class_id, subject, chapter_ids, question_type)
        return [q for q in pool if term in q.text.lower()]
