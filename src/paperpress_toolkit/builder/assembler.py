"""
Module: builder.assembler

Purpose:
    Assemble a paper: one independent selection per question type over
    the chapters in scope.
    Load → Pool per type → Difficulty filter → Select → AssembledPaper

Key Classes:
    - PaperAssembler: Loads through a QuestionRepository and selects
    - AssembledPaper: Three selections plus shortfall report
    - AssemblyError: Exception for assembly failures

Dependencies:
    - builder.loading: QuestionRepository, questions_by_type
    - builder.selection: filter_by_difficulty, Selector
    - builder.templates: Template -> per-type targets

Used By:
    - paperpress_toolkit.cli
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from paperpress_toolkit.core.models import Chapter, QuestionType, SelectionResult

from .config import BuilderConfig
from .loading import LoaderError, QuestionRepository, questions_by_type
from .marks import MarksBreakdown, calculate_marks
from .selection import DifficultyFilter, Selector, filter_by_difficulty
from .templates import PaperTemplate, QuestionTargets, get_template, question_targets

logger = logging.getLogger(__name__)


class AssemblyError(Exception):
    """Error assembling a paper."""
    pass


@dataclass(frozen=True)
class AssembledPaper:
    """
    Assembled paper (immutable).

    Attributes:
        class_id: Class the paper is for
        subject: Subject the paper is for
        chapter_ids: Chapters in scope, as requested
        difficulty: Difficulty filter applied to every type
        mcqs: MCQ selection
        shorts: Short question selection
        longs: Long question selection
        warnings: Shortfall and scope warnings raised during assembly
        template_id: Template the targets came from, if any

    Example:
        >>> paper = asyncio.run(assembler.assemble("9th", "Physics", ["9_phy_ch_1"], 12, 24, 3))
        >>> paper.mcq_ids[:2]
        ('9_phy_ch1_mcq_7', '9_phy_ch1_mcq_2')
        >>> paper.shortfalls
        {}
    """

    class_id: str
    subject: str
    chapter_ids: tuple[str, ...]
    difficulty: DifficultyFilter
    mcqs: SelectionResult
    shorts: SelectionResult
    longs: SelectionResult
    warnings: tuple[str, ...] = ()
    template_id: Optional[str] = None

    def selection(self, question_type: QuestionType | str) -> SelectionResult:
        return {
            QuestionType.MCQ: self.mcqs,
            QuestionType.SHORT: self.shorts,
            QuestionType.LONG: self.longs,
        }[QuestionType.parse(question_type)]

    @property
    def mcq_ids(self) -> tuple[str, ...]:
        return self.mcqs.ids

    @property
    def short_ids(self) -> tuple[str, ...]:
        return self.shorts.ids

    @property
    def long_ids(self) -> tuple[str, ...]:
        return self.longs.ids

    @property
    def shortfalls(self) -> Dict[QuestionType, int]:
        """Missing question count per type; types with no shortfall are omitted."""
        return {
            result.question_type: result.shortfall
            for result in (self.mcqs, self.shorts, self.longs)
            if result.shortfall
        }

    @property
    def total_questions(self) -> int:
        return self.mcqs.count + self.shorts.count + self.longs.count

    def marks(self, **kwargs) -> MarksBreakdown:
        """Marks breakdown; kwargs are passed to calculate_marks."""
        return calculate_marks(
            self.mcqs.questions, self.shorts.questions, self.longs.questions, **kwargs
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize ids and counts for persistence or rendering."""
        return {
            "classId": self.class_id,
            "subject": self.subject,
            "chapterIds": list(self.chapter_ids),
            "difficulty": self.difficulty.value,
            "templateId": self.template_id,
            "mcqIds": list(self.mcq_ids),
            "shortIds": list(self.short_ids),
            "longIds": list(self.long_ids),
            "requested": {
                r.question_type.value: r.requested for r in (self.mcqs, self.shorts, self.longs)
            },
            "available": {
                r.question_type.value: r.available for r in (self.mcqs, self.shorts, self.longs)
            },
            "shortfalls": {qtype.value: n for qtype, n in self.shortfalls.items()},
            "totalQuestions": self.total_questions,
            "warnings": list(self.warnings),
        }


class PaperAssembler:
    """
    Assembles papers from a shared QuestionRepository.

    Holds no per-paper state; each call builds its own random generator
    (seeded from config.seed when set) and shares it across the three
    question types.

    Example:
        >>> config = BuilderConfig(data_root=Path("data/questions"), seed=42)
        >>> assembler = PaperAssembler(QuestionRepository(config.data_root), config)
        >>> paper = asyncio.run(assembler.assemble("9th", "Physics", ["9_phy_ch_1"], 12, 24, 3))
    """

    def __init__(self, repository: QuestionRepository, config: Optional[BuilderConfig] = None):
        self.repository = repository
        self.config = config or BuilderConfig(data_root=repository.data_root)
        self.selection_config = self.config.selection_config()

    async def assemble(
        self,
        class_id: str,
        subject: str,
        chapter_ids: Sequence[str],
        mcq_target: int,
        short_target: int,
        long_target: int,
        difficulty: DifficultyFilter | str = DifficultyFilter.MIXED,
        rng: Optional[random.Random] = None,
    ) -> AssembledPaper:
        """
        Load the shard for class and subject, then assemble.

        Raises:
            AssemblyError: If the shard exists but cannot be loaded
            ValueError: If difficulty is not a known level
        """
        level = DifficultyFilter.parse(difficulty)
        chapters = await self._load_chapters(class_id, subject)

        return self.assemble_from_chapters(
            chapters,
            class_id,
            subject,
            chapter_ids,
            QuestionTargets(max(0, mcq_target), max(0, short_target), max(0, long_target)),
            level,
            rng,
        )

    async def assemble_from_template(
        self,
        class_id: str,
        subject: str,
        template: PaperTemplate | str,
        chapter_ids: Sequence[str],
        difficulty: DifficultyFilter | str = DifficultyFilter.MIXED,
        rng: Optional[random.Random] = None,
    ) -> AssembledPaper:
        """
        Assemble with targets taken from a template's sections.

        template may be a PaperTemplate, a category name ("half_book")
        or a template id ("9th_physics_half_book").
        """
        if not isinstance(template, PaperTemplate):
            template = get_template(class_id, subject, template)
        targets = question_targets(template)
        logger.info(
            f"Template {template.id}: {targets.mcq} MCQ, "
            f"{targets.short} short, {targets.long} long"
        )

        level = DifficultyFilter.parse(difficulty)
        chapters = await self._load_chapters(class_id, subject)

        return self.assemble_from_chapters(
            chapters, class_id, subject, chapter_ids, targets, level, rng,
            template_id=template.id,
        )

    async def _load_chapters(self, class_id: str, subject: str) -> tuple[Chapter, ...]:
        try:
            return await self.repository.load_chapters(class_id, subject)
        except LoaderError as e:
            raise AssemblyError(f"Failed to load questions: {e}") from e

    def assemble_from_chapters(
        self,
        chapters: Sequence[Chapter],
        class_id: str,
        subject: str,
        chapter_ids: Sequence[str],
        targets: QuestionTargets,
        difficulty: DifficultyFilter | str = DifficultyFilter.MIXED,
        rng: Optional[random.Random] = None,
        *,
        template_id: Optional[str] = None,
    ) -> AssembledPaper:
        """
        Assemble a paper from already-loaded chapters.

        Pure over chapters: given the same chapters, targets and a
        generator in the same state, the result is identical.
        """
        level = DifficultyFilter.parse(difficulty)
        rng = rng if rng is not None else self.selection_config.make_rng()
        chapter_ids = tuple(chapter_ids)
        warnings: List[str] = []

        known = {chapter.id: chapter.number for chapter in chapters}
        unknown = [cid for cid in chapter_ids if cid not in known]
        if unknown:
            warnings.append(f"Chapters not found in {class_id}/{subject}: {', '.join(unknown)}")

        results: Dict[QuestionType, SelectionResult] = {}
        for qtype in QuestionType:
            results[qtype] = self._select_type(
                chapters, chapter_ids, qtype, targets.for_type(qtype), level, rng, known
            )
            result = results[qtype]
            if result.shortfall:
                warnings.append(
                    f"Only {result.count} of {result.requested} {qtype.value} questions "
                    f"available ({level.value})"
                )

        for warning in warnings:
            logger.warning(warning)

        paper = AssembledPaper(
            class_id=class_id,
            subject=subject,
            chapter_ids=chapter_ids,
            difficulty=level,
            mcqs=results[QuestionType.MCQ],
            shorts=results[QuestionType.SHORT],
            longs=results[QuestionType.LONG],
            warnings=tuple(warnings),
            template_id=template_id,
        )
        logger.info(
            f"Assembled {class_id}/{subject}: {paper.mcqs.count} MCQ, "
            f"{paper.shorts.count} short, {paper.longs.count} long"
        )
        return paper

    def _select_type(
        self,
        chapters: Sequence[Chapter],
        chapter_ids: Sequence[str],
        question_type: QuestionType,
        target: int,
        difficulty: DifficultyFilter,
        rng: random.Random,
        chapter_numbers: Dict[str, int],
    ) -> SelectionResult:
        pool = questions_by_type(chapters, chapter_ids, question_type)
        filtered = filter_by_difficulty(pool, difficulty)
        logger.debug(
            f"{question_type.value}: pool {len(pool)}, "
            f"after {difficulty.value} filter {len(filtered)}, target {target}"
        )

        selector = Selector(
            pool=filtered,
            target=target,
            chapter_ids=chapter_ids,
            config=self.selection_config,
            rng=rng,
            chapter_numbers=chapter_numbers,
        )
        picked = selector.run()
        return SelectionResult(
            question_type=question_type,
            questions=tuple(picked),
            requested=max(0, target),
            available=len({q.id for q in filtered}),
        )
