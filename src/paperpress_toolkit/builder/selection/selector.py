"""
Module: builder.selection.selector

Purpose:
    Main question selection algorithm. Picks an exact number of questions
    of one type from a pool, spread fairly across the chapters in scope
    and biased toward textbook "Exercise" questions.

Key Functions:
    - select_questions(): Main entry point for selection

Key Classes:
    - Selector: Orchestrates the selection algorithm

Algorithm:
    1. Nothing requested or nothing available -> empty
    2. Target covers the whole pool -> whole pool, shuffled
    3. Resolve chapter ordinals for the chapters in scope
    4. Partition the pool into Exercise / Additional
    5. Per-chapter quotas from each partition, shuffle, truncate to target
    6. Backfill any shortfall from the unselected remainder
    7. Return (ids tracked throughout, so no duplicates)

Dependencies:
    - paperpress_toolkit.core.models: QuestionRecord
    - paperpress_toolkit.common.curriculum: Chapter ordinal resolution
    - builder.selection.config: SelectionConfig

Used By:
    - builder.assembler: PaperAssembler
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from paperpress_toolkit.common.curriculum import resolve_chapter_numbers
from paperpress_toolkit.core.models import QuestionRecord

from .config import SelectionConfig

logger = logging.getLogger(__name__)


def select_questions(
    pool: Sequence[QuestionRecord],
    target: int,
    chapter_ids: Sequence[str] = (),
    priority_ratio: float = 0.5,
    rng: Optional[random.Random] = None,
    *,
    chapter_numbers: Optional[Mapping[str, int]] = None,
) -> List[QuestionRecord]:
    """
    Select `target` unique questions from a pool.

    Main entry point for the selection algorithm.

    Args:
        pool: Chapter- and difficulty-filtered questions of one type
        target: Number of questions wanted (negative is treated as 0)
        chapter_ids: Chapter ids in scope, used for per-chapter fairness
        priority_ratio: Fraction of target preferred from "Exercise" questions
        rng: Random source (None = fresh unseeded generator)
        chapter_numbers: Optional explicit chapter id -> ordinal mapping;
            ids missing from it fall back to their numeric suffix

    Returns:
        New list of min(target, len(pool)) records

    Invariants:
        - No duplicate ids in the result
        - Every returned record comes from pool
        - pool is not modified

    Example:
        >>> picked = select_questions(pool, 10, ["9_phy_ch_1", "9_phy_ch_2"], rng=random.Random(7))
        >>> len(picked)
        10
    """
    selector = Selector(
        pool=pool,
        target=target,
        chapter_ids=chapter_ids,
        config=SelectionConfig(priority_ratio=priority_ratio),
        rng=rng,
        chapter_numbers=chapter_numbers,
    )
    return selector.run()


@dataclass
class Selector:
    """
    Question selection orchestrator for one question type.

    Attributes:
        pool: Available questions
        target: Requested count
        chapter_ids: Chapter ids in scope
        config: Selection configuration
        rng: Random source; defaults to one seeded from config.seed
        chapter_numbers: Optional explicit chapter id -> ordinal mapping
    """

    pool: Sequence[QuestionRecord]
    target: int
    chapter_ids: Sequence[str] = ()
    config: SelectionConfig = field(default_factory=SelectionConfig)
    rng: Optional[random.Random] = None
    chapter_numbers: Optional[Mapping[str, int]] = None

    # Internal state
    _candidates: List[QuestionRecord] = field(init=False, default_factory=list)
    _selected: List[QuestionRecord] = field(init=False, default_factory=list)
    _selected_ids: Set[str] = field(init=False, default_factory=set)

    def __post_init__(self) -> None:
        """Initialize internal state."""
        if self.rng is None:
            self.rng = self.config.make_rng()
        # Drop repeated ids so "whole pool" never yields duplicates
        unique: Dict[str, QuestionRecord] = {}
        for question in self.pool:
            unique.setdefault(question.id, question)
        self._candidates = list(unique.values())
        self._selected = []
        self._selected_ids = set()

    def run(self) -> List[QuestionRecord]:
        """
        Execute the selection algorithm.

        Returns:
            Selected records in paper order
        """
        target = max(0, self.target)
        pool = self._candidates

        # Step 1: Nothing to do
        if target == 0 or not pool:
            return []

        # Step 2: Whole pool, order still randomised
        if target >= len(pool):
            everything = self._shuffled(pool)
            logger.debug(f"Target {target} covers pool of {len(pool)}; returning all")
            return everything

        # Step 3: Chapter ordinals
        ordinals = resolve_chapter_numbers(self.chapter_ids, self.chapter_numbers)

        # Steps 4-5: Fair per-chapter picks
        if ordinals:
            self._fill_chapter_quotas(target, ordinals)
        else:
            logger.debug("No chapter ordinals resolved; sampling uniformly")

        # Step 6: Backfill
        if len(self._selected) < target:
            self._backfill(target)

        return list(self._selected)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _shuffled(self, questions: Sequence[QuestionRecord]) -> List[QuestionRecord]:
        """Shuffled copy; input is left untouched."""
        copy = list(questions)
        self.rng.shuffle(copy)
        return copy

    def _take(self, question: QuestionRecord) -> None:
        if question.id not in self._selected_ids:
            self._selected_ids.add(question.id)
            self._selected.append(question)

    # ─────────────────────────────────────────────────────────────────────────
    # Steps 4-5: Topic partition and per-chapter quotas
    # ─────────────────────────────────────────────────────────────────────────

    def _fill_chapter_quotas(self, target: int, ordinals: Sequence[int]) -> None:
        """
        Take per-chapter quotas from the Exercise and Additional partitions.

        Quotas are rounded up, so the combined candidate list usually
        overshoots target. It is shuffled before truncation so Exercise
        and Additional picks have equal survival odds.
        """
        exercise = [q for q in self._candidates if q.is_exercise]
        additional = [q for q in self._candidates if not q.is_exercise]

        exercise_target = self.config.exercise_target(target)
        additional_target = target - exercise_target
        chapter_count = len(ordinals)
        per_chapter_exercise = math.ceil(exercise_target / chapter_count)
        per_chapter_additional = math.ceil(additional_target / chapter_count)

        logger.debug(
            f"Quotas for target {target} over {chapter_count} chapters: "
            f"exercise {per_chapter_exercise}/chapter, "
            f"additional {per_chapter_additional}/chapter"
        )

        picks: List[QuestionRecord] = []
        for number in ordinals:
            chapter_exercise = [q for q in exercise if q.chapter_number == number]
            chapter_additional = [q for q in additional if q.chapter_number == number]

            picks.extend(self._shuffled(chapter_exercise)[:per_chapter_exercise])
            picks.extend(self._shuffled(chapter_additional)[:per_chapter_additional])

        for question in self._shuffled(picks)[:target]:
            self._take(question)

        logger.debug(f"Chapter quotas yielded {len(self._selected)}/{target}")

    # ─────────────────────────────────────────────────────────────────────────
    # Step 6: Backfill
    # ─────────────────────────────────────────────────────────────────────────

    def _backfill(self, target: int) -> None:
        """Top up from the unselected remainder, ignoring chapter and topic."""
        remaining = target - len(self._selected)
        complement = [q for q in self._candidates if q.id not in self._selected_ids]
        for question in self._shuffled(complement)[:remaining]:
            self._take(question)

        if len(self._selected) < target:
            logger.debug(
                f"Backfill exhausted pool: {len(self._selected)}/{target} selected"
            )
