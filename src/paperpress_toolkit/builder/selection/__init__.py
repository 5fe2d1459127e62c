"""
Module: builder.selection

Purpose:
    Question selection for building papers. Picks an exact count of
    questions per type, spread across chapters and biased toward
    textbook exercise questions.

Key Functions:
    - select_questions(): Main entry point for selection
    - filter_by_difficulty(): Reduce a pool to one difficulty

Key Classes:
    - SelectionConfig: Configuration for selection algorithm
    - Selector: Main selection orchestrator
    - DifficultyFilter: Requested paper difficulty

Used By:
    - builder.assembler: PaperAssembler
"""

from .config import SelectionConfig, DEFAULT_PRIORITY_RATIO
from .difficulty import DifficultyFilter, filter_by_difficulty
from .selector import select_questions, Selector

__all__ = [
    "SelectionConfig",
    "DEFAULT_PRIORITY_RATIO",
    "DifficultyFilter",
    "filter_by_difficulty",
    "select_questions",
    "Selector",
]
