"""
Unit tests for the difficulty filter.

Verified: 2026-10-18
"""

import pytest

from paperpress_toolkit.builder.selection import DifficultyFilter, filter_by_difficulty
from paperpress_toolkit.core.models import Difficulty


class TestDifficultyFilterParse:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("easy", DifficultyFilter.EASY),
            (" HARD ", DifficultyFilter.HARD),
            ("all", DifficultyFilter.MIXED),
            (Difficulty.MEDIUM, DifficultyFilter.MEDIUM),
            (DifficultyFilter.MIXED, DifficultyFilter.MIXED),
        ],
    )
    def test_parse_when_known_value_then_filter(self, value, expected):
        assert DifficultyFilter.parse(value) is expected

    def test_parse_when_unknown_then_raises(self):
        with pytest.raises(ValueError, match="Unknown difficulty"):
            DifficultyFilter.parse("extreme")


class TestFilterByDifficulty:
    """Tests for filter_by_difficulty."""

    def test_filter_when_mixed_then_copy_of_pool(self, make_chapter):
        """Mixed passes every question through as a new list."""
        # Arrange
        pool = list(make_chapter(1).mcqs)

        # Act
        result = filter_by_difficulty(pool, "mixed")

        # Assert
        assert result == pool
        assert result is not pool

    def test_filter_when_level_given_then_only_that_level_in_pool_order(self, make_chapter):
        pool = list(make_chapter(1).mcqs)

        result = filter_by_difficulty(pool, DifficultyFilter.HARD)

        assert [q.id for q in result] == [q.id for q in pool if q.difficulty is Difficulty.HARD]
        assert len(result) == 4

    def test_filter_when_no_match_then_empty(self, make_question):
        pool = [make_question("q1", difficulty=Difficulty.EASY)]

        assert filter_by_difficulty(pool, "hard") == []
