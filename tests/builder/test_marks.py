"""
Unit tests for marks calculation.

Verified: 2026-10-18
"""

import pytest

from paperpress_toolkit.builder.marks import (
    calculate_marks,
    format_marks_display,
    generate_attempt_text,
    validate_marks,
)
from paperpress_toolkit.core.models import QuestionType


@pytest.fixture
def paper_questions(make_chapter):
    """12 MCQs, 15 shorts and 3 longs."""
    chapter = make_chapter(
        1, {QuestionType.MCQ: (6, 6), QuestionType.SHORT: (8, 7), QuestionType.LONG: (2, 1)}
    )
    return chapter.mcqs, chapter.shorts, chapter.longs


class TestCalculateMarks:
    """Tests for calculate_marks."""

    def test_calculate_when_defaults_then_board_marks(self, paper_questions):
        """Default marks are 1 / 2 / 5."""
        breakdown = calculate_marks(*paper_questions)

        assert breakdown.mcq.total == 12
        assert breakdown.short.total == 30
        assert breakdown.long.total == 15
        assert breakdown.total == 57
        assert breakdown.attempt_total == 57

    def test_calculate_when_attempt_rules_then_attempt_total_reduced(self, paper_questions):
        """Attempt counts limit the scoreable marks, not the printed total."""
        # Act
        breakdown = calculate_marks(*paper_questions, short_attempt=10, long_attempt=2)

        # Assert
        assert breakdown.short.attempt_count == 10
        assert breakdown.short.attempted_marks == 20
        assert breakdown.long.attempted_marks == 10
        assert breakdown.total == 57
        assert breakdown.attempt_total == 12 + 20 + 10

    def test_calculate_when_attempt_exceeds_selected_then_capped(self, paper_questions):
        """A short-filled paper cannot score more than it prints."""
        breakdown = calculate_marks(*paper_questions, short_attempt=20, long_attempt=5)

        assert breakdown.short.attempt_count == 15
        assert breakdown.long.attempt_count == 3
        assert breakdown.attempt_total == breakdown.total

    def test_calculate_when_custom_marks_then_override_defaults(self, paper_questions):
        breakdown = calculate_marks(*paper_questions, custom_marks={"long": 8, QuestionType.MCQ: 2})

        assert breakdown.long.marks_per_question == 8
        assert breakdown.mcq.total == 24
        assert breakdown.short.marks_per_question == 2

    def test_calculate_when_custom_mark_zero_then_default_kept(self, paper_questions):
        breakdown = calculate_marks(*paper_questions, custom_marks={"short": 0})

        assert breakdown.short.marks_per_question == 2

    def test_calculate_when_empty_then_zero(self):
        breakdown = calculate_marks([], [], [])

        assert breakdown.total == 0
        assert breakdown.for_type("mcq").count == 0


class TestValidateMarks:
    def test_validate_when_header_matches_then_valid(self, paper_questions):
        result = validate_marks(57, *paper_questions)

        assert result.valid
        assert result.mismatch == 0
        assert result.error is None

    def test_validate_when_header_differs_then_mismatch_message(self, paper_questions):
        result = validate_marks(60, *paper_questions)

        assert not result.valid
        assert result.mismatch == 3
        assert result.error == "Total marks mismatch: Header shows 60, but calculated total is 57"


class TestDisplayText:
    def test_format_display_when_all_types_then_joined_parts(self, paper_questions):
        text = format_marks_display(calculate_marks(*paper_questions))

        assert text == "MCQ: 12 × 1 = 12 | Short: 15 × 2 = 30 | Long: 3 × 5 = 15 | Total: 57 marks"

    def test_format_display_when_no_longs_then_long_omitted(self, paper_questions):
        mcqs, shorts, _ = paper_questions

        text = format_marks_display(calculate_marks(mcqs, shorts, []))

        assert "Long" not in text
        assert text.endswith("Total: 42 marks")

    @pytest.mark.parametrize(
        "attempt,total,marks,expected",
        [
            (5, 8, 2, "Attempt any 5 (5 × 2 = 10 Marks)"),
            (3, 3, 5, "Attempt all (3 × 5 = 15 Marks)"),
        ],
    )
    def test_attempt_text_when_counts_given_then_board_wording(self, attempt, total, marks, expected):
        assert generate_attempt_text(attempt, total, marks) == expected
