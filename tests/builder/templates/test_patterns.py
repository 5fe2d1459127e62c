"""
Unit tests for board paper patterns.

Verified: 2026-10-18
"""

import pytest

from paperpress_toolkit.builder.templates import (
    PAPER_PATTERNS,
    SectionType,
    distribute_longs,
    distribute_shorts,
    resolve_paper_pattern,
)
from paperpress_toolkit.core.models import QuestionType


class TestResolvePaperPattern:
    """Tests for pattern resolution."""

    @pytest.mark.parametrize(
        "class_id,subject,key",
        [
            ("9th", "Physics", "matric_science"),
            ("10th", "Biology", "matric_science"),
            ("9th", "Computer", "matric_computer"),
            ("10th", "Maths", "matric_mathematics"),
            ("9th", "english", "matric_english"),
            ("11th", "Chemistry", "intermediate_science"),
            ("12th", "Mathematics", "intermediate_mathematics"),
            ("12th", "English", "intermediate_english"),
        ],
    )
    def test_resolve_when_class_and_subject_then_expected_pattern(self, class_id, subject, key):
        assert resolve_paper_pattern(class_id, subject) is PAPER_PATTERNS[key]

    def test_resolve_when_matric_science_then_board_structure(self):
        """Matric science: 12 MCQs, three short sections, one long section, 60 marks."""
        pattern = resolve_paper_pattern("9th", "Physics")

        assert pattern.total_marks == 60
        assert pattern.time_allowed == "2 Hours"
        assert len(pattern.sections_of(SectionType.SHORT)) == 3
        assert pattern.sections_of(SectionType.MCQ)[0].total_questions == 12


class TestPatternSections:
    """Section-level consistency across every pattern."""

    @pytest.mark.parametrize("key", sorted(PAPER_PATTERNS))
    def test_sections_when_any_pattern_then_marks_match_formula(self, key):
        """Section marks equal attempt count times marks per question."""
        for section in PAPER_PATTERNS[key].sections:
            assert section.total_marks == section.attempt_count * section.marks_per_question
            assert section.attempt_count <= section.total_questions

    @pytest.mark.parametrize("key", sorted(PAPER_PATTERNS))
    def test_sections_when_any_pattern_then_numbered_in_order(self, key):
        numbers = [s.q_number for s in PAPER_PATTERNS[key].sections]

        assert numbers == list(range(1, len(numbers) + 1))

    def test_section_type_when_writing_then_no_question_type(self):
        assert SectionType.WRITING.question_type is None
        assert SectionType.LONG.question_type is QuestionType.LONG

    def test_marks_formula_when_short_section_then_display_string(self):
        section = resolve_paper_pattern("9th", "Physics").sections[1]

        assert section.marks_formula == "5 × 2 = 10"

    def test_scaled_when_halved_then_counts_rounded_up(self):
        """Halving 5 long questions gives 3, not 2."""
        section = resolve_paper_pattern("11th", "Physics").sections_of(SectionType.LONG)[0]

        halved = section.scaled(2)

        assert halved.total_questions == 3
        assert halved.attempt_count == 2
        assert halved.total_marks == 12
        assert halved.marks_per_question == section.marks_per_question


class TestDistribute:
    """Tests for section distribution helpers."""

    def test_distribute_shorts_when_more_than_first_section_then_split_in_order(self, make_chapter):
        """Each section fills up to its size; the last takes the rest."""
        # Arrange
        pattern = resolve_paper_pattern("9th", "Physics")
        shorts = list(make_chapter(1, {QuestionType.SHORT: (10, 10)}).shorts)[:20]

        # Act
        groups = distribute_shorts(pattern, shorts)

        # Assert
        assert [len(questions) for _, questions in groups] == [8, 8, 4]
        assert [q for _, qs in groups for q in qs] == shorts

    def test_distribute_shorts_when_more_than_capacity_then_last_takes_remainder(self, make_chapter):
        pattern = resolve_paper_pattern("9th", "Physics")
        shorts = list(make_chapter(1, {QuestionType.SHORT: (15, 15)}).shorts)

        groups = distribute_shorts(pattern, shorts)

        assert [len(questions) for _, questions in groups] == [8, 8, 14]

    def test_distribute_shorts_when_no_shorts_then_empty(self):
        assert distribute_shorts(resolve_paper_pattern("9th", "Physics"), []) == []

    def test_distribute_longs_when_pattern_has_long_section_then_full_list(self, make_chapter):
        pattern = resolve_paper_pattern("9th", "Physics")
        longs = list(make_chapter(1).longs)

        groups = distribute_longs(pattern, longs)

        assert len(groups) == 1
        assert groups[0][1] == longs

    def test_distribute_longs_when_english_then_no_long_sections(self, make_chapter):
        pattern = resolve_paper_pattern("9th", "English")

        assert distribute_longs(pattern, list(make_chapter(1).longs)) == []
