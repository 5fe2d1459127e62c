"""
Unit tests for shard parsing.

Verified: 2026-10-18
"""

import json

import pytest

from paperpress_toolkit.builder.loading.parser import (
    ParseError,
    parse_subject,
    parse_subject_file,
)
from paperpress_toolkit.core.models import QuestionType
from paperpress_toolkit.core.schemas import SchemaValidationError


class TestParseSubject:
    """Tests for parse_subject."""

    def test_parse_when_valid_shard_then_chapters_in_file_order(self, sample_chapters, to_shard):
        """Parsed chapters should equal the chapters that were serialized."""
        # Arrange
        data = to_shard(sample_chapters)

        # Act
        subject = parse_subject(data, class_id="9th", subject="Physics")

        # Assert
        assert subject.chapters == sample_chapters
        assert subject.class_id == "9th"
        assert subject.subject == "Physics"

    def test_parse_when_class_missing_then_argument_used(self, sample_chapters, to_shard):
        data = to_shard(sample_chapters)
        del data["class"]
        del data["subject"]

        subject = parse_subject(data, class_id="10th", subject="Chemistry")

        assert subject.class_id == "10th"
        assert subject.subject == "Chemistry"

    def test_parse_when_schema_violation_then_schema_error(self):
        """Schema violations surface as SchemaValidationError."""
        with pytest.raises(SchemaValidationError):
            parse_subject({"chapters": [{"id": "c1"}]}, class_id="9th", subject="Physics")

    def test_parse_when_duplicate_chapter_id_then_parse_error(self, make_chapter, to_shard):
        data = to_shard([make_chapter(1), make_chapter(2, chapter_id="9_phy_ch_1")])

        with pytest.raises(ParseError, match="Duplicate chapter id"):
            parse_subject(data, class_id="9th", subject="Physics")

    def test_parse_when_duplicate_question_id_within_type_then_parse_error(self, make_chapter, to_shard):
        """Ids must be unique per type across the shard."""
        # Arrange
        data = to_shard([make_chapter(1)])
        mcqs = data["chapters"][0]["mcqs"]
        mcqs[1]["id"] = mcqs[0]["id"]

        # Act / Assert
        with pytest.raises(ParseError, match="Duplicate mcq id"):
            parse_subject(data, class_id="9th", subject="Physics")

    def test_parse_when_same_id_in_different_types_then_allowed(self, make_chapter, to_shard):
        """Types are separate id namespaces."""
        data = to_shard([make_chapter(1)])
        data["chapters"][0]["shortQuestions"][0]["id"] = data["chapters"][0]["mcqs"][0]["id"]

        subject = parse_subject(data, class_id="9th", subject="Physics")

        assert subject.chapters[0].shorts[0].id == subject.chapters[0].mcqs[0].id

    def test_parse_when_invalid_record_without_validation_then_parse_error(self, make_chapter, to_shard):
        """Record-level errors are wrapped with their location."""
        # Arrange
        data = to_shard([make_chapter(1)])
        data["chapters"][0]["mcqs"][3]["correctOption"] = 9

        # Act
        with pytest.raises(ParseError) as exc_info:
            parse_subject(data, class_id="9th", subject="Physics", validate=False)

        # Assert
        assert "mcqs[3]" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_parse_when_collections_missing_then_empty_tuples(self):
        data = {"chapters": [{"id": "9_phy_ch_1", "number": 1, "name": "Units"}]}

        subject = parse_subject(data, class_id="9th", subject="Physics")

        chapter = subject.chapters[0]
        assert chapter.questions(QuestionType.MCQ) == ()
        assert chapter.shorts == () and chapter.longs == ()

    def test_parse_when_chapter_entry_not_object_then_parse_error(self):
        """Without schema validation, non-object chapters still fail as ParseError."""
        with pytest.raises(ParseError, match="Chapter entry 0 must be an object"):
            parse_subject({"chapters": ["not-a-chapter"]}, class_id="9th", subject="Physics", validate=False)

    def test_parse_when_question_entry_not_object_then_parse_error(self):
        """Non-object question entries are reported with their location."""
        # Arrange
        data = {"chapters": [{"id": "9_phy_ch_1", "number": 1, "name": "Units", "mcqs": ["bad"]}]}

        # Act
        with pytest.raises(ParseError) as exc_info:
            parse_subject(data, class_id="9th", subject="Physics", validate=False)

        # Assert
        assert "mcqs[0]" in str(exc_info.value)

    def test_parse_when_chapter_number_is_string_then_coerced_everywhere(self, make_chapter, to_shard):
        """The chapter and its questions carry the same integer ordinal."""
        # Arrange
        data = to_shard([make_chapter(2)])
        data["chapters"][0]["number"] = "2"

        # Act
        subject = parse_subject(data, class_id="9th", subject="Physics", validate=False)

        # Assert
        chapter = subject.chapters[0]
        assert chapter.number == 2
        assert all(q.chapter_number == 2 for q in chapter.iter_questions())


class TestParseSubjectFile:
    """Tests for parse_subject_file."""

    def test_parse_file_when_invalid_json_then_parse_error(self, tmp_path):
        path = tmp_path / "physics.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_subject_file(path, class_id="9th", subject="Physics")

    def test_parse_file_when_valid_then_subject_data(self, tmp_path, sample_chapters, to_shard):
        path = tmp_path / "physics.json"
        path.write_text(json.dumps(to_shard(sample_chapters)), encoding="utf-8")

        subject = parse_subject_file(path, class_id="9th", subject="Physics")

        assert len(subject.chapters) == 3
