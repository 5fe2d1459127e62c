import json
import sys
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest

# Add src to sys.path so we can import paperpress_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from paperpress_toolkit.core.models import (  # noqa: E402
    ADDITIONAL_TOPIC,
    EXERCISE_TOPIC,
    Chapter,
    Difficulty,
    QuestionRecord,
    QuestionType,
)

DIFFICULTY_CYCLE = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)


def build_question(
    qid: str,
    question_type: QuestionType = QuestionType.MCQ,
    chapter_number: int = 1,
    topic: Optional[str] = EXERCISE_TOPIC,
    difficulty: Difficulty = Difficulty.EASY,
    chapter_id: Optional[str] = None,
    text: Optional[str] = None,
) -> QuestionRecord:
    """Create a valid record; MCQs get four options."""
    is_mcq = question_type is QuestionType.MCQ
    return QuestionRecord(
        id=qid,
        question_type=question_type,
        text=text or f"Question {qid}",
        difficulty=difficulty,
        marks={QuestionType.MCQ: 1, QuestionType.SHORT: 2, QuestionType.LONG: 5}[question_type],
        chapter_number=chapter_number,
        chapter_id=chapter_id or f"9_phy_ch_{chapter_number}",
        chapter_name=f"Chapter {chapter_number}",
        topic=topic,
        options=("A", "B", "C", "D") if is_mcq else (),
        correct_option=0 if is_mcq else None,
    )


def build_chapter(
    number: int,
    counts: Optional[Dict[QuestionType, Tuple[int, int]]] = None,
    chapter_id: Optional[str] = None,
) -> Chapter:
    """
    Create a chapter with (exercise, additional) questions per type.

    Difficulty cycles easy / medium / hard across each collection.
    """
    counts = counts or {
        QuestionType.MCQ: (6, 6),
        QuestionType.SHORT: (6, 6),
        QuestionType.LONG: (2, 2),
    }
    chapter_id = chapter_id or f"9_phy_ch_{number}"
    collections: Dict[QuestionType, tuple] = {}
    for qtype in QuestionType:
        exercise, additional = counts.get(qtype, (0, 0))
        records = []
        for i in range(exercise + additional):
            records.append(
                build_question(
                    f"9_phy_ch{number}_{qtype.value}_{i + 1}",
                    question_type=qtype,
                    chapter_number=number,
                    chapter_id=chapter_id,
                    topic=EXERCISE_TOPIC if i < exercise else ADDITIONAL_TOPIC,
                    difficulty=DIFFICULTY_CYCLE[i % 3],
                )
            )
        collections[qtype] = tuple(records)
    return Chapter(
        id=chapter_id,
        number=number,
        name=f"Chapter {number}",
        mcqs=collections[QuestionType.MCQ],
        shorts=collections[QuestionType.SHORT],
        longs=collections[QuestionType.LONG],
    )


def shard_dict(chapters: Iterable[Chapter], class_id: str = "9th", subject: str = "Physics") -> dict:
    """Serialize chapters into the on-disk shard layout."""
    return {
        "class": class_id,
        "subject": subject,
        "chapters": [
            {
                "id": chapter.id,
                "number": chapter.number,
                "name": chapter.name,
                "mcqs": [q.to_dict() for q in chapter.mcqs],
                "shortQuestions": [q.to_dict() for q in chapter.shorts],
                "longQuestions": [q.to_dict() for q in chapter.longs],
            }
            for chapter in chapters
        ],
    }


# Common test fixtures
@pytest.fixture
def make_question():
    """Factory for valid QuestionRecords."""
    return build_question


@pytest.fixture
def make_chapter():
    """Factory for chapters with exercise/additional questions per type."""
    return build_chapter


@pytest.fixture
def sample_chapters() -> Tuple[Chapter, ...]:
    """Three physics chapters with 12 MCQs, 12 shorts and 4 longs each."""
    return tuple(build_chapter(n) for n in (1, 2, 3))


@pytest.fixture
def write_shard(tmp_path: Path):
    """Write shard data to <tmp>/questions/<class>/<subject>.json."""
    root = tmp_path / "questions"

    def _write(class_id: str, subject: str, data) -> Path:
        path = root / class_id / f"{subject.lower()}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    _write.root = root
    return _write


@pytest.fixture
def data_root(write_shard, sample_chapters) -> Path:
    """Question bank root with a 9th/Physics shard of sample_chapters."""
    write_shard("9th", "Physics", shard_dict(sample_chapters))
    return write_shard.root


@pytest.fixture
def to_shard():
    """Serializer from chapters to shard JSON."""
    return shard_dict
