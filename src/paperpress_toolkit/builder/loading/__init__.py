"""
Module: builder.loading

Purpose:
    Subject shard loading and parsing. Turns JSON question banks into
    frozen Chapter/QuestionRecord models and caches them per
    (class, subject).

Key Functions:
    - parse_subject(): Decoded shard -> SubjectData
    - questions_by_type(): Flatten chapters into a per-type pool

Key Classes:
    - QuestionRepository: Async cached shard access

Used By:
    - builder.assembler: PaperAssembler
"""

from .parser import parse_subject, parse_subject_file, ParseError
from .repository import QuestionRepository, questions_by_type, LoaderError

__all__ = [
    "parse_subject",
    "parse_subject_file",
    "ParseError",
    "QuestionRepository",
    "questions_by_type",
    "LoaderError",
]
