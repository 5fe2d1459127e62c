"""
Schemas Package

JSON schema definitions and validation utilities for subject shards.
"""

from .validator import (
    validate_subject,
    iter_subject_errors,
    SchemaValidationError,
)

__all__ = [
    "validate_subject",
    "iter_subject_errors",
    "SchemaValidationError",
]
