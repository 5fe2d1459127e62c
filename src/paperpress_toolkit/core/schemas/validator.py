"""
Schema Validation Utilities

Validates subject shard JSON against the shipped JSON Schema before any
model is built from it.

Shards are hand-maintained data files, so every load is validated:
- JSON Schema definitions live next to this module (`*.schema.json`)
- `validate_subject()` reports the first failing path
- `iter_subject_errors()` lists every violation for tooling
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import jsonschema
from jsonschema.exceptions import best_match


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class SchemaValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _format_path(error: jsonschema.ValidationError) -> str:
    parts = []
    for item in error.absolute_path:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}" if parts else str(item))
    return "".join(parts)


def iter_subject_errors(data: Any) -> Iterator[str]:
    """
    Yield a readable message for every schema violation in a shard.

    Args:
        data: Decoded shard JSON

    Yields:
        "<path>: <message>" strings, ordered by path
    """
    validator = jsonschema.Draft7Validator(_load_schema("subject"))
    for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path))):
        path = _format_path(error) or "<root>"
        yield f"{path}: {error.message}"


def validate_subject(data: Any) -> None:
    """
    Validate a decoded subject shard.

    Args:
        data: Decoded shard JSON

    Raises:
        SchemaValidationError: If data violates the subject schema
    """
    validator = jsonschema.Draft7Validator(_load_schema("subject"))
    error = best_match(validator.iter_errors(data))
    if error is None:
        return

    # Collect everything so callers can show a full report
    errors = list(iter_subject_errors(data))
    raise SchemaValidationError(
        f"Schema validation failed: {error.message}",
        path=_format_path(error),
        errors=errors,
    )
