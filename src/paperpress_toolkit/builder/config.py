"""
Module: builder.config

Purpose:
    Configuration dataclass for paper assembly. Immutable configuration
    with validation on construction.

Key Classes:
    - BuilderConfig: Data root, selection tuning and schema checking

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.assembler: PaperAssembler
    - paperpress_toolkit.cli
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .selection.config import DEFAULT_PRIORITY_RATIO, SelectionConfig

logger = logging.getLogger(__name__)

DATA_ROOT_ENV = "PAPERPRESS_DATA_ROOT"
SEED_ENV = "PAPERPRESS_SEED"
DEFAULT_DATA_ROOT = Path("data") / "questions"


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for assembling papers (immutable).

    Attributes:
        data_root: Directory holding <class_id>/<subject>.json shards
        priority_ratio: Fraction of each target drawn from "Exercise" questions
        seed: Random seed for reproducible papers (None = new paper each call)
        validate_schema: Check shards against the JSON schema before parsing

    Example:
        >>> config = BuilderConfig(data_root=Path("data/questions"), seed=42)
        >>> config.selection_config().priority_ratio
        0.5
    """

    data_root: Path = DEFAULT_DATA_ROOT
    priority_ratio: float = DEFAULT_PRIORITY_RATIO
    seed: Optional[int] = None
    validate_schema: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not (0.0 <= self.priority_ratio <= 1.0):
            raise ValueError(
                f"priority_ratio must be between 0 and 1: {self.priority_ratio}"
            )
        # Accept plain strings for data_root
        object.__setattr__(self, "data_root", Path(self.data_root))

    def selection_config(self) -> SelectionConfig:
        return SelectionConfig(priority_ratio=self.priority_ratio, seed=self.seed)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> BuilderConfig:
        """
        Build a config from PAPERPRESS_DATA_ROOT and PAPERPRESS_SEED.

        Keyword overrides win over the environment.

        Raises:
            ValueError: If PAPERPRESS_SEED is not an integer
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get(DATA_ROOT_ENV):
            values["data_root"] = Path(env[DATA_ROOT_ENV])
        if env.get(SEED_ENV):
            try:
                values["seed"] = int(env[SEED_ENV])
            except ValueError:
                raise ValueError(f"{SEED_ENV} must be an integer: {env[SEED_ENV]!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls(**values)
        logger.debug(f"Builder config: {config}")
        return config
