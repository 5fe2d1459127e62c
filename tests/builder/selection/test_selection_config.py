"""
Unit tests for SelectionConfig.

Verified: 2026-10-18
"""

import pytest

from paperpress_toolkit.builder.selection import SelectionConfig


class TestSelectionConfig:
    """Tests for SelectionConfig validation and helpers."""

    @pytest.mark.parametrize("ratio", [-0.1, 1.5])
    def test_create_when_ratio_out_of_range_then_raises(self, ratio):
        """Ratio must be within [0, 1]."""
        with pytest.raises(ValueError, match="priority_ratio"):
            SelectionConfig(priority_ratio=ratio)

    @pytest.mark.parametrize(
        "ratio,target,exercise,additional",
        [
            (0.5, 10, 5, 5),
            (0.5, 7, 4, 3),
            (0.3, 10, 3, 7),
            (0.0, 10, 0, 10),
            (1.0, 10, 10, 0),
            (0.5, -4, 0, 0),
        ],
    )
    def test_targets_when_ratio_applied_then_exercise_rounded_up(self, ratio, target, exercise, additional):
        """Exercise share rounds up; the rest is Additional."""
        config = SelectionConfig(priority_ratio=ratio)

        assert config.exercise_target(target) == exercise
        assert config.additional_target(target) == additional

    def test_make_rng_when_seeded_then_reproducible(self):
        config = SelectionConfig(seed=99)

        assert config.make_rng().random() == config.make_rng().random()

    def test_create_when_frozen_then_immutable(self):
        config = SelectionConfig()

        with pytest.raises(AttributeError):
            config.priority_ratio = 0.7
