"""Unit tests for the pure XP, level and streak rules."""

from datetime import datetime, timedelta

import pytest

from helloworld.progress.gamification import (
    LEVEL_THRESHOLDS, calculate_level, next_streak, pronunciation_xp,
    round_half_up, unique_in_order, xp_to_next_level
)


class TestRounding:
    @pytest.mark.parametrize("value,expected", [
        (8.5, 9),
        (7.5, 8),
        (0.5, 1),
        (0.4, 0),
        (8.49, 8),
        (10.0, 10),
        (-2.5, -3),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("accuracy,xp", [(85, 9), (75, 8), (100, 10), (0, 0), (4, 0), (5, 1)])
    def test_pronunciation_xp(self, accuracy, xp):
        assert pronunciation_xp(accuracy) == xp


class TestLevels:
    def test_level_one_at_zero(self):
        assert calculate_level(0) == 1

    def test_threshold_boundaries(self):
        assert calculate_level(99) == 1
        assert calculate_level(100) == 2
        assert calculate_level(249) == 2
        assert calculate_level(250) == 3

    def test_top_level(self):
        assert calculate_level(LEVEL_THRESHOLDS[-1]) == len(LEVEL_THRESHOLDS)
        assert calculate_level(10 ** 6) == len(LEVEL_THRESHOLDS)

    def test_xp_to_next_level(self):
        assert xp_to_next_level(0) == 100
        assert xp_to_next_level(240) == 10
        assert xp_to_next_level(LEVEL_THRESHOLDS[-1]) is None


class TestStreaks:
    now = datetime(2026, 3, 10, 9, 30)

    def test_first_activity(self):
        assert next_streak(None, 0, self.now) == 1

    def test_same_day_keeps_streak(self):
        assert next_streak(self.now - timedelta(hours=2), 4, self.now) == 4

    def test_same_day_never_below_one(self):
        assert next_streak(self.now, 0, self.now) == 1

    def test_next_day_extends(self):
        yesterday_late = datetime(2026, 3, 9, 23, 59)
        assert next_streak(yesterday_late, 4, self.now) == 5

    def test_gap_resets(self):
        assert next_streak(self.now - timedelta(days=2), 9, self.now) == 1


def test_unique_in_order():
    assert unique_in_order(["Japan", "Peru", "Japan", "Kenya", "Peru"]) == ["Japan", "Peru", "Kenya"]
    assert unique_in_order([]) == []
