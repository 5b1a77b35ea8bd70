"""Unit tests for the XP level table and the streak rule."""

from __future__ import annotations

from datetime import date

import pytest

from bibliafs.gamification import LEVELS, level_for_xp, level_info, next_streak, progress_to_next_level
from bibliafs.gamification.levels import MAX_LEVEL


class TestLevels:
    def test_table_has_fifty_ascending_levels(self):
        assert MAX_LEVEL == 50
        thresholds = [entry.min_xp for entry in LEVELS]
        assert thresholds == sorted(thresholds)
        assert LEVELS[0].min_xp == 0

    @pytest.mark.parametrize(
        "xp,expected",
        [(0, 1), (99, 1), (100, 2), (249, 2), (250, 3), (63_699, 49), (63_700, 50), (10**7, 50)],
    )
    def test_level_for_xp(self, xp, expected):
        assert level_for_xp(xp) == expected

    def test_level_info_clamps(self):
        assert level_info(0).level == 1
        assert level_info(99).level == MAX_LEVEL
        assert level_info(2).title == "Curioso"

    def test_progress_between_levels(self):
        progress = progress_to_next_level(175)

        assert progress.current_level == 2
        assert progress.next_level == 3
        assert progress.next_level_xp == 250
        assert progress.xp_needed == 75
        assert progress.progress_percent == 50.0

    def test_progress_at_max_level(self):
        progress = progress_to_next_level(70_000)

        assert progress.current_level == MAX_LEVEL
        assert progress.next_level is None
        assert progress.progress_percent == 100.0
        assert progress.xp_needed == 0


class TestStreaks:
    @pytest.mark.parametrize(
        "last,today,current,expected",
        [
            (None, date(2026, 3, 10), 0, 1),
            (date(2026, 3, 10), date(2026, 3, 10), 4, 4),
            (date(2026, 3, 9), date(2026, 3, 10), 4, 5),
            (date(2026, 3, 7), date(2026, 3, 10), 4, 1),
            (date(2026, 2, 28), date(2026, 3, 1), 2, 3),
        ],
    )
    def test_next_streak(self, last, today, current, expected):
        assert next_streak(last, today, current) == expected
