"""
Gamification rules: XP rounding, level thresholds and daily streaks.

Pure functions only; the progress service applies them to stored users.
"""

import math
from datetime import datetime
from typing import Optional

# Minimum XP needed to reach each level (index 0 is level 1)
LEVEL_THRESHOLDS = [0, 100, 250, 500, 1000, 2000, 3500, 5500, 8000, 11000]

STARTING_PROGRESS = {
    "xp": 0,
    "level": 1,
    "countries_explored": [],
    "quizzes_attempted": 0,
    "ai_chats_completed": 0,
    "badges": [],
    "streak_days": 0,
    "last_active": None,
}


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero (8.5 -> 9, 7.5 -> 8).
    Python's round() would send 8.5 to 8.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def pronunciation_xp(accuracy: float) -> int:
    """XP earned for a pronunciation attempt: accuracy / 10, rounded half up"""
    return round_half_up(accuracy / 10)


def calculate_level(xp: int) -> int:
    """Level implied by an XP total"""
    level = 1
    for idx, threshold in enumerate(LEVEL_THRESHOLDS):
        if xp >= threshold:
            level = idx + 1
    return level


def xp_to_next_level(xp: int) -> Optional[int]:
    """XP still missing for the next level; None at the top level"""
    for threshold in LEVEL_THRESHOLDS:
        if xp < threshold:
            return threshold - xp
    return None


def next_streak(last_active: Optional[datetime], streak_days: int, now: datetime) -> int:
    """
    Streak after activity at `now` (UTC calendar days):
    same day keeps it, the following day extends it, any gap restarts at 1.
    """
    if last_active is None:
        return 1

    gap = (now.date() - last_active.date()).days
    if gap <= 0:
        return max(streak_days, 1)
    if gap == 1:
        return streak_days + 1
    return 1


def unique_in_order(values) -> list:
    """De-duplicate while keeping first occurrence order (set-valued fields)"""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
