"""
Difficulty classification for review records.
"""

from __future__ import annotations

from srs.sm2.constants import (
    EASY_EASE_THRESHOLD,
    EASY_REPETITIONS,
    HARD_EASE_THRESHOLD,
    Difficulty,
)
from srs.sm2.record import ReviewRecord


def get_difficulty(record: ReviewRecord) -> Difficulty:
    """
    Derive a coarse difficulty label from ease factor and streak.

    - HARD: ease near the floor, or no streak after at least one lapse
    - EASY: ease near the ceiling with a long streak
    - MEDIUM: everything else (including untouched new items)

    Raising ease or repetitions never moves an item from EASY to HARD.
    """
    if record.ease_factor <= HARD_EASE_THRESHOLD:
        return Difficulty.HARD

    if record.repetitions == 0 and record.incorrect_count > 0:
        return Difficulty.HARD

    if record.ease_factor >= EASY_EASE_THRESHOLD and record.repetitions >= EASY_REPETITIONS:
        return Difficulty.EASY

    return Difficulty.MEDIUM
