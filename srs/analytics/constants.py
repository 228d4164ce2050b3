"""
Constants for review statistics tables.
"""

from __future__ import annotations

from typing import Final

from srs.sm2.constants import Difficulty


STATUS_ORDER: Final[list[str]] = ["new", "learning", "mastered"]

DIFFICULTY_ORDER: Final[list[str]] = [d.value for d in (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)]

UNCATEGORIZED: Final[str] = "uncategorized"

SNAPSHOT_COLUMNS: Final[list[str]] = [
    "item_id",
    "category",
    "status",
    "due",
    "difficulty",
    "ease_factor",
    "interval",
    "repetitions",
    "next_review",
    "correct_count",
    "incorrect_count",
]
