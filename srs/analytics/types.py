"""
Types for review statistics and dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd


ItemStatus = Literal["new", "learning", "mastered"]


@dataclass(frozen=True)
class ReviewStats:
    """
    Counts over one namespace (or one category of it).

    learning, mastered and new partition the item set; due_now overlaps
    them (a mastered item that comes due is still mastered).
    """
    due_now: int
    learning: int
    mastered: int
    new: int

    @property
    def reviewed(self) -> int:
        return self.learning + self.mastered

    @property
    def total(self) -> int:
        return self.reviewed + self.new


@dataclass(frozen=True)
class NamespaceDashboardData:
    """
    Precomputed metrics and tables for one namespace.
    """
    namespace: str
    label: str
    stats: ReviewStats
    status_breakdown: dict[str, int]
    category_breakdown: pd.DataFrame
    difficulty_counts: pd.Series
    accuracy: float
