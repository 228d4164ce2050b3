"""
Metric computations for review statistics and dashboards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

import pandas as pd

from srs.analytics.constants import DIFFICULTY_ORDER, STATUS_ORDER
from srs.analytics.types import ItemStatus, ReviewStats
from srs.sm2.constants import MASTERED_REPETITIONS
from srs.sm2.record import ReviewRecord, ensure_utc, is_due


def classify_status(
    record: ReviewRecord,
    mastered_repetitions: int = MASTERED_REPETITIONS
) -> ItemStatus:
    """
    Place one record in exactly one progress bucket.

    Being due is tracked separately: a mastered item stays mastered when
    its next review comes around.
    """
    if record.is_new:
        return "new"
    if record.repetitions >= mastered_repetitions:
        return "mastered"
    return "learning"


def compute_stats(
    records: Iterable[ReviewRecord],
    now: datetime,
    mastered_repetitions: int = MASTERED_REPETITIONS
) -> ReviewStats:
    """
    Count due / learning / mastered / new items.

    due_now includes never-reviewed items, which are due on first read.
    """
    now = ensure_utc(now)
    counts = {status: 0 for status in STATUS_ORDER}
    due_now = 0
    for record in records:
        counts[classify_status(record, mastered_repetitions)] += 1
        if is_due(record, now):
            due_now += 1

    return ReviewStats(
        due_now=due_now,
        learning=counts["learning"],
        mastered=counts["mastered"],
        new=counts["new"],
    )


def compute_status_breakdown(
    records: Iterable[ReviewRecord],
    mastered_repetitions: int = MASTERED_REPETITIONS
) -> dict[str, int]:
    """
    New / Learning / Mastered by repetitions alone (progress chart buckets).

    An item with no current streak counts as new, including one that lapsed.
    """
    counts = {name: 0 for name in STATUS_ORDER}
    for record in records:
        if record.repetitions == 0:
            counts["new"] += 1
        elif record.repetitions >= mastered_repetitions:
            counts["mastered"] += 1
        else:
            counts["learning"] += 1
    return counts


def compute_category_breakdown(snapshots_df: pd.DataFrame) -> pd.DataFrame:
    """
    Category x status counts, with a total column and a due column.

    due overlaps the status columns and is not part of total.
    """
    columns = STATUS_ORDER + ["total", "due"]
    if snapshots_df.empty:
        return pd.DataFrame(columns=columns, dtype="int64")

    table = (
        snapshots_df.groupby(["category", "status"]).size()
        .unstack(fill_value=0)
        .reindex(columns=STATUS_ORDER, fill_value=0)
    )
    table["total"] = table.sum(axis=1)
    table["due"] = (
        snapshots_df.groupby("category")["due"].sum()
        .reindex(table.index, fill_value=0)
    )
    return table.astype("int64")


def compute_difficulty_counts(snapshots_df: pd.DataFrame) -> pd.Series:
    """
    Number of reviewed items per difficulty label.
    """
    if snapshots_df.empty:
        return pd.Series(0, index=DIFFICULTY_ORDER, dtype="int64")

    reviewed = snapshots_df[snapshots_df["status"] != "new"]
    return (
        reviewed["difficulty"].value_counts()
        .reindex(DIFFICULTY_ORDER, fill_value=0)
        .astype("int64")
    )


def compute_accuracy(snapshots_df: pd.DataFrame) -> float:
    """
    Lifetime share of passing reviews, 0.0 when nothing was reviewed.
    """
    if snapshots_df.empty:
        return 0.0
    correct = int(snapshots_df["correct_count"].sum())
    incorrect = int(snapshots_df["incorrect_count"].sum())
    total = correct + incorrect
    if total == 0:
        return 0.0
    return correct / total
