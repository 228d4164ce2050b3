"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

import pandas as pd

from srs.analytics.constants import SNAPSHOT_COLUMNS, UNCATEGORIZED
from srs.analytics.metrics import classify_status
from srs.catalog_repo import Catalog
from srs.sm2.classifier import get_difficulty
from srs.sm2.constants import MASTERED_REPETITIONS
from srs.sm2.record import ReviewRecord, is_due


def load_record_snapshots_df(
    records: Mapping[str, ReviewRecord],
    catalog: Catalog,
    now: datetime,
    mastered_repetitions: int = MASTERED_REPETITIONS
) -> pd.DataFrame:
    """
    One row per catalog item with its status, difficulty and counters.
    """
    if not records:
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)

    rows = []
    for item_id, record in records.items():
        rows.append({
            "item_id": item_id,
            "category": catalog.category_of(item_id) or UNCATEGORIZED,
            "status": classify_status(record, mastered_repetitions),
            "due": is_due(record, now),
            "difficulty": get_difficulty(record).value,
            "ease_factor": record.ease_factor,
            "interval": record.interval,
            "repetitions": record.repetitions,
            "next_review": record.next_review,
            "correct_count": record.correct_count,
            "incorrect_count": record.incorrect_count,
        })

    df = pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)
    df["next_review"] = pd.to_datetime(df["next_review"], utc=True)
    return df
