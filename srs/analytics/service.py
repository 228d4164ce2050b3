"""
Service layer to assemble review dashboards by namespace.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from srs.analytics.metrics import (
    compute_accuracy,
    compute_category_breakdown,
    compute_difficulty_counts,
    compute_stats,
    compute_status_breakdown,
)
from srs.analytics.queries import load_record_snapshots_df
from srs.analytics.types import NamespaceDashboardData
from srs.sm2.constants import NAMESPACE_LABELS

if TYPE_CHECKING:
    from srs.engine import ReviewEngine


def build_namespace_dashboard(
    engine: "ReviewEngine",
    now: Optional[datetime] = None,
    category: Optional[str] = None
) -> NamespaceDashboardData:
    """
    Build all KPI values and tables needed by a progress page for one namespace.
    """
    now = engine.now(now)
    records = engine.get_records(category=category, now=now)
    mastered = engine.mastered_repetitions

    snapshots_df = load_record_snapshots_df(records, engine.catalog, now, mastered)

    return NamespaceDashboardData(
        namespace=engine.namespace,
        label=NAMESPACE_LABELS.get(engine.namespace, engine.namespace),
        stats=compute_stats(records.values(), now, mastered),
        status_breakdown=compute_status_breakdown(records.values(), mastered),
        category_breakdown=compute_category_breakdown(snapshots_df),
        difficulty_counts=compute_difficulty_counts(snapshots_df),
        accuracy=compute_accuracy(snapshots_df),
    )
