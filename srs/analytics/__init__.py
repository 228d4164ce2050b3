"""
Analytics package exports.
"""

from srs.analytics.metrics import classify_status, compute_stats, compute_status_breakdown
from srs.analytics.service import build_namespace_dashboard
from srs.analytics.types import ItemStatus, NamespaceDashboardData, ReviewStats

__all__ = [
    "classify_status",
    "compute_stats",
    "compute_status_breakdown",
    "build_namespace_dashboard",
    "ItemStatus",
    "NamespaceDashboardData",
    "ReviewStats",
]
