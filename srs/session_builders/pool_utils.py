"""
Pool utilities for session builders.

These helpers provide shared, minimal primitives for building and reasoning
about session pools without enforcing a single scheduling policy.
"""

from __future__ import annotations
from datetime import datetime
from typing import Hashable, Mapping, TypeVar

from srs.sm2.record import ReviewRecord, calculate_priority, ensure_utc


T = TypeVar("T", bound=Hashable)


def fill_in_order(
    pools: Mapping[str, list[T]],
    order: list[str],
    target_size: int
) -> list[T]:
    """
    Fill a session by walking pools in order until target_size is reached.

    An item that appears in more than one pool is taken once.
    """
    session: list[T] = []
    seen: set[T] = set()
    for name in order:
        for item in pools.get(name, []):
            if len(session) >= target_size:
                return session
            if item in seen:
                continue
            seen.add(item)
            session.append(item)
    return session


def due_items_from_snapshot(
    records: Mapping[str, ReviewRecord],
    now: datetime,
    include_new: bool = True
) -> list[str]:
    """
    Filter and sort due items from a snapshot (no store calls).

    Most overdue first; ties go to the higher priority score, then to
    snapshot (catalog) order.
    """
    now = ensure_utc(now)
    order = {item_id: index for index, item_id in enumerate(records)}

    due = [
        item_id for item_id, record in records.items()
        if record.next_review <= now and (include_new or not record.is_new)
    ]
    due.sort(key=lambda item_id: (
        records[item_id].next_review,
        -calculate_priority(records[item_id], now),
        order[item_id],
    ))
    return due


def soonest_first(records: Mapping[str, ReviewRecord], item_ids: list[str]) -> list[str]:
    """Order ids by ascending next_review, keeping input order for ties."""
    return sorted(item_ids, key=lambda item_id: records[item_id].next_review)
