"""
Selector - Three-Pool Item Selection

Builds review sessions for one namespace from three disjoint pools:
1. Due pool: reviewed items with next_review <= now (most overdue first)
2. New pool: never-reviewed items (catalog order)
3. Scheduled pool: reviewed items not yet due (soonest first)

Session Logic:
- Take due items first
- Top up from NEW
- Top up from SCHEDULED (soonest-due fill)
"""

from __future__ import annotations
import random
from datetime import datetime
from typing import Mapping, Optional

from srs.session_builders.pool_types import PoolState
from srs.session_builders.pool_utils import (
    due_items_from_snapshot,
    fill_in_order,
    soonest_first,
)
from srs.sm2.record import ReviewRecord, ensure_utc

# ---- Session Configuration ----
SESSION_SIZE = 10           # Items per practice session
POOL_ORDER = ["due", "new", "scheduled"]


def build_pool_state(records: Mapping[str, ReviewRecord], now: datetime) -> PoolState:
    """
    Split a catalog-ordered snapshot of records into pools.

    Args:
        records: item_id -> record, in catalog order, defaults synthesized
        now: Current time

    Returns:
        PoolState with ordered, disjoint pools
    """
    now = ensure_utc(now)

    due = due_items_from_snapshot(records, now, include_new=False)
    due_set = set(due)

    new = [item_id for item_id, record in records.items() if record.is_new]
    scheduled = soonest_first(records, [
        item_id for item_id, record in records.items()
        if not record.is_new and item_id not in due_set
    ])

    return PoolState(records=dict(records), due=due, new=new, scheduled=scheduled)


def get_due_items(
    records: Mapping[str, ReviewRecord],
    now: datetime,
    include_new: bool = True
) -> list[str]:
    """
    Items whose next_review has passed, most overdue first.

    Never-reviewed items are due from the moment they are read; pass
    include_new=False to list reviewed items only.
    """
    return due_items_from_snapshot(records, now, include_new=include_new)


def get_next_items(pool_state: PoolState, count: int) -> list[str]:
    """
    Pick up to `count` items: due first, then new, then soonest-due.

    Returns fewer than `count` only when the pools hold fewer items.
    """
    if count <= 0:
        return []
    return fill_in_order(pool_state.as_pools(), POOL_ORDER, count)


def create_practice_set(
    pool_state: PoolState,
    count: int = SESSION_SIZE,
    rng: Optional[random.Random] = None
) -> list[str]:
    """
    Create a mixed practice set: the get_next_items() selection, shuffled.

    Args:
        pool_state: Pool snapshot for the namespace/category
        count: Number of items in the set
        rng: Random source (defaults to the module RNG)

    Returns:
        List of item ids (shuffled)
    """
    session_ids = get_next_items(pool_state, count)
    (rng or random).shuffle(session_ids)
    return session_ids
