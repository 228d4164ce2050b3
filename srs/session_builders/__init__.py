"""Session builder modules for review item selection."""

from srs.session_builders.pool_types import PoolState, PoolStatus
from srs.session_builders.pool_utils import fill_in_order
from srs.session_builders.review_builder import (
    build_pool_state,
    create_practice_set,
    get_due_items,
    get_next_items,
)

__all__ = [
    "PoolState",
    "PoolStatus",
    "fill_in_order",
    "build_pool_state",
    "create_practice_set",
    "get_due_items",
    "get_next_items",
]
