"""
Typed pool models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

from srs.sm2.record import ReviewRecord


PoolStatus = Literal["due", "new", "scheduled"]


@dataclass
class PoolState:
    """
    Snapshot of one catalog slice split into disjoint, ordered pools.

    - due: reviewed and next_review <= now, most overdue first
    - new: never reviewed, catalog order
    - scheduled: reviewed and not yet due, soonest first
    """
    records: dict[str, ReviewRecord]
    due: list[str]
    new: list[str]
    scheduled: list[str]

    def as_pools(self) -> dict[str, list[str]]:
        return {"due": self.due, "new": self.new, "scheduled": self.scheduled}

    def status_of(self, item_id: str) -> PoolStatus | None:
        for name, ids in self.as_pools().items():
            if item_id in ids:
                return name
        return None

    def move_to(self, item_id: str, target: PoolStatus) -> None:
        """
        Move an item_id to the end of the target pool, removing it from others.
        """
        for ids in (self.due, self.new, self.scheduled):
            if item_id in ids:
                ids.remove(item_id)

        if target == "due":
            self.due.append(item_id)
        elif target == "new":
            self.new.append(item_id)
        elif target == "scheduled":
            self.scheduled.append(item_id)
