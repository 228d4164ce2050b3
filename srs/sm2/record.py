"""
Review Record - SM-2 Item State

Defines the per-item review record and quantities derived from it.

Key concepts:
- Ease factor: how quickly the interval grows (1.3-2.5)
- Interval: days until the item is due again
- Repetitions: passing reviews in a row since the last lapse
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from srs.sm2.constants import DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class ReviewRecord:
    """
    Review state for a single item in one namespace.

    next_review is always derived from last_review and interval; use
    derive_next_review() rather than setting it by hand.
    """
    item_id: str
    ease_factor: float
    interval: int  # days
    repetitions: int
    last_review: Optional[datetime]
    next_review: datetime

    # Lifetime counters (display only, never read by the scheduler)
    correct_count: int = 0
    incorrect_count: int = 0

    @property
    def is_new(self) -> bool:
        """True if the item has never been reviewed."""
        return self.last_review is None

    @property
    def total_reviews(self) -> int:
        return self.correct_count + self.incorrect_count


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def derive_next_review(last_review: datetime, interval: int) -> datetime:
    """next_review = last_review + interval days."""
    return last_review + timedelta(days=interval)


def initialize_new_record(item_id: str, now: Optional[datetime] = None) -> ReviewRecord:
    """
    Synthesize the record for an item that has never been reviewed.

    New items are due immediately (next_review = now).

    Args:
        item_id: Catalog item identifier
        now: Read time (defaults to now)

    Returns:
        New ReviewRecord with defaults
    """
    now = ensure_utc(now) if now is not None else utc_now()

    return ReviewRecord(
        item_id=item_id,
        ease_factor=DEFAULT_EASE_FACTOR,
        interval=0,
        repetitions=0,
        last_review=None,
        next_review=now,
        correct_count=0,
        incorrect_count=0,
    )


def is_due(record: ReviewRecord, now: datetime) -> bool:
    return record.next_review <= ensure_utc(now)


def get_days_overdue(record: ReviewRecord, now: datetime) -> float:
    """
    Days elapsed since the item became due (negative if not yet due).
    """
    delta = ensure_utc(now) - record.next_review
    return delta.total_seconds() / 86400.0  # Convert to days


def calculate_priority(record: ReviewRecord, now: datetime) -> float:
    """
    Urgency score for ordering items that are due at the same moment.

    Higher = more urgent. Combines:
    - overdue time (10 points per day)
    - low ease factor (5 points per ease step below default)
    - short streak (2 points per repetition short of 5)
    - lifetime error rate (up to 10 points)

    Args:
        record: Review record to score
        now: Current time

    Returns:
        Non-negative priority score
    """
    priority = max(0.0, get_days_overdue(record, now)) * 10

    priority += (DEFAULT_EASE_FACTOR - record.ease_factor) * 5

    priority += max(0, 5 - record.repetitions) * 2

    error_rate = record.incorrect_count / max(1, record.total_reviews)
    priority += error_rate * 10

    return priority
