"""
Pydantic models for persisted review records and catalog items.

StoredReviewRecord is the only externally visible layout owned by the
engine: a flat mapping of the record fields, numbers plus ISO-8601
timestamp strings.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from srs.sm2.constants import MAX_EASE_FACTOR, MIN_EASE_FACTOR
from srs.sm2.record import (
    ReviewRecord,
    derive_next_review,
    ensure_utc,
    initialize_new_record,
)


class StoredReviewRecord(BaseModel):
    """Flat, serializable form of a ReviewRecord."""
    model_config = ConfigDict(extra="ignore")

    item_id: str = Field(..., min_length=1)
    ease_factor: float
    interval: int = Field(..., ge=0)
    repetitions: int = Field(..., ge=0)
    last_review: Optional[datetime] = None
    next_review: Optional[datetime] = None  # Informational, re-derived on load
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)

    @field_validator("ease_factor")
    @classmethod
    def clamp_ease_factor(cls, value: float) -> float:
        if math.isnan(value) or math.isinf(value):
            raise ValueError("ease_factor must be finite")
        return max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, value))

    @classmethod
    def from_record(cls, record: ReviewRecord) -> "StoredReviewRecord":
        return cls(
            item_id=record.item_id,
            ease_factor=record.ease_factor,
            interval=record.interval,
            repetitions=record.repetitions,
            last_review=record.last_review,
            next_review=record.next_review,
            correct_count=record.correct_count,
            incorrect_count=record.incorrect_count,
        )

    def to_record(self, now: Optional[datetime] = None) -> ReviewRecord:
        """
        Rebuild the in-memory record.

        next_review is derived from last_review + interval; a record that was
        stored without a last_review is treated as new and due at `now`.
        """
        if self.last_review is None:
            fresh = initialize_new_record(self.item_id, now)
            return ReviewRecord(
                item_id=self.item_id,
                ease_factor=self.ease_factor,
                interval=self.interval,
                repetitions=self.repetitions,
                last_review=None,
                next_review=fresh.next_review,
                correct_count=self.correct_count,
                incorrect_count=self.incorrect_count,
            )

        last_review = ensure_utc(self.last_review)
        return ReviewRecord(
            item_id=self.item_id,
            ease_factor=self.ease_factor,
            interval=self.interval,
            repetitions=self.repetitions,
            last_review=last_review,
            next_review=derive_next_review(last_review, self.interval),
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
        )


class CatalogItem(BaseModel):
    """One learnable item as seen by the engine: an id and a category tag."""
    item_id: str = Field(..., min_length=1)
    category: Optional[str] = None
