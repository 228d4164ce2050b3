"""
SQLAlchemy ORM Models for Review Record Storage

One row per (namespace, item_id). Columns mirror the flat stored record;
timestamps are kept as ISO-8601 strings.
"""

from sqlalchemy import Column, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ReviewRecordRow(Base):
    """
    Persistent review state for a single item in one namespace.
    """
    __tablename__ = 'review_records'

    # Primary key: composite of namespace and item_id
    namespace = Column(String(100), primary_key=True, nullable=False)
    item_id = Column(String(255), primary_key=True, nullable=False)

    # Scheduling parameters
    ease_factor = Column(Float, nullable=False)
    interval = Column(Integer, nullable=False)  # Days until next review
    repetitions = Column(Integer, nullable=False)  # Passing reviews in a row

    # Review tracking
    last_review = Column(String(40), nullable=True)
    next_review = Column(String(40), nullable=False)

    # Lifetime counters
    correct_count = Column(Integer, nullable=False, default=0)
    incorrect_count = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "ease_factor": self.ease_factor,
            "interval": self.interval,
            "repetitions": self.repetitions,
            "last_review": self.last_review,
            "next_review": self.next_review,
            "correct_count": self.correct_count,
            "incorrect_count": self.incorrect_count,
        }

    def __repr__(self):
        return f"<ReviewRecordRow({self.namespace}, {self.item_id}, reps={self.repetitions})>"
