"""
Database - SQL Review Record Store

Handles all database operations for review records.
Uses SQLAlchemy ORM; any backend SQLAlchemy supports works (Postgres in
production, SQLite for local runs and tests).

This module handles ONLY database I/O.
Algorithm logic is handled by the scheduler module.
"""

from __future__ import annotations
from typing import Iterable, Optional

from loguru import logger
from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from srs.config import get_database_url
from srs.sm2.models import Base, ReviewRecordRow
from srs.sm2.persistence import RecordStore, decode_record, encode_record


def get_engine(db_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Uses connection pooling for server databases. In-memory SQLite gets a
    single shared connection so every session sees the same data.

    Args:
        db_url: Database URL (defaults to DATABASE_URL)

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = db_url or get_database_url()

    if db_url.startswith("sqlite"):
        if ":memory:" in db_url or db_url in ("sqlite://", "sqlite:///"):
            return create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False
            )
        return create_engine(db_url, echo=False)

    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def init_db(engine: Engine) -> None:
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times - only creates tables if they don't exist.
    """
    inspector = inspect(engine)
    if ReviewRecordRow.__tablename__ not in inspector.get_table_names():
        Base.metadata.create_all(engine)


def reset_db(engine: Engine) -> None:
    """
    DANGEROUS: Delete all data and recreate tables.

    All review records in every namespace will be lost!
    """
    Base.metadata.drop_all(engine)
    logger.warning("Review record tables dropped")
    init_db(engine)


class SqlRecordStore(RecordStore):
    """
    Review record store backed by a SQL database.

    Opens a short-lived session per call.
    """

    def __init__(
        self,
        db_url: Optional[str] = None,
        engine: Optional[Engine] = None,
        create_tables: bool = True
    ):
        self.engine = engine if engine is not None else get_engine(db_url)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        if create_tables:
            init_db(self.engine)

    def get_session(self) -> Session:
        return self._session_factory()

    def get(self, namespace, item_id, now=None):
        session = self.get_session()
        try:
            row = session.get(ReviewRecordRow, (namespace, item_id))
            if row is None:
                return None
            return decode_record(row.to_dict(), item_id, now)
        except SQLAlchemyError as exc:
            logger.error("Failed to load review record {}/{}: {}", namespace, item_id, exc)
            return None
        finally:
            session.close()

    def get_many(self, namespace, item_ids: Iterable[str], now=None):
        wanted = list(item_ids)
        if not wanted:
            return {}

        session = self.get_session()
        try:
            rows = session.execute(
                select(ReviewRecordRow).where(
                    ReviewRecordRow.namespace == namespace,
                    ReviewRecordRow.item_id.in_(wanted)
                )
            ).scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Failed to load review records for {}: {}", namespace, exc)
            return {}
        finally:
            session.close()

        result = {}
        for row in rows:
            record = decode_record(row.to_dict(), row.item_id, now)
            if record is not None:
                result[row.item_id] = record
        return result

    def set(self, namespace, item_id, record):
        data = encode_record(record)

        session = self.get_session()
        try:
            row = session.get(ReviewRecordRow, (namespace, item_id))

            if row is None:
                row = ReviewRecordRow(namespace=namespace, item_id=item_id)
                session.add(row)

            row.ease_factor = data["ease_factor"]
            row.interval = data["interval"]
            row.repetitions = data["repetitions"]
            row.last_review = data["last_review"]
            row.next_review = data["next_review"]
            row.correct_count = data["correct_count"]
            row.incorrect_count = data["incorrect_count"]

            session.commit()
            return True
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Failed to save review record {}/{}: {}", namespace, item_id, exc)
            return False
        finally:
            session.close()

    def count(self, namespace: str) -> int:
        """Number of stored records in a namespace."""
        session = self.get_session()
        try:
            return session.execute(
                select(func.count()).select_from(ReviewRecordRow).where(
                    ReviewRecordRow.namespace == namespace
                )
            ).scalar_one()
        finally:
            session.close()
