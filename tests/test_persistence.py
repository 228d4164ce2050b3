"""
Tests for record encoding and the storage adapters.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError
from sqlalchemy.exc import OperationalError

from srs.record_repo import MongoRecordStore
from srs.sm2 import (
    MAX_EASE_FACTOR,
    PHRASES_NAMESPACE,
    VERBS_NAMESPACE,
    WORDS_NAMESPACE,
    decode_record,
    encode_record,
)
from srs.sm2.models import ReviewRecordRow

from tests.conftest import NOW, make_record


def _stored(item_id="hund", **overrides):
    data = {
        "item_id": item_id,
        "ease_factor": 2.2,
        "interval": 6,
        "repetitions": 2,
        "last_review": "2025-01-10T12:00:00+00:00",
        "next_review": "2025-01-16T12:00:00+00:00",
        "correct_count": 2,
        "incorrect_count": 1,
    }
    data.update(overrides)
    return data


class TestEncoding:

    def test_round_trip(self):
        record = make_record("hund", days_since_review=2, interval=6, repetitions=2, ease_factor=2.36)
        encoded = encode_record(record)

        assert isinstance(encoded["last_review"], str)
        assert isinstance(encoded["next_review"], str)
        assert decode_record(encoded, "hund") == record

    def test_missing_is_none(self):
        assert decode_record(None, "hund") is None

    @pytest.mark.parametrize("overrides", [
        {"ease_factor": "lots"},
        {"ease_factor": float("nan")},
        {"interval": -1},
        {"repetitions": "many"},
        {"last_review": "yesterday"},
        {"item_id": ""},
    ])
    def test_corrupt_is_none(self, overrides):
        assert decode_record(_stored(**overrides), "hund") is None

    def test_mismatched_item_id_is_none(self):
        assert decode_record(_stored("katze"), "hund") is None

    def test_next_review_is_derived(self):
        record = decode_record(_stored(next_review="2030-01-01T00:00:00+00:00"), "hund")
        assert record.next_review == record.last_review + timedelta(days=6)

    def test_out_of_range_ease_is_clamped(self):
        assert decode_record(_stored(ease_factor=4.0), "hund").ease_factor == MAX_EASE_FACTOR

    def test_naive_timestamp_is_utc(self):
        record = decode_record(_stored(last_review="2025-01-10T12:00:00"), "hund")
        assert record.last_review == NOW - timedelta(days=5)
        assert record.last_review.utcoffset() == timedelta(0)

    def test_unknown_fields_ignored(self):
        assert decode_record(_stored(legacy_stability=3.1), "hund") is not None

    def test_record_without_last_review_is_new(self):
        data = _stored(last_review=None, repetitions=0, interval=0)
        record = decode_record(data, "hund", now=NOW)

        assert record.is_new
        assert record.next_review == NOW


class TestInMemoryStore:

    def test_absent_is_none(self, store):
        assert store.get(WORDS_NAMESPACE, "hund") is None

    def test_set_then_get(self, store):
        record = make_record("hund")
        assert store.set(WORDS_NAMESPACE, "hund", record) is True
        assert store.get(WORDS_NAMESPACE, "hund") == record

    def test_namespaces_are_disjoint(self, store):
        store.set(WORDS_NAMESPACE, "sein", make_record("sein", repetitions=1))
        store.set(VERBS_NAMESPACE, "sein", make_record("sein", repetitions=4, interval=15))

        assert store.get(WORDS_NAMESPACE, "sein").repetitions == 1
        assert store.get(VERBS_NAMESPACE, "sein").repetitions == 4
        assert store.get(PHRASES_NAMESPACE, "sein") is None
        assert store.keys(VERBS_NAMESPACE) == [(VERBS_NAMESPACE, "sein")]

    def test_get_many_skips_absent_and_corrupt(self, store):
        store.set(WORDS_NAMESPACE, "hund", make_record("hund"))
        store.put_raw(WORDS_NAMESPACE, "katze", {"item_id": "katze", "ease_factor": None})

        loaded = store.get_many(WORDS_NAMESPACE, ["hund", "katze", "brot"])
        assert list(loaded) == ["hund"]


class TestSqlStore:

    def test_set_then_get(self, sql_store):
        record = make_record("hund", days_since_review=2, interval=6, repetitions=2, ease_factor=2.2)

        assert sql_store.get(WORDS_NAMESPACE, "hund") is None
        assert sql_store.set(WORDS_NAMESPACE, "hund", record) is True
        assert sql_store.get(WORDS_NAMESPACE, "hund") == record

    def test_set_replaces(self, sql_store):
        sql_store.set(WORDS_NAMESPACE, "hund", make_record("hund", repetitions=1))
        sql_store.set(WORDS_NAMESPACE, "hund", make_record("hund", repetitions=3, interval=15))

        assert sql_store.get(WORDS_NAMESPACE, "hund").repetitions == 3
        assert sql_store.count(WORDS_NAMESPACE) == 1

    def test_namespaces_are_disjoint(self, sql_store):
        sql_store.set(WORDS_NAMESPACE, "sein", make_record("sein", repetitions=1))
        sql_store.set(VERBS_NAMESPACE, "sein", make_record("sein", repetitions=4, interval=15))

        assert sql_store.get(WORDS_NAMESPACE, "sein").repetitions == 1
        assert sql_store.get(VERBS_NAMESPACE, "sein").repetitions == 4
        assert sql_store.count(PHRASES_NAMESPACE) == 0

    def test_get_many(self, sql_store):
        sql_store.set(WORDS_NAMESPACE, "hund", make_record("hund"))
        sql_store.set(WORDS_NAMESPACE, "brot", make_record("brot"))
        sql_store.set(VERBS_NAMESPACE, "katze", make_record("katze"))

        loaded = sql_store.get_many(WORDS_NAMESPACE, ["hund", "katze", "brot"])

        assert set(loaded) == {"hund", "brot"}
        assert sql_store.get_many(WORDS_NAMESPACE, []) == {}

    def test_corrupt_row_is_none(self, sql_store):
        session = sql_store.get_session()
        session.add(ReviewRecordRow(
            namespace=WORDS_NAMESPACE,
            item_id="hund",
            ease_factor=2.5,
            interval=1,
            repetitions=1,
            last_review="not a timestamp",
            next_review="also not a timestamp",
            correct_count=1,
            incorrect_count=0,
        ))
        session.commit()
        session.close()

        assert sql_store.get(WORDS_NAMESPACE, "hund") is None

    def test_failed_write_returns_false(self, sql_store):
        session = MagicMock()
        session.commit.side_effect = OperationalError("UPDATE", {}, Exception("disk I/O error"))
        sql_store._session_factory = MagicMock(return_value=session)

        assert sql_store.set(WORDS_NAMESPACE, "hund", make_record("hund")) is False
        session.rollback.assert_called_once()
        session.close.assert_called_once()


class TestMongoStore:

    def test_get(self):
        collection = MagicMock()
        collection.find_one.return_value = _stored()
        store = MongoRecordStore(collection=collection)

        record = store.get(WORDS_NAMESPACE, "hund")

        assert record.repetitions == 2
        collection.find_one.assert_called_once_with(
            {"namespace": WORDS_NAMESPACE, "item_id": "hund"},
            {"_id": 0, "namespace": 0}
        )

    def test_get_absent(self):
        collection = MagicMock()
        collection.find_one.return_value = None

        assert MongoRecordStore(collection=collection).get(WORDS_NAMESPACE, "hund") is None

    def test_get_many_skips_corrupt(self):
        collection = MagicMock()
        collection.find.return_value = iter([_stored("hund"), _stored("katze", interval=-4)])

        loaded = MongoRecordStore(collection=collection).get_many(WORDS_NAMESPACE, ["hund", "katze"])

        assert list(loaded) == ["hund"]

    def test_set_upserts_with_namespace(self):
        collection = MagicMock()
        store = MongoRecordStore(collection=collection)

        assert store.set(VERBS_NAMESPACE, "gehen", make_record("gehen")) is True

        query, doc = collection.replace_one.call_args.args
        assert query == {"namespace": VERBS_NAMESPACE, "item_id": "gehen"}
        assert doc["namespace"] == VERBS_NAMESPACE
        assert doc["item_id"] == "gehen"
        assert collection.replace_one.call_args.kwargs == {"upsert": True}

    def test_failed_write_returns_false(self):
        collection = MagicMock()
        collection.replace_one.side_effect = PyMongoError("connection refused")

        assert MongoRecordStore(collection=collection).set(WORDS_NAMESPACE, "hund", make_record("hund")) is False

    def test_failed_read_is_none(self):
        collection = MagicMock()
        collection.find_one.side_effect = PyMongoError("timeout")

        assert MongoRecordStore(collection=collection).get(WORDS_NAMESPACE, "hund") is None
