"""
Tests for catalog construction and loading.
"""

from unittest.mock import MagicMock, patch

from srs.catalog_repo import Catalog, load_catalog


def test_from_pairs_keeps_order():
    catalog = Catalog.from_pairs([("zebra", "animals"), ("apfel", "food"), ("affe", "animals")])

    assert catalog.ids() == ["zebra", "apfel", "affe"]
    assert catalog.ids("animals") == ["zebra", "affe"]
    assert catalog.categories() == ["animals", "food"]
    assert len(catalog) == 3


def test_duplicates_keep_first():
    catalog = Catalog.from_pairs([("hund", "animals"), ("hund", "food")])

    assert catalog.ids() == ["hund"]
    assert catalog.category_of("hund") == "animals"


def test_from_documents_skips_unusable():
    docs = [
        {"word_id": "w1", "category": "food", "german": "Brot"},
        {"german": "ohne id"},
        {"word_id": "", "category": "food"},
        {"word_id": 17},
    ]

    catalog = Catalog.from_documents(docs, id_field="word_id")

    assert catalog.ids() == ["w1", "17"]
    assert catalog.category_of("17") is None
    assert "w1" in catalog
    assert "ohne id" not in catalog


def test_unknown_item_has_no_category():
    assert Catalog([]).category_of("nichts") is None


def test_load_catalog_reads_collection():
    collection = MagicMock()
    collection.find.return_value.sort.return_value = [
        {"verb_id": "v1", "level": "A1"},
        {"verb_id": "v2", "level": "A2"},
    ]
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = collection

    with patch("srs.catalog_repo.get_client", return_value=client):
        catalog = load_catalog("verbs", id_field="verb_id", category_field="level")

    assert catalog.ids() == ["v1", "v2"]
    assert catalog.ids("A2") == ["v2"]
    client.__getitem__.assert_called_once_with("german_trainer")
    client.__getitem__.return_value.__getitem__.assert_called_once_with("verbs")
    collection.find.assert_called_once_with({}, {"verb_id": 1, "level": 1})
    collection.find.return_value.sort.assert_called_once_with("_id", 1)
