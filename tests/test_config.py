"""
Tests for environment configuration.
"""

import pytest

from srs import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL",
        "TEST_MODE",
        "MONGO_URI",
        "MONGO_DB_NAME",
        "SRS_FAST_RESPONSE_MS",
        "SRS_MASTERED_REPETITIONS",
        "SRS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_database_url_required():
    with pytest.raises(ValueError, match="DATABASE_URL"):
        config.get_database_url()


def test_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost:5432/learning_db")
    assert config.get_database_url() == "postgresql://u:p@localhost:5432/learning_db"


def test_test_mode_uses_test_database(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost:5432/learning_db")
    monkeypatch.setenv("TEST_MODE", "true")

    assert config.get_database_url() == "postgresql://u:p@localhost:5432/test_learning_db"


def test_mongo_uri_required():
    with pytest.raises(ValueError, match="MONGO_URI"):
        config.get_mongo_uri()


def test_defaults():
    settings = config.load_settings()

    assert settings.database_url is None
    assert settings.mongo_db_name == "german_trainer"
    assert settings.fast_response_ms == 2000
    assert settings.mastered_repetitions == 5
    assert settings.log_level == "INFO"
    assert settings.test_mode is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("SRS_FAST_RESPONSE_MS", "1500")
    monkeypatch.setenv("SRS_MASTERED_REPETITIONS", "8")
    monkeypatch.setenv("SRS_LOG_LEVEL", "debug")
    monkeypatch.setenv("MONGO_DB_NAME", "trainer_dev")

    settings = config.load_settings()

    assert settings.fast_response_ms == 1500
    assert settings.mastered_repetitions == 8
    assert settings.log_level == "DEBUG"
    assert settings.mongo_db_name == "trainer_dev"


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("SRS_MASTERED_REPETITIONS", "five")

    with pytest.raises(ValueError, match="SRS_MASTERED_REPETITIONS"):
        config.load_settings()
