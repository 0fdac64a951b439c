import pytest
from pydantic import ValidationError

import config
from config import Settings, StorageBackend


def test_env_overrides_json(monkeypatch):
    monkeypatch.setenv("NUM_TABLES", "12")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    config.get_settings.cache_clear()
    try:
        settings = config.get_settings()
    finally:
        config.get_settings.cache_clear()

    assert settings.num_tables == 12
    assert settings.storage_backend is StorageBackend.MEMORY


def test_processing_range_is_validated():
    with pytest.raises(ValidationError):
        Settings(processing_time_min=10, processing_time_max=5)


def test_num_tables_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(num_tables=0)
