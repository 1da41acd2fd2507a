"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys
from unittest.mock import MagicMock

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


TEST_ENV = {
    "OPENSEARCH__HOST": "http://localhost:9200",
    "OPENSEARCH__NUMBER_OF_SHARDS": "1",
    "OPENSEARCH__NUMBER_OF_REPLICAS": "0",
    "OPENSEARCH__INDEX_SUFFIX": "s",
    "OPENSEARCH__INCLUDE_TYPE_NAME": "false",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from elasticorm.config import Settings, get_settings
from elasticorm.mapping import mapping_from_model


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Set test environment variables and reset cached settings and schemas."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    mapping_from_model.cache_clear()
    yield
    get_settings.cache_clear()
    mapping_from_model.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def opensearch_client() -> MagicMock:
    """OpenSearch client double with an acknowledged index creation."""
    client = MagicMock()
    client.indices.exists.return_value = False
    client.indices.create.return_value = {"acknowledged": True}
    return client
