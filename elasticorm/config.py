from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class DefaultSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        env_nested_delimiter="__")


class OpenSearchSettings(DefaultSettings):
    """OpenSearch connection and index settings"""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="OPENSEARCH__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    host: str = "http://localhost:9200"
    request_timeout: int = 30
    use_ssl: bool = False
    verify_certs: bool = False

    # Index settings applied to every generated index definition
    number_of_shards: Optional[int] = None
    number_of_replicas: Optional[int] = None
    index_suffix: str = "s"  # index name = type name + suffix

    # Mapping types were removed in Elasticsearch 7 / OpenSearch
    include_type_name: bool = False

    @field_validator("number_of_shards", "number_of_replicas", mode="before")
    @classmethod
    def parse_empty_number(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Settings(DefaultSettings):
    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
