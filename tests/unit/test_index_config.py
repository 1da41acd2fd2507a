"""Unit tests for index definitions."""

import json

import pytest
from pydantic import BaseModel, Field

from elasticorm.exceptions import InvalidOptionError, UnresolvedFieldMappingError
from elasticorm.mapping import CASE_INSENSITIVE_ANALYZER, build_schema, mapping_from_model
from elasticorm.schemas import IndexDefinition, IndexSettings
from elasticorm.services.opensearch import build_index_definition, index_name_for, type_name_for


class User(BaseModel):
    ID: str = Field("", alias="id", json_schema_extra={"elasticorm": "id"})
    Name: str = Field("", alias="name")
    DateOfBirth: str = Field("", alias="date", json_schema_extra={"elasticorm": "type=date"})


class Order(BaseModel):
    Reference: str = Field("", alias="reference", json_schema_extra={"elasticorm": "ref_id,case_sensitive=false"})
    Note: str = Field("", alias="note", json_schema_extra={"elasticorm": "analyzer=simple"})


class BrokenOrder(BaseModel):
    Reference: str = Field("", json_schema_extra={"elasticorm": "ref"})


class TestIndexDefinition:
    """Test IndexDefinition serialization."""

    def test_empty_definition(self):
        assert IndexDefinition().to_json() == "{}"

    def test_mapping_without_settings(self):
        definition = build_index_definition("user", User)

        assert definition.to_dict() == {
            "mappings": {
                "user": {"properties": {"name": {"type": "text"}, "date": {"type": "date"}}}
            }
        }

    def test_shards_and_replicas(self):
        definition = build_index_definition("user", User, number_of_shards=1, number_of_replicas=2)

        assert definition.to_dict()["settings"] == {"number_of_shards": 1, "number_of_replicas": 2}

    def test_zero_replicas_are_omitted(self):
        definition = build_index_definition("user", User, number_of_shards=1, number_of_replicas=0)

        assert definition.to_dict()["settings"] == {"number_of_shards": 1}
        assert '"number_of_replicas"' not in definition.to_json()

    def test_zero_counts_omit_settings(self):
        definition = build_index_definition("user", User, number_of_shards=0, number_of_replicas=0)

        assert "settings" not in definition.to_dict()

    def test_index_settings_drop_zero_counts(self):
        assert IndexSettings(number_of_shards=0, number_of_replicas=0).model_dump(exclude_none=True) == {}

    def test_cached_mapping_is_not_shared(self):
        definition = build_index_definition("user", User)
        document = definition.schema_for("user")

        document.properties.pop("name")

        assert document is not mapping_from_model(User)
        assert "name" in mapping_from_model(User).properties
        assert document.properties["date"].field_name == "DateOfBirth"

    def test_case_insensitive_analyzer_is_defined(self):
        definition = build_index_definition("order", Order, number_of_shards=2, number_of_replicas=1)

        assert definition.to_dict() == {
            "settings": {
                "number_of_shards": 2,
                "number_of_replicas": 1,
                "analysis": {
                    "analyzer": {
                        CASE_INSENSITIVE_ANALYZER: {
                            "type": "custom",
                            "tokenizer": "keyword",
                            "filter": ["lowercase"],
                        }
                    }
                },
            },
            "mappings": {
                "order": {
                    "properties": {
                        "reference": {"type": "text", "analyzer": CASE_INSENSITIVE_ANALYZER},
                        "note": {"type": "text", "analyzer": "simple"},
                    }
                }
            },
        }

    def test_analysis_block_without_shard_settings(self):
        definition = build_index_definition("order", Order)

        assert list(definition.to_dict()["settings"]) == ["analysis"]

    def test_from_schema_document(self):
        document = build_schema(User).unwrap()

        definition = build_index_definition("user", document)

        assert definition.mappings["user"] is document

    def test_schema_error_is_raised(self):
        with pytest.raises(InvalidOptionError):
            build_index_definition("brokenorder", BrokenOrder)

    def test_serialization_is_idempotent(self):
        serialized = build_index_definition("order", Order, number_of_shards=1).to_json()

        assert json.dumps(json.loads(serialized), separators=(",", ":")) == serialized

    def test_elastic_field_name(self):
        definition = build_index_definition("user", User)

        assert definition.elastic_field_name("user", "DateOfBirth") == "date"
        with pytest.raises(UnresolvedFieldMappingError):
            definition.elastic_field_name("user", "ID")

    def test_elastic_field_name_of_unknown_type(self):
        with pytest.raises(KeyError):
            build_index_definition("user", User).elastic_field_name("order", "Name")

    def test_typeless_index_body(self):
        body = build_index_definition("user", User, number_of_shards=1).index_body()

        assert body == {
            "settings": {"number_of_shards": 1},
            "mappings": {"properties": {"name": {"type": "text"}, "date": {"type": "date"}}},
        }

    def test_typed_index_body(self):
        body = build_index_definition("user", User).index_body(include_type_name=True)

        assert list(body["mappings"]) == ["user"]


class TestNames:
    """Test index and type naming."""

    def test_type_name(self):
        assert type_name_for(User) == "user"

    def test_index_name(self):
        assert index_name_for(User) == "users"
        assert index_name_for(Order, suffix="-v1") == "order-v1"
