"""Unit tests for field path resolution."""

from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from elasticorm.exceptions import UnresolvedFieldMappingError
from elasticorm.mapping import build_schema, resolve_field_path, resolve_property


class HonorificRecord(BaseModel):
    Value: str = Field("", alias="value", json_schema_extra={"elasticorm": "sortable"})


class ContactName(BaseModel):
    Title: str = Field("", alias="title", json_schema_extra={"elasticorm": "type=keyword"})
    LastName: str = Field("", alias="last_name")
    Honorific: Optional[HonorificRecord] = Field(None, alias="honorific")


class Phone(BaseModel):
    Number: str = Field("", alias="number")


class Contact(BaseModel):
    ID: str = Field("", json_schema_extra={"elasticorm": "id"})
    Email: str = Field("", alias="email_address")
    Name: Optional[ContactName] = Field(None, alias="name")
    Phones: List[Phone] = Field(default_factory=list, alias="phones")


@pytest.fixture
def document():
    return build_schema(Contact).unwrap()


class TestResolveFieldPath:
    """Test resolve_field_path."""

    def test_top_level_field(self, document):
        assert resolve_field_path(document, "Email") == "email_address"

    def test_two_level_path(self, document):
        assert resolve_field_path(document, "Name.Title") == "name.title"

    def test_three_level_path(self, document):
        assert resolve_field_path(document, "Name.Honorific.Value") == "name.honorific.value"

    def test_path_into_nested_list(self, document):
        assert resolve_field_path(document, "Phones.Number") == "phones.number"

    def test_object_field_itself(self, document):
        assert resolve_field_path(document, "Name") == "name"

    def test_unknown_first_segment(self, document):
        with pytest.raises(UnresolvedFieldMappingError) as exc_info:
            resolve_field_path(document, "Address.City")

        assert exc_info.value.path == "Address"

    def test_property_name_is_not_a_field_name(self, document):
        """Paths are given in record field names, not in index property names."""
        with pytest.raises(UnresolvedFieldMappingError) as exc_info:
            resolve_field_path(document, "email_address")

        assert exc_info.value.path == "email_address"

    def test_unknown_nested_segment(self, document):
        with pytest.raises(UnresolvedFieldMappingError) as exc_info:
            resolve_field_path(document, "Name.FirstName")

        assert exc_info.value.path == "FirstName"

    def test_path_below_a_leaf(self, document):
        with pytest.raises(UnresolvedFieldMappingError) as exc_info:
            resolve_field_path(document, "Email.Domain")

        assert exc_info.value.path == "Domain"

    @pytest.mark.parametrize("path", ["Name.", "Name..Title", ".Name", ""])
    def test_empty_segment(self, document, path):
        with pytest.raises(UnresolvedFieldMappingError) as exc_info:
            resolve_field_path(document, path)

        assert exc_info.value.path == ""

    def test_id_field_has_no_mapping(self, document):
        with pytest.raises(UnresolvedFieldMappingError):
            resolve_field_path(document, "ID")


class TestResolveProperty:
    """Test resolve_property."""

    def test_returns_the_leaf_property(self, document):
        prop = resolve_property(document, "Name.Honorific.Value")

        assert prop.type == "text"
        assert prop.is_sortable

    def test_unknown_path(self, document):
        with pytest.raises(UnresolvedFieldMappingError):
            resolve_property(document, "Name.Missing")

    def test_trailing_separator(self, document):
        with pytest.raises(UnresolvedFieldMappingError):
            resolve_property(document, "Name.")
