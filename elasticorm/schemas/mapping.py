from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PrivateAttr

# Search-engine property types produced by type inference
TEXT = "text"
KEYWORD = "keyword"
BOOLEAN = "boolean"
BYTE = "byte"
SHORT = "short"
INTEGER = "integer"
LONG = "long"
FLOAT = "float"
DOUBLE = "double"
DATE = "date"
OBJECT = "object"
NESTED = "nested"

# Name of the keyword sub-field attached to sortable properties
RAW_FIELD = "raw"


class SubFieldSchema(BaseModel):
    """Multi-field entry below a property, e.g. the keyword ``raw`` field."""

    type: str


class PropertySchema(BaseModel):
    """Schema entry of one index property.

    The name of the record field the property was derived from is kept
    privately for field path resolution and is never serialized.
    """

    type: str
    analyzer: Optional[str] = None
    similarity: Optional[str] = None
    fields: Optional[Dict[str, SubFieldSchema]] = None
    properties: Optional[Dict[str, "PropertySchema"]] = None

    _field_name: Optional[str] = PrivateAttr(default=None)

    @property
    def field_name(self) -> Optional[str]:
        """Name of the originating record field."""
        return self._field_name

    @property
    def is_sortable(self) -> bool:
        return bool(self.fields and RAW_FIELD in self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SchemaDocument(BaseModel):
    """Property schema of one record type: ``{"properties": {...}}``."""

    properties: Dict[str, PropertySchema] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


PropertySchema.model_rebuild()
