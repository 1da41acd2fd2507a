from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from .mapping import SchemaDocument


class AnalyzerDefinition(BaseModel):
    """Index-level analyzer, e.g. ``{"type": "custom", "tokenizer": "keyword", "filter": ["lowercase"]}``."""

    type: str = "custom"
    tokenizer: Optional[str] = None
    char_filter: Optional[List[str]] = None
    filter: Optional[List[str]] = None


class TokenizerDefinition(BaseModel):
    """Index-level tokenizer, e.g. an ``edge_ngram`` tokenizer."""

    type: str
    min_gram: Optional[int] = None
    max_gram: Optional[int] = None
    token_chars: Optional[List[str]] = None


class AnalysisSettings(BaseModel):
    analyzer: Optional[Dict[str, AnalyzerDefinition]] = None
    tokenizer: Optional[Dict[str, TokenizerDefinition]] = None


class IndexSettings(BaseModel):
    number_of_shards: Optional[int] = None
    number_of_replicas: Optional[int] = None
    analysis: Optional[AnalysisSettings] = None

    @field_validator("number_of_shards", "number_of_replicas")
    @classmethod
    def omit_zero_count(cls, value: Optional[int]) -> Optional[int]:
        # zero counts are left to the cluster default
        return value or None


class IndexDefinition(BaseModel):
    """Settings and mappings which serialize to a create-index request body."""

    settings: Optional[IndexSettings] = None
    mappings: Optional[Dict[str, SchemaDocument]] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)

    def schema_for(self, type_name: str) -> SchemaDocument:
        if not self.mappings or type_name not in self.mappings:
            raise KeyError(f"index definition has no mapping for type {type_name}")
        return self.mappings[type_name]

    def elastic_field_name(self, type_name: str, field_path: str) -> str:
        """Resolve a record field path to the index property path of the given type."""
        from elasticorm.mapping.resolver import resolve_field_path

        return resolve_field_path(self.schema_for(type_name), field_path)

    def index_body(self, include_type_name: bool = False) -> Dict[str, Any]:
        """
        Build the body for the create-index request.

        Args:
            include_type_name: Keep the mapping type level (pre 7.x clusters).
                Otherwise a single mapping is inlined as a typeless mapping.

        Returns:
            Request body as a plain dict
        """
        body = self.to_dict()
        mappings = body.get("mappings")
        if not include_type_name and mappings and len(mappings) == 1:
            body["mappings"] = next(iter(mappings.values()))
        return body
