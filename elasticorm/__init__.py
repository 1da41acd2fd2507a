from .exceptions import (
    ElasticOrmException,
    InvalidOptionError,
    MalformedRecordTypeError,
    MappingException,
    RecursiveRecordTypeError,
    UnresolvedFieldMappingError,
)
from .mapping import (
    CASE_INSENSITIVE_ANALYZER,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    build_schema,
    collect_analyzers,
    mapping_from_model,
    resolve_field_path,
)
from .schemas import IndexDefinition, PropertySchema, SchemaDocument
from .services.opensearch import Datastore, RecordQueryBuilder, build_index_definition, make_datastore

__all__ = [
    "CASE_INSENSITIVE_ANALYZER",
    "Datastore",
    "ElasticOrmException",
    "Float32",
    "Float64",
    "IndexDefinition",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidOptionError",
    "MalformedRecordTypeError",
    "MappingException",
    "PropertySchema",
    "RecordQueryBuilder",
    "RecursiveRecordTypeError",
    "SchemaDocument",
    "UnresolvedFieldMappingError",
    "build_index_definition",
    "build_schema",
    "collect_analyzers",
    "make_datastore",
    "mapping_from_model",
    "resolve_field_path",
]
