from .analyzers import ANALYZER_DEFINITIONS, analysis_for, collect_analyzers
from .builder import FieldResult, SchemaResult, build_field, build_schema, mapping_from_model
from .descriptors import (
    FieldDescriptor,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    NativeKind,
    TypeDescriptor,
    describe_fields,
    describe_type,
)
from .inference import infer_type
from .resolver import resolve_field_path, resolve_property
from .tags import CASE_INSENSITIVE_ANALYZER, FieldOptions, decode_options, parse_options

__all__ = [
    "ANALYZER_DEFINITIONS",
    "CASE_INSENSITIVE_ANALYZER",
    "FieldDescriptor",
    "FieldOptions",
    "FieldResult",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NativeKind",
    "SchemaResult",
    "TypeDescriptor",
    "analysis_for",
    "build_field",
    "build_schema",
    "collect_analyzers",
    "decode_options",
    "describe_fields",
    "describe_type",
    "infer_type",
    "mapping_from_model",
    "parse_options",
    "resolve_field_path",
    "resolve_property",
]
