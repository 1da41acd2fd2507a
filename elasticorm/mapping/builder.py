import logging
from functools import lru_cache
from typing import Iterable, NamedTuple, Optional, Tuple, Union

from elasticorm.exceptions import (
    InvalidOptionError,
    MalformedRecordTypeError,
    MappingException,
    RecursiveRecordTypeError,
)
from elasticorm.schemas.mapping import (
    KEYWORD,
    NESTED,
    OBJECT,
    RAW_FIELD,
    TEXT,
    PropertySchema,
    SchemaDocument,
    SubFieldSchema,
)

from .descriptors import FieldDescriptor, NativeKind, TypeDescriptor, describe_fields
from .inference import infer_type, record_of
from .tags import decode_options

logger = logging.getLogger(__name__)


class FieldResult(NamedTuple):
    """Schema of one field; ``schema`` is None for skipped fields."""

    schema: Optional[PropertySchema]
    error: Optional[MappingException] = None


class SchemaResult(NamedTuple):
    """Schema document of a record type.

    On error the document holds every property built before and including
    the failing field, so it can still be inspected or serialized.
    """

    document: SchemaDocument
    error: Optional[MappingException] = None

    def unwrap(self) -> SchemaDocument:
        if self.error is not None:
            raise self.error
        return self.document


def build_field(field: FieldDescriptor) -> FieldResult:
    """Build the property schema of a single field."""
    return _build_field(field, ())


def build_schema(record: Union[type, TypeDescriptor, Iterable[FieldDescriptor]]) -> SchemaResult:
    """
    Build the schema document of a record type.

    Args:
        record: pydantic model or dataclass, a struct TypeDescriptor or field descriptors

    Returns:
        SchemaResult with the (possibly partial) document and the first error
    """
    if isinstance(record, type):
        record = TypeDescriptor(kind=NativeKind.STRUCT, record_type=record)
    elif not isinstance(record, TypeDescriptor):
        record = TypeDescriptor(kind=NativeKind.STRUCT, fields=tuple(record))
    return _build_document(record, ())


@lru_cache(maxsize=None)
def mapping_from_model(record_type: type) -> SchemaDocument:
    """Schema document of a record type, computed once per type.

    The document is shared by every caller and must be treated as read-only;
    use ``model_copy(deep=True)`` to get a modifiable copy.

    Raises:
        MappingException: If the schema could not be built
    """
    return build_schema(record_type).unwrap()


def _build_document(descriptor: TypeDescriptor, parents: Tuple) -> SchemaResult:
    if descriptor.fields is not None:
        return _assemble(descriptor.fields, parents + (descriptor.fields,))

    if descriptor.kind is not NativeKind.STRUCT or descriptor.record_type is None:
        return SchemaResult(SchemaDocument(), MalformedRecordTypeError(descriptor))

    record_type = descriptor.record_type
    if record_type in parents:
        return SchemaResult(SchemaDocument(), RecursiveRecordTypeError(record_type))
    try:
        fields = describe_fields(record_type)
    except TypeError as e:
        return SchemaResult(SchemaDocument(), MalformedRecordTypeError(record_type, str(e)))
    return _assemble(fields, parents + (record_type,))


def _assemble(fields: Iterable[FieldDescriptor], parents: Tuple) -> SchemaResult:
    document = SchemaDocument()
    for field in fields:
        schema, error = _build_field(field, parents)
        if schema is not None:
            name = field.external_name
            if name in document.properties:
                # last write wins
                logger.warning(
                    f"Property {name} of field {field.name} overwrites the one of field "
                    f"{document.properties[name].field_name}"
                )
            document.properties[name] = schema
        if error is not None:
            return SchemaResult(document, error)
    return SchemaResult(document)


def _build_field(field: FieldDescriptor, parents: Tuple) -> FieldResult:
    if field.is_excluded:
        return FieldResult(None)

    try:
        options = decode_options(field.options_tag)
    except InvalidOptionError as e:
        return FieldResult(_new_property(field, infer_type(field.type)), e)

    if options.is_id:
        return FieldResult(None)

    schema = _new_property(field, options.type or infer_type(field.type))

    if schema.type in (OBJECT, NESTED):
        nested = _build_document(record_of(field.type), parents)
        if nested.document.properties:
            schema.properties = nested.document.properties
        if nested.error is not None:
            return FieldResult(schema, nested.error)

    analyzer = options.effective_analyzer
    if analyzer:
        schema.analyzer = analyzer
    if options.sortable:
        schema.fields = {RAW_FIELD: SubFieldSchema(type=KEYWORD)}
    if options.ref_id:
        # a keyword property can't carry an analyzer
        schema.type = TEXT if analyzer else KEYWORD

    return FieldResult(schema)


def _new_property(field: FieldDescriptor, property_type: str) -> PropertySchema:
    schema = PropertySchema(type=property_type)
    schema._field_name = field.name
    return schema
