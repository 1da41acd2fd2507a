"""
Type descriptors for record types.

The schema builders never look at Python classes directly. They walk
``FieldDescriptor``/``TypeDescriptor`` values, which are produced here from
pydantic models and dataclasses, or built by hand.

Record fields are configured the way JSON encoders are configured:

    class User(BaseModel):
        id: str = Field("", json_schema_extra={"elasticorm": "id"})
        first_name: str
        last_name: str = Field(alias="last_name", json_schema_extra={"elasticorm": "analyzer=simple"})
        secret: str = Field("", exclude=True)

    @dataclass
    class Name:
        title: str = field(default="", metadata={"json": "title", "elasticorm": "type=keyword"})
"""

import dataclasses
import types
import typing
from collections import abc
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel

# Keys of the tags in field metadata
OPTIONS_TAG = "elasticorm"
EXTERNAL_NAME_TAG = "json"
# External name tag marking a field which is not serialized
EXCLUDE_SENTINEL = "-"


class NativeKind(str, Enum):
    POINTER = "pointer"
    SLICE = "slice"
    STRUCT = "struct"
    TIME = "time"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    OTHER = "other"


# Sized numeric annotations, e.g. ``age: Int8``
Int8 = Annotated[int, NativeKind.INT8]
Int16 = Annotated[int, NativeKind.INT16]
Int32 = Annotated[int, NativeKind.INT32]
Int64 = Annotated[int, NativeKind.INT64]
Float32 = Annotated[float, NativeKind.FLOAT32]
Float64 = Annotated[float, NativeKind.FLOAT64]

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, abc.Sequence, abc.MutableSequence, abc.Set, abc.Iterable)


@dataclass(frozen=True)
class TypeDescriptor:
    """Native type of a field.

    ``elem`` is the pointee of a pointer or the element of a slice. Struct
    descriptors carry either the record class or a hand-built field list.
    """

    kind: NativeKind
    elem: Optional["TypeDescriptor"] = None
    record_type: Optional[type] = None
    fields: Optional[Tuple["FieldDescriptor", ...]] = None


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: TypeDescriptor
    external_tag: str = ""
    options_tag: str = ""

    @property
    def external_name(self) -> str:
        """Property name in the index: the external name tag up to the first comma, else the field name."""
        name = self.external_tag.split(",", 1)[0]
        return name or self.name

    @property
    def is_excluded(self) -> bool:
        return self.external_tag.split(",", 1)[0] == EXCLUDE_SENTINEL


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and (issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp))


def describe_type(annotation: Any) -> TypeDescriptor:
    """Describe a type annotation as a TypeDescriptor."""
    origin = get_origin(annotation)

    if origin is Annotated:
        base, *metadata = get_args(annotation)
        for meta in metadata:
            if isinstance(meta, NativeKind):
                return TypeDescriptor(kind=meta)
        return describe_type(base)

    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return TypeDescriptor(kind=NativeKind.POINTER, elem=describe_type(args[0]))
        return TypeDescriptor(kind=NativeKind.OTHER)

    if origin in _SEQUENCE_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        if origin is tuple and len(set(args)) > 1:
            return TypeDescriptor(kind=NativeKind.OTHER)
        elem = describe_type(args[0]) if args else TypeDescriptor(kind=NativeKind.OTHER)
        return TypeDescriptor(kind=NativeKind.SLICE, elem=elem)

    if origin is not None or not isinstance(annotation, type):
        return TypeDescriptor(kind=NativeKind.OTHER)

    # datetime is a subclass of date, bool of int
    if issubclass(annotation, date):
        return TypeDescriptor(kind=NativeKind.TIME)
    if issubclass(annotation, bool):
        return TypeDescriptor(kind=NativeKind.BOOL)
    if issubclass(annotation, Enum):
        return TypeDescriptor(kind=NativeKind.OTHER)
    if issubclass(annotation, int):
        return TypeDescriptor(kind=NativeKind.INT)
    if issubclass(annotation, float):
        return TypeDescriptor(kind=NativeKind.FLOAT64)
    if annotation in (list, tuple, set, frozenset):
        return TypeDescriptor(kind=NativeKind.SLICE, elem=TypeDescriptor(kind=NativeKind.OTHER))
    if is_record_type(annotation):
        return TypeDescriptor(kind=NativeKind.STRUCT, record_type=annotation)
    return TypeDescriptor(kind=NativeKind.OTHER)


def describe_fields(record_type: type) -> Tuple[FieldDescriptor, ...]:
    """
    Describe the fields of a record type in declaration order.

    Args:
        record_type: pydantic model or dataclass

    Returns:
        Field descriptors of the record type

    Raises:
        TypeError: If record_type is neither a pydantic model nor a dataclass
    """
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return tuple(_describe_model_fields(record_type))
    if isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        return tuple(_describe_dataclass_fields(record_type))
    raise TypeError(f"{record_type!r} is neither a pydantic model nor a dataclass")


def _describe_model_fields(model: typing.Type[BaseModel]):
    for name, info in model.model_fields.items():
        kinds = [meta for meta in info.metadata if isinstance(meta, NativeKind)]
        field_type = TypeDescriptor(kind=kinds[0]) if kinds else describe_type(info.annotation)

        if info.exclude is True:
            external_tag = EXCLUDE_SENTINEL
        else:
            external_tag = info.serialization_alias or info.alias or ""

        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        yield FieldDescriptor(
            name=name,
            type=field_type,
            external_tag=external_tag,
            options_tag=str(extra.get(OPTIONS_TAG, "")),
        )


def _describe_dataclass_fields(cls: type):
    hints = typing.get_type_hints(cls, include_extras=True)
    for f in dataclasses.fields(cls):
        yield FieldDescriptor(
            name=f.name,
            type=describe_type(hints.get(f.name, f.type)),
            external_tag=f.metadata.get(EXTERNAL_NAME_TAG, ""),
            options_tag=f.metadata.get(OPTIONS_TAG, ""),
        )
