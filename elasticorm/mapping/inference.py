from elasticorm.schemas import mapping as property_types

from .descriptors import NativeKind, TypeDescriptor

_PRIMITIVE_TYPES = {
    NativeKind.BOOL: property_types.BOOLEAN,
    NativeKind.FLOAT32: property_types.FLOAT,
    NativeKind.FLOAT64: property_types.DOUBLE,
    NativeKind.INT8: property_types.BYTE,
    NativeKind.INT16: property_types.SHORT,
    NativeKind.INT32: property_types.INTEGER,
    NativeKind.INT: property_types.INTEGER,
    NativeKind.INT64: property_types.LONG,
}


def unwrap_pointer(descriptor: TypeDescriptor) -> TypeDescriptor:
    while descriptor.kind is NativeKind.POINTER and descriptor.elem is not None:
        descriptor = descriptor.elem
    return descriptor


def infer_type(descriptor: TypeDescriptor) -> str:
    """Default property type of a native type; a ``type=`` option overrides it."""
    descriptor = unwrap_pointer(descriptor)

    if descriptor.kind is NativeKind.TIME:
        return property_types.DATE

    if descriptor.kind is NativeKind.SLICE:
        if descriptor.elem is None:
            return property_types.TEXT
        # The index has no array type, a list of values maps to the value type
        elem_type = infer_type(descriptor.elem)
        return property_types.NESTED if elem_type == property_types.OBJECT else elem_type

    if descriptor.kind is NativeKind.STRUCT:
        return property_types.OBJECT

    return _PRIMITIVE_TYPES.get(descriptor.kind, property_types.TEXT)


def record_of(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Element/pointee descriptor holding the record of an object or nested field."""
    descriptor = unwrap_pointer(descriptor)
    while descriptor.kind is NativeKind.SLICE and descriptor.elem is not None:
        descriptor = unwrap_pointer(descriptor.elem)
    return descriptor
