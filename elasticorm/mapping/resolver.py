from typing import Dict, List, Tuple

from elasticorm.exceptions import UnresolvedFieldMappingError
from elasticorm.schemas.mapping import PropertySchema, SchemaDocument


def resolve_field_path(document: SchemaDocument, logical_path: str) -> str:
    """
    Resolve a dotted path of record field names to the index property path.

    E.g. ``Name.Title`` resolves to ``name.title`` when the field ``Name`` is
    stored as property ``name`` and its field ``Title`` as ``title``.

    Args:
        document: Schema document of the record type
        logical_path: Dotted path of record field names

    Returns:
        Dotted path of index property names

    Raises:
        UnresolvedFieldMappingError: If a path segment has no property
    """
    return ".".join(name for name, _ in _walk(document, logical_path))


def resolve_property(document: SchemaDocument, logical_path: str) -> PropertySchema:
    """Property schema at the end of a logical field path."""
    _, prop = _walk(document, logical_path)[-1]
    return prop


def _walk(document: SchemaDocument, logical_path: str) -> List[Tuple[str, PropertySchema]]:
    # every segment must match, empty ones included
    matched = []
    properties = document.properties
    for segment in logical_path.split("."):
        name, prop = _match(properties, segment)
        matched.append((name, prop))
        properties = prop.properties or {}
    return matched


def _match(properties: Dict[str, PropertySchema], segment: str) -> Tuple[str, PropertySchema]:
    for name, prop in properties.items():
        if prop.field_name == segment:
            return name, prop
    raise UnresolvedFieldMappingError(segment)
