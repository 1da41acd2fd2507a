import logging
from typing import Optional, Union

from elasticorm.mapping import analysis_for, collect_analyzers, mapping_from_model
from elasticorm.schemas import IndexDefinition, IndexSettings, SchemaDocument

logger = logging.getLogger(__name__)

DEFAULT_INDEX_SUFFIX = "s"


def type_name_for(record_type: type) -> str:
    """Mapping type name of a record type: the lower-cased class name."""
    type_name = getattr(record_type, "__name__", "")
    if not type_name:
        raise ValueError(f"Could not determine type name from {record_type!r}")
    return type_name.lower()


def index_name_for(record_type: type, suffix: str = DEFAULT_INDEX_SUFFIX) -> str:
    """Index name of a record type, e.g. ``users`` for ``User``."""
    return type_name_for(record_type) + suffix


def build_index_definition(
    type_name: str,
    record: Union[type, SchemaDocument],
    number_of_shards: Optional[int] = None,
    number_of_replicas: Optional[int] = None,
) -> IndexDefinition:
    """
    Build the index definition for one record type.

    Args:
        type_name: Mapping type name
        record: Record type, or its already built schema document
        number_of_shards: number_of_shards setting, omitted if None or 0
        number_of_replicas: number_of_replicas setting, omitted if None or 0

    Returns:
        Index definition with settings, analyzers and the mapping

    Raises:
        MappingException: If the schema of the record type could not be built
    """
    if isinstance(record, SchemaDocument):
        document = record
    else:
        # the cached document is shared between callers
        document = mapping_from_model(record).model_copy(deep=True)

    settings = None
    if number_of_shards or number_of_replicas:
        settings = IndexSettings(
            number_of_shards=number_of_shards,
            number_of_replicas=number_of_replicas,
        )

    analysis = analysis_for(collect_analyzers(document))
    if analysis is not None:
        settings = settings or IndexSettings()
        settings.analysis = analysis
        logger.debug(f"Index definition for {type_name} defines analyzers: {sorted(analysis.analyzer)}")

    return IndexDefinition(settings=settings, mappings={type_name: document})
