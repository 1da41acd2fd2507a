import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, RequestError
from pydantic import BaseModel

from elasticorm.config import Settings, get_settings
from elasticorm.exceptions import (
    IndexCreationError,
    InvalidIDField,
    InvalidRecordType,
    RecordNotFound,
    RecordNotSaved,
)
from elasticorm.mapping import decode_options, describe_fields

from .index_config import build_index_definition, index_name_for, type_name_for
from .query_builder import RecordQueryBuilder

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class Datastore(Generic[RecordT]):
    """
    Stores and retrieves records of one pydantic model type in OpenSearch.

    The index name, mapping type name and mapping are derived from the model.
    """

    def __init__(self, client: OpenSearch, record_type: Type[RecordT], settings: Optional[Settings] = None):
        """Initialize the datastore for a record type."""
        if not (isinstance(record_type, type) and issubclass(record_type, BaseModel)):
            raise InvalidRecordType(f"{record_type!r} is not a pydantic model")

        self.client = client
        self.record_type = record_type
        self.settings = settings or get_settings()

        opensearch_settings = self.settings.opensearch
        self.type_name = type_name_for(record_type)
        self.index_name = index_name_for(record_type, opensearch_settings.index_suffix)
        self.index_definition = build_index_definition(
            self.type_name,
            record_type,
            number_of_shards=opensearch_settings.number_of_shards,
            number_of_replicas=opensearch_settings.number_of_replicas,
        )
        self.document = self.index_definition.schema_for(self.type_name)
        self.id_field = _id_field_of(record_type)
        logger.info(f"Datastore initialized for {record_type.__name__} on index {self.index_name}")

    # ============================================================
    # INDEX MANAGEMENT
    # ============================================================

    def ensure_index_exists(self) -> bool:
        """
        Create the index of the record type if it doesn't exist.

        Returns:
            True if the index was created, False if it already exists
        """
        if self.client.indices.exists(index=self.index_name):
            return False
        self.create_index()
        self.refresh()
        return True

    def create_index(self) -> None:
        body = self.index_definition.index_body(include_type_name=self.settings.opensearch.include_type_name)
        try:
            response = self.client.indices.create(index=self.index_name, body=body)
        except RequestError as e:
            logger.error(f"Error creating index {self.index_name}: {e}")
            raise IndexCreationError(f"creating index {self.index_name} failed - {body}") from e

        if not response.get("acknowledged"):
            logger.error(f"Failed to create index: {response}")
            raise IndexCreationError(f"creating index {self.index_name} was not acknowledged - {body}")
        logger.info(f"Successfully created index: {self.index_name}")

    def delete_index(self) -> bool:
        if not self.client.indices.exists(index=self.index_name):
            return False
        logger.info(f"Deleting index: {self.index_name}")
        self.client.indices.delete(index=self.index_name)
        return True

    def refresh(self) -> None:
        self.client.indices.refresh(index=self.index_name)

    def clean_up(self) -> None:
        """Delete all records of the index."""
        self.client.delete_by_query(
            index=self.index_name,
            body={"query": {"match_all": {}}},
            refresh=True,
        )

    # ============================================================
    # RECORDS
    # ============================================================

    def create(self, record: RecordT) -> str:
        """
        Index a new record and set its generated ID.

        Returns:
            The ID of the new record
        """
        self._check_type(record)
        id_field = self._require_id_field()

        response = self.client.index(index=self.index_name, body=self._source_of(record))
        if response.get("result") != "created":
            logger.error(f"Failed to create record: {response}")
            raise RecordNotSaved(f"creating {self.type_name} failed")

        record_id = response["_id"]
        setattr(record, id_field, record_id)
        logger.debug(f"Created {self.type_name} {record_id}")
        return record_id

    def find(self, record_id: str) -> RecordT:
        try:
            response = self.client.get(index=self.index_name, id=record_id)
        except NotFoundError as e:
            raise RecordNotFound(f"{self.type_name} {record_id} not found") from e
        if not response.get("found"):
            raise RecordNotFound(f"{self.type_name} {record_id} not found")
        return self._decode(response["_source"], response["_id"])

    def update(self, record: RecordT) -> None:
        self._check_type(record)
        record_id = getattr(record, self._require_id_field())
        if not record_id:
            raise RecordNotSaved(f"can't save {self.type_name} with empty ID")

        self.client.update(index=self.index_name, id=record_id, body={"doc": self._source_of(record)})
        logger.debug(f"Updated {self.type_name} {record_id}")

    # ============================================================
    # SEARCH
    # ============================================================

    def find_one_by(
        self,
        field_path: str,
        value: Any,
        sort_by: Optional[str] = None,
        ordering: str = "asc",
    ) -> RecordT:
        """
        Find the first record whose field exactly matches a value.

        Args:
            field_path: Record field path, e.g. "Email" or "Name.Title"
            value: Value to match
            sort_by: Record field path to sort by
            ordering: "asc" or "desc"

        Returns:
            The first matching record

        Raises:
            UnresolvedFieldMappingError: If a field path is not mapped
            RecordNotFound: If no record matches
        """
        records = self._search(
            RecordQueryBuilder(
                self.document,
                term_filters={field_path: value},
                sort_by=sort_by,
                ordering=ordering,
                size=1,
            )
        )
        if not records:
            raise RecordNotFound(f"no {self.type_name} with {field_path}={value!r}")
        return records[0]

    def find_all(
        self,
        offset: int = 0,
        limit: int = 10,
        sort_by: Optional[str] = None,
        ordering: str = "asc",
    ) -> List[RecordT]:
        return self._search(
            RecordQueryBuilder(
                self.document,
                sort_by=sort_by,
                ordering=ordering,
                from_=offset,
                size=limit,
            )
        )

    def _search(self, query_builder: RecordQueryBuilder) -> List[RecordT]:
        response = self.client.search(index=self.index_name, body=query_builder.build())
        hits = response["hits"]["hits"]
        logger.debug(f"Search on {self.index_name} returned {len(hits)} hits")
        return [self._decode(hit["_source"], hit["_id"]) for hit in hits]

    # ============================================================
    # HELPERS
    # ============================================================

    def _check_type(self, record: Any) -> None:
        if type(record) is not self.record_type:
            raise InvalidRecordType(
                f"expected {self.record_type.__name__}, got {type(record).__name__}"
            )

    def _require_id_field(self) -> str:
        if self.id_field is None:
            raise InvalidIDField(f"{self.record_type.__name__} has no ID field")
        return self.id_field

    def _source_of(self, record: RecordT) -> Dict[str, Any]:
        exclude = {self.id_field} if self.id_field else None
        return record.model_dump(mode="json", by_alias=True, exclude=exclude)

    def _decode(self, source: Dict[str, Any], record_id: str) -> RecordT:
        record = self.record_type.model_validate(source)
        if self.id_field:
            setattr(record, self.id_field, record_id)
        return record


def _id_field_of(record_type: Type[BaseModel]) -> Optional[str]:
    """Field tagged ``id``, else a field named ``id`` or ``ID``."""
    names = []
    for field in describe_fields(record_type):
        if decode_options(field.options_tag).is_id:
            return field.name
        names.append(field.name)
    for name in ("id", "ID"):
        if name in names:
            return name
    return None
