from typing import Any, Dict, List, Optional

from elasticorm.exceptions import InvalidOptionError
from elasticorm.mapping import resolve_field_path, resolve_property
from elasticorm.schemas.mapping import RAW_FIELD, SchemaDocument

ORDERINGS = ("asc", "desc")


class RecordQueryBuilder:
    """
    Query builder for records of one mapped type.

    Builds OpenSearch queries with:
    - Exact term filters on record fields
    - Sorting on record fields (on the raw sub-field of sortable text fields)
    - Pagination

    Field paths are given in record field names and resolved against the
    schema document, e.g. ``Name.Title`` -> ``name.title``.
    """

    def __init__(
        self,
        document: SchemaDocument,
        term_filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        ordering: str = "asc",
        from_: int = 0,
        size: int = 10,
        track_total_hits: bool = True,
    ):
        """
        Initialize query builder.

        Args:
            document: Schema document of the record type
            term_filters: Record field path -> exact value
            sort_by: Record field path to sort by
            ordering: "asc" or "desc"
            from_: Offset for pagination
            size: Number of results to return
            track_total_hits: Whether to track total hits accurately

        Raises:
            InvalidOptionError: If ordering is neither asc nor desc
        """
        if ordering not in ORDERINGS:
            raise InvalidOptionError("ordering", ordering, "ordering must be asc or desc")
        self.document = document
        self.term_filters = term_filters or {}
        self.sort_by = sort_by
        self.ordering = ordering
        self.from_ = from_
        self.size = size
        self.track_total_hits = track_total_hits

    def build(self) -> Dict[str, Any]:
        """Build the complete OpenSearch query."""
        query_body = {
            "query": self._build_query(),
            "size": self.size,
            "from": self.from_,
            "track_total_hits": self.track_total_hits,
        }

        sort = self._build_sort()
        if sort:
            query_body["sort"] = sort

        return query_body

    def _build_query(self) -> Dict[str, Any]:
        """Build the bool query; filters don't affect scoring."""
        bool_query: Dict[str, Any] = {"must": [{"match_all": {}}]}

        filter_clauses = self._build_filters()
        if filter_clauses:
            bool_query["filter"] = filter_clauses

        return {"bool": bool_query}

    def _build_filters(self) -> List[Dict[str, Any]]:
        filters = []
        for field_path, value in self.term_filters.items():
            property_path = resolve_field_path(self.document, field_path)
            filters.append({"term": {property_path: value}})
        return filters

    def _build_sort(self) -> Optional[List[Dict[str, Any]]]:
        if not self.sort_by:
            return None

        property_path = resolve_field_path(self.document, self.sort_by)
        if resolve_property(self.document, self.sort_by).is_sortable:
            property_path = f"{property_path}.{RAW_FIELD}"

        return [{property_path: {"order": self.ordering}}]


def build_search_query(
    document: SchemaDocument,
    term_filters: Optional[Dict[str, Any]] = None,
    sort_by: Optional[str] = None,
    ordering: str = "asc",
    from_: int = 0,
    size: int = 10,
) -> Dict[str, Any]:
    """Helper function to build a search query."""
    builder = RecordQueryBuilder(
        document=document,
        term_filters=term_filters,
        sort_by=sort_by,
        ordering=ordering,
        from_=from_,
        size=size,
    )
    return builder.build()
