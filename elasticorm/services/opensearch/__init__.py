from .client import Datastore
from .factory import make_datastore, make_opensearch_client, make_opensearch_client_fresh
from .index_config import build_index_definition, index_name_for, type_name_for
from .query_builder import RecordQueryBuilder, build_search_query

__all__ = [
    "Datastore",
    "RecordQueryBuilder",
    "build_index_definition",
    "build_search_query",
    "index_name_for",
    "make_datastore",
    "make_opensearch_client",
    "make_opensearch_client_fresh",
    "type_name_for",
]
