from functools import lru_cache
from typing import Optional, Type

from opensearchpy import OpenSearch

from elasticorm.config import Settings, get_settings

from .client import Datastore, RecordT


def make_opensearch_client_fresh(settings: Optional[Settings] = None, host: Optional[str] = None) -> OpenSearch:
    """Factory function to create a fresh (non-cached) OpenSearch client."""
    if settings is None:
        settings = get_settings()
    opensearch_settings = settings.opensearch
    return OpenSearch(
        hosts=[host or opensearch_settings.host],
        http_compress=True,
        use_ssl=opensearch_settings.use_ssl,
        verify_certs=opensearch_settings.verify_certs,
        ssl_assert_hostname=False,
        ssl_show_warn=False,
        timeout=opensearch_settings.request_timeout,
    )


@lru_cache(maxsize=1)
def make_opensearch_client() -> OpenSearch:
    """Factory function to create cached OpenSearch client."""
    return make_opensearch_client_fresh()


def make_datastore(
    record_type: Type[RecordT],
    settings: Optional[Settings] = None,
    client: Optional[OpenSearch] = None,
) -> Datastore[RecordT]:
    """Factory function to create a datastore for a record type."""
    if client is None:
        client = make_opensearch_client() if settings is None else make_opensearch_client_fresh(settings)
    return Datastore(client, record_type, settings=settings)
