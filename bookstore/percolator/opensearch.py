from __future__ import annotations

import logging
from typing import Any

from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, OpenSearchException
from opensearchpy.helpers import scan
from opensearchpy.helpers.query import Query

from .config import DEFAULT_PERCOLATOR_CONFIG, PercolatorConfig
from .engine import MatchingEngine, query_body
from .errors import MatchingEngineError
from .fields import QUERY, index_mapping

logger = logging.getLogger(__name__)


class OpenSearchMatchingEngine(MatchingEngine):
    """Matching engine backed by an OpenSearch percolator index."""

    def __init__(
        self,
        config: PercolatorConfig = DEFAULT_PERCOLATOR_CONFIG,
        client: OpenSearch | None = None,
    ) -> None:
        self.config = config
        self.client = client or OpenSearch(
            hosts=[config.opensearch_url],
            timeout=config.timeout,
        )

    def ensure_index(self, collection: str) -> None:
        """Create the percolator index from the field catalog if it is missing."""
        try:
            if self.client.indices.exists(index=collection):
                return
            self.client.indices.create(index=collection, body=index_mapping())
        except OpenSearchException as exc:
            logger.error("Could not create percolator index %s", collection, exc_info=True)
            raise MatchingEngineError(f"Could not create index {collection}") from exc
        logger.info("Created percolator index %s", collection)

    def register_query(
        self,
        collection: str,
        query_id: str,
        expression: Query | dict[str, Any],
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        body = {**(extra or {}), QUERY.name: query_body(expression)}
        try:
            # refresh so the next percolation sees this query
            self.client.index(index=collection, id=query_id, body=body, refresh=True)
        except OpenSearchException as exc:
            raise MatchingEngineError(f"Could not register query {query_id}") from exc

    def evaluate_document(self, collection: str, document: dict[str, Any]) -> set[str]:
        search = {
            "query": {"percolate": {"field": QUERY.name, "document": document}},
            "_source": False,
        }
        try:
            return {hit["_id"] for hit in scan(self.client, query=search, index=collection)}
        except OpenSearchException as exc:
            raise MatchingEngineError(f"Could not percolate document in {collection}") from exc

    def delete_query(self, collection: str, query_id: str) -> None:
        try:
            self.client.delete(index=collection, id=query_id, refresh=True)
        except NotFoundError:
            logger.debug("Query %s already absent from %s", query_id, collection)
        except OpenSearchException as exc:
            raise MatchingEngineError(f"Could not delete query {query_id}") from exc
