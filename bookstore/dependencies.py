from __future__ import annotations

from .percolator.config import DEFAULT_PERCOLATOR_CONFIG, PercolatorConfig
from .percolator.engine import MatchingEngine
from .percolator.memory import InMemoryMatchingEngine
from .percolator.opensearch import OpenSearchMatchingEngine
from .percolator.service import BookstoreService
from .records.store import InMemoryRecordStore, RecordStore

_store: RecordStore | None = None
_engine: MatchingEngine | None = None
_service: BookstoreService | None = None


def _build_engine(config: PercolatorConfig) -> MatchingEngine:
    if config.backend == "opensearch":
        engine = OpenSearchMatchingEngine(config)
        if config.create_index:
            engine.ensure_index(config.index)
        return engine
    if config.backend == "memory":
        return InMemoryMatchingEngine()
    raise ValueError(f"Unknown MATCHING_BACKEND: {config.backend!r}")


def get_record_store() -> RecordStore:
    """Return the shared record store, creating it on first call."""
    global _store
    if _store is None:
        _store = InMemoryRecordStore()
    return _store


def get_matching_engine() -> MatchingEngine:
    global _engine
    if _engine is None:
        _engine = _build_engine(DEFAULT_PERCOLATOR_CONFIG)
    return _engine


def get_bookstore_service() -> BookstoreService:
    global _service
    if _service is None:
        _service = BookstoreService(
            get_record_store(),
            get_matching_engine(),
            DEFAULT_PERCOLATOR_CONFIG.index,
        )
    return _service


def reset_dependencies() -> None:
    global _store, _engine, _service
    _store = None
    _engine = None
    _service = None
