from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PercolatorConfig:
    backend: str = os.getenv("MATCHING_BACKEND", "memory")
    opensearch_url: str = os.getenv("OPENSEARCH_URL", "http://localhost:9200")
    index: str = os.getenv("PERCOLATOR_INDEX", "percolator_index")
    timeout: float = float(os.getenv("OPENSEARCH_TIMEOUT", "10.0"))
    create_index: bool = _env_flag("PERCOLATOR_CREATE_INDEX", True)


DEFAULT_PERCOLATOR_CONFIG = PercolatorConfig()
