"""Model Catalog Browser State.

Owns the selected provider's records and load state, derives the
filtered, searched and sorted view, and builds detail summaries.
"""

from src.model_catalog.config import (
    DEFAULT_CATALOG_CONFIG,
    CatalogConfig,
    CatalogSnapshot,
    EmptyState,
    LoadStatus,
    QueryState,
    SortOption,
)
from src.model_catalog.query import (
    derive,
    filter_by_capabilities,
    matches_search,
    search_records,
    sort_records,
)
from src.model_catalog.store import CatalogStore, FetchTicket
from src.model_catalog.detail import ModelDetail, build_detail, format_popularity, record_flags

__all__ = [
    # Config
    "CatalogConfig",
    "CatalogSnapshot",
    "DEFAULT_CATALOG_CONFIG",
    "EmptyState",
    "LoadStatus",
    "QueryState",
    "SortOption",
    # Query pipeline
    "derive",
    "filter_by_capabilities",
    "matches_search",
    "search_records",
    "sort_records",
    # Store
    "CatalogStore",
    "FetchTicket",
    # Detail
    "ModelDetail",
    "build_detail",
    "format_popularity",
    "record_flags",
]
