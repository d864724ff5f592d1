"""Model Catalog — Configuration and query state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from src.model_providers.config import CapabilityTag, ProviderId


class SortOption(str, Enum):
    """Orderings available for the catalog list."""

    POPULARITY = "popularity"
    NAME = "name"
    RELEASE_DATE_DESC = "release_date_desc"
    CAPABILITY_COUNT = "capability_count"

    @property
    def label(self) -> str:
        return {
            SortOption.POPULARITY: "Popularity",
            SortOption.NAME: "Name",
            SortOption.RELEASE_DATE_DESC: "Newest",
            SortOption.CAPABILITY_COUNT: "Capabilities",
        }[self]


class LoadStatus(str, Enum):
    """Load state of the catalog store."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class EmptyState(str, Enum):
    """Why the catalog list has nothing to show."""

    LOADING = "loading"
    ERROR = "error"
    NO_DATA = "no_data"
    NO_MATCHES = "no_matches"


@dataclass(frozen=True)
class QueryState:
    """Search text, capability filter and sort driving the derived view."""

    search_text: str = ""
    selected_capabilities: frozenset = frozenset()
    sort_option: SortOption = SortOption.POPULARITY

    @property
    def normalized_search(self) -> str:
        return self.search_text.strip().casefold()

    @property
    def has_filters(self) -> bool:
        return bool(self.normalized_search or self.selected_capabilities)

    def with_search(self, text: str) -> "QueryState":
        return replace(self, search_text=text)

    def with_capability_toggled(self, capability: CapabilityTag) -> "QueryState":
        selected = set(self.selected_capabilities)
        selected.symmetric_difference_update({capability})
        return replace(self, selected_capabilities=frozenset(selected))

    def with_sort(self, option: SortOption) -> "QueryState":
        return replace(self, sort_option=option)

    def cleared(self) -> "QueryState":
        """Reset search and capability filters; sort preference survives."""
        return QueryState(sort_option=self.sort_option)

    def to_dict(self) -> dict:
        return {
            "search_text": self.search_text,
            "selected_capabilities": sorted(c.value for c in self.selected_capabilities),
            "sort_option": self.sort_option.value,
        }


@dataclass
class CatalogConfig:
    """Configuration for the catalog store."""

    default_provider: ProviderId = ProviderId.OPENAI
    default_sort: SortOption = SortOption.POPULARITY


DEFAULT_CATALOG_CONFIG = CatalogConfig()


@dataclass(frozen=True)
class CatalogSnapshot:
    """Read-only view of the store handed to the presentation layer."""

    provider: ProviderId
    status: LoadStatus
    records: tuple
    derived_records: tuple
    query: QueryState
    error_message: Optional[str] = None
    empty_state: Optional[EmptyState] = None

    @property
    def is_refreshing(self) -> bool:
        return self.status == LoadStatus.LOADING and bool(self.records)

    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "status": self.status.value,
            "records": [r.to_dict() for r in self.records],
            "derived_records": [r.id for r in self.derived_records],
            "query": self.query.to_dict(),
            "error_message": self.error_message,
            "empty_state": self.empty_state.value if self.empty_state else None,
        }
