"""Catalog Store -- provider selection, load state and query state.

The store owns the raw record list of the selected provider, its load
status and the user's query. All mutation goes through its methods and
happens on the event loop that awaits them; the only suspension point is
the provider fetch.

Every fetch is issued with a ticket naming the provider and a generation
number. When a fetch completes, its result (or failure) is applied only if
the ticket still matches the store's current provider and generation;
otherwise it was superseded by a later switch or reload and is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.logging_config.context import FetchContext, generate_fetch_id
from src.model_catalog.config import (
    DEFAULT_CATALOG_CONFIG,
    CatalogConfig,
    CatalogSnapshot,
    EmptyState,
    LoadStatus,
    QueryState,
    SortOption,
)
from src.model_catalog.query import derive
from src.model_providers.config import CapabilityTag, ModelRecord, ProviderId
from src.model_providers.exceptions import (
    FetchFailedError,
    FetchFailureReason,
    UnknownProviderError,
)
from src.model_providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

StoreListener = Callable[["CatalogStore"], None]


@dataclass(frozen=True)
class FetchTicket:
    """Identity of one issued fetch."""

    provider: ProviderId
    generation: int
    fetch_id: str


class CatalogStore:
    """Observable state for the catalog browser.

    Usage::

        store = CatalogStore(ProviderRegistry())
        await store.load()
        store.set_search_text("coder")
        for record in store.derived_records:
            ...
        await store.select_provider(ProviderId.LLAMA)
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        config: Optional[CatalogConfig] = None,
    ):
        self.config = config or DEFAULT_CATALOG_CONFIG
        self.registry = registry
        self._provider: ProviderId = self.config.default_provider
        self._records: tuple = ()
        self._status = LoadStatus.IDLE
        self._error_message: Optional[str] = None
        self._query = QueryState(sort_option=self.config.default_sort)
        self._generation = 0
        self._in_flight: Optional[FetchTicket] = None
        self._listeners: list[StoreListener] = []

    # ── Read access ───────────────────────────────────────────────────

    @property
    def provider(self) -> ProviderId:
        return self._provider

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def records(self) -> tuple:
        return self._records

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def in_flight(self) -> Optional[FetchTicket]:
        return self._in_flight

    @property
    def is_loading(self) -> bool:
        return self._status == LoadStatus.LOADING

    @property
    def is_refreshing(self) -> bool:
        """Loading while the previous list stays visible."""
        return self.is_loading and bool(self._records)

    @property
    def derived_records(self) -> list[ModelRecord]:
        return derive(self._records, self._query)

    @property
    def empty_state(self) -> Optional[EmptyState]:
        """Classify an empty list using the raw records, not the derived ones."""
        if not self._records:
            if self._status == LoadStatus.LOADING:
                return EmptyState.LOADING
            if self._status == LoadStatus.ERRORED:
                return EmptyState.ERROR
            return EmptyState.NO_DATA
        if not self.derived_records:
            return EmptyState.NO_MATCHES
        return None

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            provider=self._provider,
            status=self._status,
            records=self._records,
            derived_records=tuple(self.derived_records),
            query=self._query,
            error_message=self._error_message,
            empty_state=self.empty_state,
        )

    # ── Observers ─────────────────────────────────────────────────────

    def subscribe(self, listener: StoreListener) -> None:
        """Call ``listener(store)`` after every state change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed")

    # ── Loading ───────────────────────────────────────────────────────

    async def select_provider(self, provider: ProviderId | str) -> None:
        """Switch provider and load its catalog.

        Switching clears the list immediately and resets search and
        capability filters; the sort option is kept. Selecting the current
        provider is a no-op unless nothing has been loaded yet.
        """
        try:
            provider = ProviderId.parse(provider)
        except ValueError:
            raise UnknownProviderError(provider) from None

        if provider == self._provider:
            if self._status == LoadStatus.IDLE:
                await self.load(clear_existing=True)
            return

        logger.info(f"Switching provider {self._provider.value} -> {provider.value}")
        self._provider = provider
        self._records = ()
        self._query = self._query.cleared()
        await self.load(clear_existing=True)

    async def load(self, clear_existing: bool = True) -> None:
        """Fetch the current provider's catalog.

        Args:
            clear_existing: Empty the list before fetching (initial load,
                provider switch). When False the previous list stays
                visible and survives a failed fetch.
        """
        self._generation += 1
        ticket = FetchTicket(
            provider=self._provider,
            generation=self._generation,
            fetch_id=generate_fetch_id(),
        )
        if self._in_flight is not None:
            logger.debug(
                f"Fetch {self._in_flight.fetch_id} superseded by {ticket.fetch_id}"
            )
        self._in_flight = ticket

        if clear_existing:
            self._records = ()
        self._status = LoadStatus.LOADING
        self._error_message = None
        self._notify()

        with FetchContext(
            provider=ticket.provider.value,
            fetch_id=ticket.fetch_id,
            extra={"generation": ticket.generation},
        ):
            logger.info("Fetch issued")
            try:
                records = await self.registry.fetch(ticket.provider)
                self._check_provider(ticket, records)
            except FetchFailedError as exc:
                self._fail(ticket, exc)
                return
            except Exception as exc:
                self._fail(ticket, FetchFailedError(
                    f"Unexpected error fetching {ticket.provider.value} models: {exc}",
                    provider=ticket.provider,
                    reason=FetchFailureReason.UNKNOWN,
                ))
                return

            if not self._is_current(ticket):
                logger.debug(f"Discarding {len(records)} records from superseded fetch")
                return

            self._in_flight = None
            self._records = tuple(records)
            self._status = LoadStatus.READY
            logger.info(
                f"Fetch succeeded with {len(records)} records",
                extra={"record_count": len(records)},
            )
        self._notify()

    async def refresh(self) -> None:
        """Pull-to-refresh: reload keeping the current list visible."""
        await self.load(clear_existing=False)

    def _is_current(self, ticket: FetchTicket) -> bool:
        return ticket.provider == self._provider and ticket.generation == self._generation

    @staticmethod
    def _check_provider(ticket: FetchTicket, records: list[ModelRecord]) -> None:
        foreign = [r.id for r in records if r.provider != ticket.provider]
        if foreign:
            raise FetchFailedError(
                f"{ticket.provider.value} fetch returned records of another provider: {foreign}",
                provider=ticket.provider,
                reason=FetchFailureReason.DECODE,
            )

    def _fail(self, ticket: FetchTicket, exc: FetchFailedError) -> None:
        if not self._is_current(ticket):
            logger.debug("Discarding failure of superseded fetch")
            return
        self._in_flight = None
        self._status = LoadStatus.ERRORED
        self._error_message = exc.message
        logger.warning(
            f"Fetch failed ({exc.reason.value}): {exc.message}",
            extra={"status": self._status.value, "extra_data": exc.to_dict()},
        )
        self._notify()

    # ── Query mutators ────────────────────────────────────────────────

    def set_search_text(self, text: str) -> None:
        if text != self._query.search_text:
            self._query = self._query.with_search(text)
            self._notify()

    def toggle_capability(self, capability: CapabilityTag | str) -> None:
        self._query = self._query.with_capability_toggled(CapabilityTag.parse(capability))
        self._notify()

    def set_sort_option(self, option: SortOption | str) -> None:
        option = SortOption(option)
        if option != self._query.sort_option:
            self._query = self._query.with_sort(option)
            self._notify()

    def clear_filters(self) -> None:
        """Reset search text and capability filters, keeping the sort."""
        if self._query.has_filters or self._query.search_text:
            self._query = self._query.cleared()
            self._notify()
