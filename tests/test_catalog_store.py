"""Tests for the catalog store state machine."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.model_catalog.config import CatalogConfig, EmptyState, LoadStatus, SortOption
from src.model_catalog.store import CatalogStore
from src.model_providers.config import CapabilityTag, ProviderId
from src.model_providers.exceptions import FetchFailedError, UnknownProviderError


class GatedService:
    """Fake provider service whose fetch resolves only when released."""

    def __init__(self, provider_id, records, error=None):
        self.provider_id = provider_id
        self.records = records
        self.error = error
        self.release = asyncio.Event()
        self.calls = 0

    async def fetch_models(self):
        self.calls += 1
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return list(self.records)


class ScriptedService:
    """Fake provider service returning (or raising) scripted outcomes in order."""

    def __init__(self, provider_id, *outcomes):
        self.provider_id = provider_id
        self.fetch_models = AsyncMock(side_effect=list(outcomes))


# ═══════════════════════════════════════════════════════════════════════
# Test Initial State and Loading
# ═══════════════════════════════════════════════════════════════════════


class TestInitialState:
    """Test a freshly created store."""

    def test_starts_idle(self, registry):
        store = CatalogStore(registry)
        assert store.status == LoadStatus.IDLE
        assert store.provider == ProviderId.OPENAI
        assert store.records == ()
        assert store.error_message is None
        assert store.in_flight is None
        assert store.empty_state == EmptyState.NO_DATA

    def test_config_defaults(self, registry):
        store = CatalogStore(
            registry,
            CatalogConfig(default_provider=ProviderId.LLAMA, default_sort=SortOption.NAME),
        )
        assert store.provider == ProviderId.LLAMA
        assert store.query.sort_option == SortOption.NAME


class TestLoad:
    """Test loading through the real mock providers."""

    @pytest.mark.asyncio
    async def test_load_success(self, registry):
        store = CatalogStore(registry)
        await store.load()
        assert store.status == LoadStatus.READY
        assert store.records
        assert all(r.provider == ProviderId.OPENAI for r in store.records)
        assert store.in_flight is None
        assert store.empty_state is None

    @pytest.mark.asyncio
    async def test_derived_records_follow_query(self, registry):
        store = CatalogStore(registry, CatalogConfig(default_provider=ProviderId.DEEPSEEK))
        await store.load()
        store.set_search_text("coder")
        assert [r.id for r in store.derived_records] == [
            "deepseek-ai/DeepSeek-Coder-V2-Instruct",
        ]

    @pytest.mark.asyncio
    async def test_loading_state_while_in_flight(self, registry, make_record):
        service = GatedService(ProviderId.OPENAI, [make_record("a")])
        registry.register(ProviderId.OPENAI, service)
        store = CatalogStore(registry)

        task = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        assert store.status == LoadStatus.LOADING
        assert store.is_loading
        assert not store.is_refreshing
        assert store.empty_state == EmptyState.LOADING
        assert store.in_flight.provider == ProviderId.OPENAI

        service.release.set()
        await task
        assert store.status == LoadStatus.READY
        assert [r.id for r in store.records] == ["a"]

    @pytest.mark.asyncio
    async def test_failure_on_empty_list(self, registry):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(ProviderId.OPENAI, FetchFailedError("Service unavailable")),
        )
        store = CatalogStore(registry)
        await store.load()
        assert store.status == LoadStatus.ERRORED
        assert store.error_message == "Service unavailable"
        assert store.records == ()
        assert store.empty_state == EmptyState.ERROR

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, registry, caplog):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(ProviderId.OPENAI, FetchFailedError("Service unavailable")),
        )
        store = CatalogStore(registry)
        with caplog.at_level(logging.WARNING, logger="src.model_catalog.store"):
            await store.load()
        assert any("Service unavailable" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error(self, registry):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(ProviderId.OPENAI, ConnectionError("network down")),
        )
        store = CatalogStore(registry)
        await store.load()
        assert store.status == LoadStatus.ERRORED
        assert store.in_flight is None
        assert "network down" in store.error_message
        assert store.empty_state == EmptyState.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_exception_on_refresh_keeps_list(self, registry, make_record):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(
                ProviderId.OPENAI, [make_record("a")], ConnectionError("network down"),
            ),
        )
        store = CatalogStore(registry)
        await store.load()
        await store.refresh()
        assert store.status == LoadStatus.ERRORED
        assert store.in_flight is None
        assert [r.id for r in store.records] == ["a"]
        assert store.empty_state is None

    @pytest.mark.asyncio
    async def test_failure_log_carries_error_details(self, registry, caplog):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(ProviderId.OPENAI, ConnectionError("network down")),
        )
        store = CatalogStore(registry)
        with caplog.at_level(logging.WARNING, logger="src.model_catalog.store"):
            await store.load()
        record = next(r for r in caplog.records if r.levelno == logging.WARNING)
        assert record.extra_data["code"] == "FETCH_FAILED"
        assert record.extra_data["provider"] == "openai"
        assert record.extra_data["reason"] == "unknown"

    @pytest.mark.asyncio
    async def test_foreign_records_rejected(self, registry, make_record):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(
                ProviderId.OPENAI,
                [make_record("a"), make_record("gemini-pro", provider=ProviderId.GEMINI)],
            ),
        )
        store = CatalogStore(registry)
        await store.load()
        assert store.status == LoadStatus.ERRORED
        assert store.records == ()
        assert "gemini-pro" in store.error_message

    @pytest.mark.asyncio
    async def test_load_clears_previous_error(self, registry, make_record):
        registry.register(
            ProviderId.OPENAI,
            ScriptedService(ProviderId.OPENAI, FetchFailedError("down"), [make_record("a")]),
        )
        store = CatalogStore(registry)
        await store.load()
        assert store.status == LoadStatus.ERRORED
        await store.load()
        assert store.status == LoadStatus.READY
        assert store.error_message is None


# ═══════════════════════════════════════════════════════════════════════
# Test Refresh
# ═══════════════════════════════════════════════════════════════════════


class TestRefresh:
    """Test pull-to-refresh semantics."""

    @pytest.mark.asyncio
    async def test_refresh_keeps_list_visible(self, registry, make_record):
        service = GatedService(ProviderId.OPENAI, [make_record("new")])
        registry.register(
            ProviderId.OPENAI, ScriptedService(ProviderId.OPENAI, [make_record("old")]),
        )
        store = CatalogStore(registry)
        await store.load()
        registry.register(ProviderId.OPENAI, service)

        task = asyncio.create_task(store.refresh())
        await asyncio.sleep(0)
        assert store.is_refreshing
        assert [r.id for r in store.records] == ["old"]

        service.release.set()
        await task
        assert [r.id for r in store.records] == ["new"]

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_list(self, registry, make_record):
        registry.register(
            ProviderId.DEEPSEEK,
            ScriptedService(
                ProviderId.DEEPSEEK,
                [make_record("r1", provider=ProviderId.DEEPSEEK)],
                FetchFailedError("Random refresh failure"),
            ),
        )
        store = CatalogStore(registry, CatalogConfig(default_provider=ProviderId.DEEPSEEK))
        await store.load()
        await store.refresh()
        assert store.status == LoadStatus.ERRORED
        assert store.error_message == "Random refresh failure"
        assert [r.id for r in store.records] == ["r1"]
        assert store.empty_state is None

    @pytest.mark.asyncio
    async def test_load_with_clear_empties_list(self, registry, make_record):
        service = GatedService(ProviderId.OPENAI, [make_record("b")])
        registry.register(
            ProviderId.OPENAI, ScriptedService(ProviderId.OPENAI, [make_record("a")]),
        )
        store = CatalogStore(registry)
        await store.load()
        registry.register(ProviderId.OPENAI, service)

        task = asyncio.create_task(store.load(clear_existing=True))
        await asyncio.sleep(0)
        assert store.records == ()
        service.release.set()
        await task


# ═══════════════════════════════════════════════════════════════════════
# Test Provider Switching
# ═══════════════════════════════════════════════════════════════════════


class TestSelectProvider:
    """Test provider switching and filter reset."""

    @pytest.mark.asyncio
    async def test_switch_loads_new_provider(self, registry):
        store = CatalogStore(registry)
        await store.load()
        await store.select_provider(ProviderId.GEMINI)
        assert store.provider == ProviderId.GEMINI
        assert store.status == LoadStatus.READY
        assert all(r.provider == ProviderId.GEMINI for r in store.records)

    @pytest.mark.asyncio
    async def test_switch_accepts_string(self, registry):
        store = CatalogStore(registry)
        await store.select_provider("llama")
        assert store.provider == ProviderId.LLAMA

    @pytest.mark.asyncio
    async def test_unknown_provider_raises(self, registry):
        store = CatalogStore(registry)
        with pytest.raises(UnknownProviderError):
            await store.select_provider("anthropic")
        assert store.provider == ProviderId.OPENAI

    @pytest.mark.asyncio
    async def test_switch_resets_filters_keeps_sort(self, registry):
        store = CatalogStore(registry)
        await store.load()
        store.set_search_text("gpt")
        store.toggle_capability(CapabilityTag.TEXT)
        store.set_sort_option(SortOption.NAME)

        await store.select_provider(ProviderId.LLAMA)
        assert store.query.search_text == ""
        assert store.query.selected_capabilities == frozenset()
        assert store.query.sort_option == SortOption.NAME

    @pytest.mark.asyncio
    async def test_switch_clears_list_immediately(self, registry, make_record):
        service = GatedService(ProviderId.GEMINI, [make_record("gemini-pro", provider=ProviderId.GEMINI)])
        registry.register(ProviderId.GEMINI, service)
        store = CatalogStore(registry)
        await store.load()
        assert store.records

        task = asyncio.create_task(store.select_provider(ProviderId.GEMINI))
        await asyncio.sleep(0)
        assert store.records == ()
        assert store.provider == ProviderId.GEMINI
        service.release.set()
        await task

    @pytest.mark.asyncio
    async def test_same_provider_is_noop_once_loaded(self, registry, make_record):
        service = ScriptedService(ProviderId.OPENAI, [make_record("a")], [make_record("b")])
        registry.register(ProviderId.OPENAI, service)
        store = CatalogStore(registry)
        await store.load()
        await store.select_provider(ProviderId.OPENAI)
        assert service.fetch_models.await_count == 1
        assert [r.id for r in store.records] == ["a"]

    @pytest.mark.asyncio
    async def test_same_provider_loads_when_idle(self, registry):
        store = CatalogStore(registry)
        await store.select_provider(ProviderId.OPENAI)
        assert store.status == LoadStatus.READY


# ═══════════════════════════════════════════════════════════════════════
# Test Superseded Fetches
# ═══════════════════════════════════════════════════════════════════════


class TestSupersededFetch:
    """A late result from a previous provider is never applied."""

    async def _start_switch(self, registry, make_record):
        openai = GatedService(ProviderId.OPENAI, [make_record("o1")])
        gemini = GatedService(ProviderId.GEMINI, [make_record("g1", provider=ProviderId.GEMINI)])
        registry.register(ProviderId.OPENAI, openai)
        registry.register(ProviderId.GEMINI, gemini)
        store = CatalogStore(registry)

        first = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        second = asyncio.create_task(store.select_provider(ProviderId.GEMINI))
        await asyncio.sleep(0)
        return store, openai, gemini, first, second

    @pytest.mark.asyncio
    async def test_old_provider_resolves_first(self, registry, make_record):
        store, openai, gemini, first, second = await self._start_switch(registry, make_record)

        openai.release.set()
        await first
        assert store.records == ()
        assert store.status == LoadStatus.LOADING

        gemini.release.set()
        await second
        assert [r.id for r in store.records] == ["g1"]
        assert store.status == LoadStatus.READY

    @pytest.mark.asyncio
    async def test_old_provider_resolves_last(self, registry, make_record):
        store, openai, gemini, first, second = await self._start_switch(registry, make_record)

        gemini.release.set()
        await second
        openai.release.set()
        await first
        assert [r.id for r in store.records] == ["g1"]
        assert store.provider == ProviderId.GEMINI
        assert store.status == LoadStatus.READY

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [FetchFailedError("late failure"), ConnectionError("late failure")],
    )
    async def test_superseded_failure_discarded(self, registry, make_record, error):
        openai = GatedService(ProviderId.OPENAI, [], error=error)
        registry.register(ProviderId.OPENAI, openai)
        store = CatalogStore(registry)

        first = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        await store.select_provider(ProviderId.LLAMA)
        openai.release.set()
        await first
        assert store.status == LoadStatus.READY
        assert store.error_message is None
        assert all(r.provider == ProviderId.LLAMA for r in store.records)

    @pytest.mark.asyncio
    async def test_reload_supersedes_same_provider(self, registry, make_record):
        slow = GatedService(ProviderId.OPENAI, [make_record("stale")])
        registry.register(ProviderId.OPENAI, slow)
        store = CatalogStore(registry)
        first = asyncio.create_task(store.load())
        await asyncio.sleep(0)

        registry.register(
            ProviderId.OPENAI, ScriptedService(ProviderId.OPENAI, [make_record("fresh")]),
        )
        await store.load()
        slow.release.set()
        await first
        assert [r.id for r in store.records] == ["fresh"]


# ═══════════════════════════════════════════════════════════════════════
# Test Query Mutators and Observers
# ═══════════════════════════════════════════════════════════════════════


class TestQueryMutators:
    """Test the query setters and empty-state classification."""

    @pytest.mark.asyncio
    async def test_no_matches_state(self, registry):
        store = CatalogStore(registry)
        await store.load()
        store.set_search_text("no-such-model")
        assert store.derived_records == []
        assert store.empty_state == EmptyState.NO_MATCHES

    @pytest.mark.asyncio
    async def test_capability_filter(self, registry):
        store = CatalogStore(registry)
        await store.load()
        store.toggle_capability("image")
        store.toggle_capability(CapabilityTag.TEXT)
        derived = store.derived_records
        assert derived
        assert all(
            {CapabilityTag.TEXT, CapabilityTag.IMAGE} <= r.input_capability_set for r in derived
        )

    @pytest.mark.asyncio
    async def test_clear_filters(self, registry):
        store = CatalogStore(registry)
        await store.load()
        store.set_search_text("gpt")
        store.toggle_capability(CapabilityTag.AUDIO)
        store.set_sort_option("name")
        store.clear_filters()
        assert not store.query.has_filters
        assert store.query.sort_option == SortOption.NAME
        assert len(store.derived_records) == len(store.records)

    def test_invalid_sort_option(self, registry):
        store = CatalogStore(registry)
        with pytest.raises(ValueError):
            store.set_sort_option("random")

    def test_snapshot(self, registry):
        store = CatalogStore(registry)
        store.set_search_text("x")
        snapshot = store.snapshot()
        assert snapshot.status == LoadStatus.IDLE
        assert snapshot.query.search_text == "x"
        assert snapshot.empty_state == EmptyState.NO_DATA


class TestObservers:
    """Test change notification."""

    @pytest.mark.asyncio
    async def test_listener_sees_loading_then_ready(self, registry):
        store = CatalogStore(registry)
        seen = []
        store.subscribe(lambda s: seen.append(s.status))
        await store.load()
        assert seen == [LoadStatus.LOADING, LoadStatus.READY]

    def test_unchanged_value_does_not_notify(self, registry):
        store = CatalogStore(registry)
        listener = MagicMock()
        store.subscribe(listener)
        store.set_search_text("")
        store.set_sort_option(SortOption.POPULARITY)
        store.clear_filters()
        listener.assert_not_called()

    def test_unsubscribe(self, registry):
        store = CatalogStore(registry)
        listener = MagicMock()
        store.subscribe(listener)
        store.unsubscribe(listener)
        store.set_search_text("abc")
        listener.assert_not_called()

    def test_subscribe_twice_notifies_once(self, registry):
        store = CatalogStore(registry)
        listener = MagicMock()
        store.subscribe(listener)
        store.subscribe(listener)
        store.toggle_capability(CapabilityTag.CODE)
        listener.assert_called_once_with(store)

    def test_failing_listener_is_logged(self, registry, caplog):
        store = CatalogStore(registry)
        after = MagicMock()
        store.subscribe(MagicMock(side_effect=RuntimeError("listener bug")))
        store.subscribe(after)
        with caplog.at_level(logging.ERROR, logger="src.model_catalog.store"):
            store.set_search_text("abc")
        after.assert_called_once()
        assert any("listener" in r.getMessage() for r in caplog.records)
