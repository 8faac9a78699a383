"""Tests for the stateful search session.

Feature: catalog-search
Properties: "no results" and "unavailable" stay distinguishable, only the
latest query's results are published
"""

import pytest

from catalog_search.config import Settings
from catalog_search.errors import CatalogFetchError
from catalog_search.models.search import SearchFilters
from catalog_search.services.search_session import SearchSession, SearchStatus
from catalog_search.storage.catalog_cache import CatalogCache
from factories import FakeClock, FakeFetcher


def make_session(*outcomes, clock=None, **kwargs):
    states = []
    cache = CatalogCache(FakeFetcher(*outcomes), ttl_seconds=300, clock=clock or FakeClock())
    session = SearchSession(cache, debounce_ms=0, on_change=states.append, **kwargs)
    return session, states


class TestSearchSessionStates:
    """Published state transitions."""

    @pytest.mark.asyncio
    async def test_loading_then_ready(self, camera_catalog):
        session, states = make_session(camera_catalog)

        session.set_query("canon")
        assert session.is_loading
        assert session.query == "canon"

        state = await session.wait_settled()

        assert state.status == SearchStatus.READY
        assert [r.id for r in state.results] == [1, 2, 4, 5]
        assert state.total_results == 4
        assert [s.status for s in states] == [SearchStatus.LOADING, SearchStatus.READY]

    @pytest.mark.asyncio
    async def test_suggestions_published_with_results(self, camera_catalog):
        session, _ = make_session(camera_catalog, max_suggestions=3)

        session.set_query("canon")
        await session.wait_settled()

        assert [s.id for s in session.suggestions] == [1, 2, 5]

    @pytest.mark.asyncio
    async def test_no_results_is_ready_not_error(self, camera_catalog):
        session, _ = make_session(camera_catalog)

        session.set_query("zzzzzz")
        state = await session.wait_settled()

        assert state.status == SearchStatus.READY
        assert state.results == []
        assert state.error is None

    @pytest.mark.asyncio
    async def test_unavailable_catalog_is_error(self):
        session, _ = make_session(CatalogFetchError("connection refused"))

        session.set_query("canon")
        state = await session.wait_settled()

        assert state.status == SearchStatus.ERROR
        assert state.error == "Search is temporarily unavailable"
        assert state.results == []

    @pytest.mark.asyncio
    async def test_stale_catalog_sets_warning(self, camera_catalog):
        clock = FakeClock()
        session, _ = make_session(camera_catalog, CatalogFetchError("timeout"), clock=clock)

        session.set_query("sony")
        await session.wait_settled()
        assert session.warning is None

        clock.advance(301)
        session.set_query("canon")
        state = await session.wait_settled()

        assert state.status == SearchStatus.READY
        assert state.warning == "Showing cached catalog: timeout"
        assert len(state.results) == 4

    @pytest.mark.asyncio
    async def test_loading_keeps_previous_results(self, camera_catalog):
        session, _ = make_session(camera_catalog)

        session.set_query("sony")
        await session.wait_settled()
        session.set_query("sony a7")

        assert session.is_loading
        assert [r.id for r in session.results] == [3]
        await session.close()


class TestSearchSessionInput:
    """Query and filter changes."""

    @pytest.mark.asyncio
    async def test_rapid_typing_publishes_last_query_only(self, camera_catalog):
        states = []
        cache = CatalogCache(FakeFetcher(camera_catalog), clock=FakeClock())
        session = SearchSession(cache, debounce_ms=20, on_change=states.append)

        for query in ["c", "ca", "can", "cano", "canon"]:
            session.set_query(query)
        await session.wait_settled()

        ready = [s for s in states if s.status == SearchStatus.READY]
        assert [s.query for s in ready] == ["canon"]

    @pytest.mark.asyncio
    async def test_blank_query_goes_idle(self, camera_catalog):
        session, _ = make_session(camera_catalog)

        session.set_query("canon")
        session.set_query("   ")
        state = await session.wait_settled()

        assert state.status == SearchStatus.IDLE
        assert state.results == []

    @pytest.mark.asyncio
    async def test_set_filters_reruns_query(self, camera_catalog):
        session, _ = make_session(camera_catalog)

        session.set_query("canon")
        await session.wait_settled()
        session.set_filters(SearchFilters(category=["lens"]))
        state = await session.wait_settled()

        assert state.filters.category == ["lens"]
        assert [r.id for r in state.results] == [4]

    @pytest.mark.asyncio
    async def test_clear_resets_state(self, camera_catalog):
        session, _ = make_session(camera_catalog)

        session.set_query("canon")
        await session.wait_settled()
        session.clear()

        assert session.status == SearchStatus.IDLE
        assert session.query == ""
        assert session.results == []

    @pytest.mark.asyncio
    async def test_max_results_caps_results(self, camera_catalog):
        session, _ = make_session(camera_catalog, max_results=2)

        session.set_query("canon")
        state = await session.wait_settled()

        assert len(state.results) == 2


class TestSearchSessionFactories:
    """Sessions built from settings."""

    def test_autocomplete_session_uses_short_debounce(self, camera_catalog):
        settings = Settings(autocomplete_debounce_ms=150, max_suggestions=6)
        cache = CatalogCache(FakeFetcher(camera_catalog))

        session = SearchSession.for_autocomplete(cache, settings)

        assert session._controller.delay_ms == 150
        assert session.max_results == 6

    def test_results_page_session(self, camera_catalog):
        settings = Settings(search_debounce_ms=300, max_results=40)
        cache = CatalogCache(FakeFetcher(camera_catalog))

        session = SearchSession.for_results_page(cache, settings)

        assert session._controller.delay_ms == 300
        assert session.max_results == 40
