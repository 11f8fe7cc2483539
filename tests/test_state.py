"""Tests for the observable screen state containers."""

import asyncio
from types import SimpleNamespace

import pytest

from goodbooks.db.repository import BookRepository
from goodbooks.errors import CatalogSearchError
from goodbooks.models import ReadingStatus
from goodbooks.services import catalog as catalog_module
from goodbooks.services.state import LibraryState, SearchState, ShelfDetailState, StatsState
from goodbooks.services.statistics import YearlyGoal
from tests.factories import TODAY, FakeCatalog, make_book, make_catalog_book


async def _seed(repository: BookRepository) -> None:
    await repository.insert_book(make_book("b1", "Dune", authors="Frank Herbert", page_count=412))
    await repository.insert_book(make_book("b2", "Emma", authors="Jane Austen", page_count=300))
    await repository.insert_book(make_book("b3", "Persuasion", authors="Jane Austen", page_count=250))


class TestObservableState:
    """Tests for subscriptions."""

    @pytest.mark.asyncio
    async def test_subscribe_and_unsubscribe(self, repository: BookRepository):
        state = LibraryState(repository, today=lambda: TODAY)
        seen = []
        unsubscribe = state.subscribe(lambda s: seen.append(len(s.books)))

        await state.reload()
        unsubscribe()
        await state.reload()

        assert seen == [0]


class TestLibraryState:
    """Tests for LibraryState."""

    @pytest.mark.asyncio
    async def test_reload(self, repository: BookRepository):
        await _seed(repository)
        shelf = await repository.create_shelf("Classics", None, 0)
        await repository.add_book_to_shelf("b2", shelf.id)
        state = LibraryState(repository, today=lambda: TODAY)

        await state.reload()

        assert [b.id for b in state.books] == ["b1", "b2", "b3"]
        assert [(c.shelf.name, c.count) for c in state.shelves] == [("Classics", 1)]
        assert [s.name for s in state.books_to_shelves["b2"]] == ["Classics"]
        assert not state.is_loading

    @pytest.mark.asyncio
    async def test_status_filter_toggles(self, repository: BookRepository):
        await _seed(repository)
        state = LibraryState(repository, today=lambda: TODAY)
        await state.reload()
        await state.start_reading("b1")

        state.set_status_filter(ReadingStatus.IN_PROGRESS)
        assert [b.id for b in state.books] == ["b1"]

        state.set_status_filter(ReadingStatus.IN_PROGRESS)
        assert state.filter.status is None
        assert len(state.books) == 3

    @pytest.mark.asyncio
    async def test_search_and_advanced_filters(self, repository: BookRepository):
        await _seed(repository)
        state = LibraryState(repository, today=lambda: TODAY)
        await state.reload()

        state.set_search_query("austen")
        assert [b.id for b in state.books] == ["b2", "b3"]

        state.set_advanced_filters("260", "abc", "", "")
        assert [b.id for b in state.books] == ["b2"]
        assert state.filter.max_pages is None

        state.clear_filters()
        assert len(state.books) == 3

    @pytest.mark.asyncio
    async def test_filters_survive_reload(self, repository: BookRepository):
        await _seed(repository)
        state = LibraryState(repository, today=lambda: TODAY)
        await state.reload()
        state.set_search_query("dune")

        await repository.insert_book(make_book("b4", "Dune Messiah"))
        await state.reload()

        assert [b.id for b in state.books] == ["b1", "b4"]

    @pytest.mark.asyncio
    async def test_reading_workflow(self, repository: BookRepository):
        await _seed(repository)
        state = LibraryState(repository, today=lambda: TODAY)
        await state.reload()

        await state.start_reading("b1")
        book = await repository.get_book("b1")
        assert book.status == ReadingStatus.IN_PROGRESS
        assert book.start_date == "2024-06-15"
        assert book.end_date is None

        await state.finish_reading("b1", 9)
        book = await repository.get_book("b1")
        assert book.status == ReadingStatus.COMPLETED
        assert book.start_date == "2024-06-15"
        assert book.end_date == "2024-06-15"
        assert book.rating == 9

    @pytest.mark.asyncio
    async def test_restart_clears_end_date(self, repository: BookRepository):
        await repository.insert_book(
            make_book("b1", status=ReadingStatus.COMPLETED, start_date="2024-01-01", end_date="2024-02-01")
        )
        state = LibraryState(repository, today=lambda: TODAY)

        await state.start_reading("b1")

        book = await repository.get_book("b1")
        assert book.start_date == "2024-06-15"
        assert book.end_date is None

    @pytest.mark.asyncio
    async def test_finish_without_start_keeps_empty_start(self, repository: BookRepository):
        await repository.insert_book(make_book("b1"))
        state = LibraryState(repository, today=lambda: TODAY)

        await state.finish_reading("b1", 6)

        book = await repository.get_book("b1")
        assert book.start_date is None
        assert book.end_date == "2024-06-15"

    @pytest.mark.asyncio
    async def test_delete_and_shelves(self, repository: BookRepository):
        await _seed(repository)
        state = LibraryState(repository, today=lambda: TODAY)

        shelf = await state.create_shelf("Later", "For the summer", 0)
        assert [c.shelf.id for c in state.shelves] == [shelf.id]

        await state.delete_book("b1")
        assert [b.id for b in state.books] == ["b2", "b3"]

        await state.delete_shelf(shelf.id)
        assert state.shelves == []


class TestShelfDetailState:
    """Tests for ShelfDetailState."""

    @pytest.mark.asyncio
    async def test_add_and_remove(self, repository: BookRepository):
        await _seed(repository)
        shelf = await repository.create_shelf("Classics", None, 0)
        state = ShelfDetailState(repository, shelf.id)
        await state.reload()

        await state.add_book("b2")
        assert [b.id for b in state.books_in_shelf] == ["b2"]
        assert [b.id for b in state.available_books] == ["b1", "b3"]

        await state.remove_book("b2")
        assert state.books_in_shelf == []
        assert len(state.available_books) == 3

    @pytest.mark.asyncio
    async def test_unknown_shelf(self, repository: BookRepository):
        await _seed(repository)
        state = ShelfDetailState(repository, 99)
        await state.reload()

        await state.add_book("b1")

        assert state.shelf is None
        assert await repository.get_memberships() == []


class TestStatsState:
    """Tests for StatsState."""

    @pytest.mark.asyncio
    async def test_reload_and_goal(self, repository: BookRepository):
        await repository.insert_book(
            make_book("b1", status=ReadingStatus.COMPLETED, end_date="2024-03-01", rating=8)
        )
        state = StatsState(repository, YearlyGoal(4), today=lambda: TODAY)

        await state.reload()
        assert state.stats.books_read_this_year == 1
        assert state.stats.yearly_goal_progress == 25

        state.update_yearly_goal(2)
        assert state.stats.yearly_goal_progress == 50

        with pytest.raises(ValueError):
            state.update_yearly_goal(0)
        assert state.yearly_goal.value == 2


class TestSearchState:
    """Tests for SearchState."""

    @pytest.mark.asyncio
    async def test_search_and_save(self, repository: BookRepository):
        state = SearchState(repository)
        state.set_query("dune")

        await state.search()
        assert [r.id for r in state.results] == ["vol1"]
        assert not state.is_loading

        state.select(state.results[0])
        saved = await state.save_selected()

        assert saved.status == ReadingStatus.PENDING
        assert (await repository.get_book("vol1")).thumbnail_url.startswith("https://")

    @pytest.mark.asyncio
    async def test_blank_query_is_ignored(self, repository: BookRepository, fake_catalog):
        state = SearchState(repository)
        state.set_query("   ")

        await state.search()

        assert fake_catalog.queries == []

    @pytest.mark.asyncio
    async def test_save_without_selection(self, repository: BookRepository):
        assert await SearchState(repository).save_selected() is None

    @pytest.mark.asyncio
    async def test_save_manual(self, repository: BookRepository):
        book = await SearchState(repository).save_manual("Zine", author="", pages="12")

        stored = await repository.get_book(book.id)
        assert stored.id.startswith("manual_")
        assert stored.page_count == 12

    @pytest.mark.asyncio
    async def test_manual_entries_in_the_same_second_are_kept(self, repository: BookRepository, monkeypatch):
        monkeypatch.setattr(catalog_module, "time", SimpleNamespace(time=lambda: 1700000000.4))
        state = SearchState(repository)

        first = await state.save_manual("First")
        second = await state.save_manual("Second")

        assert first.id == "manual_1700000000"
        assert second.id == "manual_1700000000_2"
        titles = {b.id: b.title for b in await repository.get_all_books()}
        assert titles == {"manual_1700000000": "First", "manual_1700000000_2": "Second"}

    @pytest.mark.asyncio
    async def test_catalog_failure_sets_error_message(self, session_maker):
        catalog = FakeCatalog(error=CatalogSearchError("catalog offline"))
        state = SearchState(BookRepository(session_maker, catalog_search=catalog.search))
        state.set_query("dune")

        await state.search()

        assert state.error_message == "Search failed: catalog offline"
        assert state.results == []
        assert not state.is_loading

    @pytest.mark.asyncio
    async def test_successful_search_clears_previous_error(self, session_maker):
        catalog = FakeCatalog(error=CatalogSearchError("catalog offline"))
        state = SearchState(BookRepository(session_maker, catalog_search=catalog.search))
        state.set_query("dune")
        await state.search()

        catalog.error = None
        catalog.results = [make_catalog_book()]
        await state.search()

        assert state.error_message is None
        assert [r.id for r in state.results] == ["vol1"]

    @pytest.mark.asyncio
    async def test_stale_response_is_dropped(self, session_maker):
        slow_started = asyncio.Event()
        release_slow = asyncio.Event()

        async def slow_catalog(query):
            if query == "slow":
                slow_started.set()
                await release_slow.wait()
            return [make_catalog_book(book_id=query)]

        state = SearchState(BookRepository(session_maker, catalog_search=slow_catalog))
        state.set_query("slow")
        slow = asyncio.create_task(state.search())
        await slow_started.wait()

        state.set_query("fast")
        await state.search()
        release_slow.set()
        await slow

        assert [r.id for r in state.results] == ["fast"]
        assert not state.is_loading
