"""Tests for persisted progress."""
import asyncio
from pathlib import Path

import pytest

from develevate.challenges.catalog import ChallengeCatalog
from develevate.challenges.types import Language
from develevate.storage.database import Database
from develevate.storage.progress import ProgressStore


@pytest.mark.asyncio
async def test_state_round_trip(database: Database):
    await database.set_state("/a", "key", {"nested": [1, 2]})

    assert await database.get_state("/a", "key") == {"nested": [1, 2]}
    assert await database.get_state("/a", "missing", default="x") == "x"

    await database.set_state("/a", "key", "replaced")
    assert await database.get_state("/a", "key") == "replaced"


@pytest.mark.asyncio
async def test_progress_starts_empty(store: ProgressStore):
    assert await store.get_progress() == {Language.JAVASCRIPT: set(), Language.PYTHON: set()}
    assert await store.get_active() is None
    assert await store.get_hint_cursor("js-1") == 0


@pytest.mark.asyncio
async def test_mark_completed_reports_counts(store: ProgressStore):
    assert await store.mark_completed(Language.JAVASCRIPT, "js-1") == (0, 1)
    assert await store.mark_completed(Language.JAVASCRIPT, "js-2") == (1, 2)
    assert await store.mark_completed(Language.JAVASCRIPT, "js-1") == (2, 2)

    assert (await store.get_progress())[Language.JAVASCRIPT] == {"js-1", "js-2"}
    assert await store.completed_count(Language.PYTHON) == 0


@pytest.mark.asyncio
async def test_concurrent_completions_are_not_lost(store: ProgressStore):
    ids = [f"py-{n}" for n in range(10)]

    await asyncio.gather(*(store.mark_completed(Language.PYTHON, i) for i in ids))

    assert (await store.get_progress())[Language.PYTHON] == set(ids)


@pytest.mark.asyncio
async def test_hint_cursor_stops_at_limit(store: ProgressStore):
    assert await store.advance_hint_cursor("js-1", 2)
    assert await store.advance_hint_cursor("js-1", 2)
    assert not await store.advance_hint_cursor("js-1", 2)
    assert await store.get_hint_cursor("js-1") == 2

    await store.reset_hint_cursor("js-1")
    assert await store.get_hint_cursor("js-1") == 0


@pytest.mark.asyncio
async def test_hint_cursor_without_hints_never_moves(store: ProgressStore):
    assert not await store.advance_hint_cursor("js-2", 0)
    assert await store.get_hint_cursor("js-2") == 0


@pytest.mark.asyncio
async def test_workspaces_are_separate(database: Database, catalog: ChallengeCatalog):
    first = ProgressStore(database, "/first")
    second = ProgressStore(database, "/second")

    await first.mark_completed(Language.JAVASCRIPT, "js-1")
    await first.advance_hint_cursor("js-1", 3)
    await first.set_active(catalog.find_by_id("js-1"))

    assert (await second.get_progress())[Language.JAVASCRIPT] == set()
    assert await second.get_hint_cursor("js-1") == 0
    assert await second.get_active() is None


@pytest.mark.asyncio
async def test_progress_survives_reconnect(tmp_path: Path, catalog: ChallengeCatalog):
    path = tmp_path / "nested" / "state.db"
    challenge = catalog.find_by_id("py-1")

    async with Database(path) as db:
        store = ProgressStore(db, "/workspace")
        await store.mark_completed(Language.PYTHON, "py-1")
        await store.advance_hint_cursor("py-1", 1)
        await store.set_active(challenge)

    async with Database(path) as db:
        store = ProgressStore(db, "/workspace")
        assert (await store.get_progress())[Language.PYTHON] == {"py-1"}
        assert await store.get_hint_cursor("py-1") == 1
        active = await store.get_active()
        assert active.challenge == challenge
        assert active.ordinal == 1
