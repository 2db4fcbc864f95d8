"""Tests for output verification."""
import pytest

from develevate.challenges.catalog import ChallengeCatalog
from develevate.challenges.types import Language
from develevate.challenges.verifier import Verifier, output_matches
from develevate.runner.executor import ExecutionResult
from develevate.storage.progress import ProgressStore


@pytest.mark.parametrize(
    "stdout, expected, matches",
    [
        ("6", "6", True),
        ("6\n", "6", True),
        ("  \n6\r\n\t", "6", True),
        ("7", "6", False),
        ("hello  world", "hello world", False),
        ("hello\tworld", "hello world", False),
        ("Hello world", "hello world", False),
        ("6.0", "6", False),
        ("", "6", False),
    ],
)
def test_output_matches_is_exact_after_trim(stdout: str, expected: str, matches: bool):
    assert output_matches(stdout, expected) is matches


@pytest.mark.asyncio
async def test_pass_records_completion_and_resets_hints(
    catalog: ChallengeCatalog, store: ProgressStore
):
    challenge = catalog.find_by_id("js-1")
    await store.advance_hint_cursor("js-1", 3)
    await store.advance_hint_cursor("js-1", 3)

    verdict = await Verifier(store).verify(ExecutionResult(stdout="6\n", returncode=0), challenge)

    assert verdict.passed
    assert verdict.actual == "6"
    assert (verdict.completed_before, verdict.completed_after) == (0, 1)
    assert (await store.get_progress())[Language.JAVASCRIPT] == {"js-1"}
    assert await store.get_hint_cursor("js-1") == 0


@pytest.mark.asyncio
async def test_fail_changes_nothing(catalog: ChallengeCatalog, store: ProgressStore):
    challenge = catalog.find_by_id("js-1")
    await store.advance_hint_cursor("js-1", 3)

    verdict = await Verifier(store).verify(ExecutionResult(stdout="7\n", returncode=0), challenge)

    assert not verdict.passed
    assert verdict.expected == "6"
    assert verdict.actual == "7"
    assert verdict.completed_before is None
    assert (await store.get_progress())[Language.JAVASCRIPT] == set()
    assert await store.get_hint_cursor("js-1") == 1


@pytest.mark.asyncio
async def test_passing_twice_is_idempotent(catalog: ChallengeCatalog, store: ProgressStore):
    challenge = catalog.find_by_id("py-1")
    verifier = Verifier(store)
    result = ExecutionResult(stdout="6", returncode=0)

    first = await verifier.verify(result, challenge)
    progress_once = await store.get_progress()
    second = await verifier.verify(result, challenge)

    assert await store.get_progress() == progress_once
    assert (first.completed_before, first.completed_after) == (0, 1)
    assert (second.completed_before, second.completed_after) == (1, 1)
