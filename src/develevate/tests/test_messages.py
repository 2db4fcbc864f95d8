"""Tests for user-facing notices."""
import pytest

from develevate.challenges.engine import ChallengeEngine, HintReveal
from develevate.errors import (
    ChallengeNotFoundError,
    ExecutionTimeout,
    HintsExhaustedError,
    LaunchError,
    NoActiveChallengeError,
)
from develevate.ui.messages import describe_error, describe_hint, describe_outcome

from .conftest import FakeRunner


def test_hint_notice():
    notice = describe_hint(HintReveal(challenge_id="js-1", text="Use a loop.", ordinal=1, total=3))

    assert notice.severity == "information"
    assert notice.text == "💡 Hint 1/3: Use a loop."


def test_error_notices():
    assert describe_error(NoActiveChallengeError()).severity == "error"
    assert describe_error(HintsExhaustedError("js-1", 3)).severity == "information"
    assert describe_error(ChallengeNotFoundError("js-9")).text == "Challenge not found"


@pytest.mark.asyncio
async def test_pass_shows_progress_change(engine: ChallengeEngine):
    await engine.start_challenge(engine.get_challenge("js-1"))

    [notice] = describe_outcome(await engine.check_solution("js-1", "console.log(6)"), 2)

    assert notice.severity == "information"
    assert "0/2 → 1/2" in notice.text


@pytest.mark.asyncio
async def test_fail_shows_expected_and_actual(engine: ChallengeEngine, runner: FakeRunner):
    runner.stdout = "7\n"
    await engine.start_challenge(engine.get_challenge("js-1"))

    [notice] = describe_outcome(await engine.check_solution("js-1", "console.log(7)"), 2)

    assert notice.severity == "error"
    assert 'Expected: "6", but got: "7"' in notice.text


@pytest.mark.asyncio
async def test_program_error_is_a_warning_before_the_verdict(
    engine: ChallengeEngine, runner: FakeRunner
):
    runner.returncode = 1
    runner.stderr = "ReferenceError: x is not defined\n"
    runner.stdout = ""
    await engine.start_challenge(engine.get_challenge("js-1"))

    warning, verdict = describe_outcome(await engine.check_solution("js-1", "x"), 2)

    assert warning.severity == "warning"
    assert "ReferenceError" in warning.text
    assert verdict.severity == "error"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [LaunchError("node", "No such file or directory"), ExecutionTimeout(5.0)]
)
async def test_run_failures_are_errors(engine: ChallengeEngine, runner: FakeRunner, error):
    runner.error = error
    await engine.start_challenge(engine.get_challenge("js-1"))

    [notice] = describe_outcome(await engine.check_solution("js-1", "console.log(6)"), 2)

    assert notice.severity == "error"
    assert str(error) in notice.text
