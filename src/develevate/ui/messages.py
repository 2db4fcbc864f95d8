"""Turn engine results and errors into user-facing notices."""

from typing import Literal, NamedTuple

from ..challenges.engine import CheckOutcome, CheckStatus, HintReveal
from ..errors import (
    ChallengeNotFoundError,
    DevElevateError,
    HintsExhaustedError,
    NoActiveChallengeError,
)

Severity = Literal["information", "warning", "error"]


class Notice(NamedTuple):
    severity: Severity
    title: str
    text: str


def describe_hint(hint: HintReveal) -> Notice:
    return Notice("information", "Hint", f"💡 Hint {hint.ordinal}/{hint.total}: {hint.text}")


def describe_outcome(outcome: CheckOutcome, language_total: int) -> list[Notice]:
    """Notices for a finished check, most important last.

    A program that crashed, wrong output and a pass each get their own
    notice so the learner can tell them apart.
    """
    notices: list[Notice] = []
    status = outcome.status
    error = outcome.execution.error

    if status is CheckStatus.LAUNCH_ERROR:
        return [Notice("error", "Could not run", f"❌ Error running code: {error}")]
    if status is CheckStatus.TIMEOUT:
        return [Notice("error", "Timed out", f"⏱ {error}. Check for infinite loops.")]

    program_error = outcome.execution.program_error
    if program_error is not None:
        notices.append(
            Notice(
                "warning",
                "Program error",
                f"⚠️ Your program exited with status {program_error.returncode}:\n"
                f"{program_error.stderr.strip()}",
            )
        )
    elif outcome.warning:
        notices.append(Notice("warning", "Warning", f"⚠️ Warning: {outcome.warning}"))

    verdict = outcome.verdict
    if status is CheckStatus.PASSED:
        notices.append(
            Notice(
                "information",
                "Correct!",
                f"🎉 Correct! Well done!\n\n🏆 Progress Update: "
                f"{verdict.completed_before}/{language_total} → {verdict.completed_after}/{language_total}",
            )
        )
    else:
        notices.append(
            Notice(
                "error",
                "Not quite right",
                f'❌ Not quite right. Expected: "{verdict.expected}", but got: "{verdict.actual}"\n\n'
                f'💡 Tip: Try using "Show Hint" for guidance!',
            )
        )
    return notices


def describe_error(error: DevElevateError) -> Notice:
    """Notice for an error raised by an engine operation."""
    if isinstance(error, NoActiveChallengeError):
        return Notice("error", "No active challenge", str(error))
    if isinstance(error, HintsExhaustedError):
        return Notice("information", "No more hints", str(error))
    if isinstance(error, ChallengeNotFoundError):
        return Notice("error", "Not found", "Challenge not found")
    return Notice("error", "Error", str(error))
