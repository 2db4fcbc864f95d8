"""Compare program output with a challenge's expected output."""

import logging
from typing import Optional

from ..runner.executor import ExecutionResult
from ..storage.progress import ProgressStore
from .types import Challenge

logger = logging.getLogger(__name__)


class Verdict:
    """Pass/fail outcome of a check."""

    def __init__(
        self,
        challenge: Challenge,
        passed: bool,
        expected: str,
        actual: str,
        completed_before: Optional[int] = None,
        completed_after: Optional[int] = None,
    ):
        self.challenge = challenge
        self.passed = passed
        self.expected = expected
        self.actual = actual
        self.completed_before = completed_before
        self.completed_after = completed_after


def output_matches(stdout: str, expected_output: str) -> bool:
    """Exact comparison after trimming surrounding whitespace of the output."""
    return stdout.strip() == expected_output


class Verifier:
    """Turns execution results into verdicts and records passes."""

    def __init__(self, store: ProgressStore):
        self.store = store

    async def verify(self, result: ExecutionResult, challenge: Challenge) -> Verdict:
        """Check captured output against a challenge.

        On a pass the challenge is added to the completed set of its language
        and its hint cursor goes back to 0. A fail changes nothing.

        Args:
            result: Output of a program that ran to completion
            challenge: The challenge being solved

        Returns:
            Verdict carrying expected and actual output
        """
        actual = result.stdout.strip()
        expected = challenge.expected_output

        if not output_matches(result.stdout, expected):
            logger.info("Challenge %s failed: expected %r, got %r", challenge.id, expected, actual)
            return Verdict(challenge, passed=False, expected=expected, actual=actual)

        before, after = await self.store.mark_completed(challenge.language, challenge.id)
        await self.store.reset_hint_cursor(challenge.id)

        return Verdict(
            challenge,
            passed=True,
            expected=expected,
            actual=actual,
            completed_before=before,
            completed_after=after,
        )
