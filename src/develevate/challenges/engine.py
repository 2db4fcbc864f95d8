"""Challenge session coordinator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from ..errors import (
    ChallengeNotFoundError,
    ExecutionTimeout,
    HintsExhaustedError,
    LaunchError,
    NoActiveChallengeError,
)
from ..runner.executor import ExecutionResult, Executor
from ..storage.progress import ActiveChallenge, ProgressStore
from .catalog import ChallengeCatalog
from .types import Challenge, Language
from .verifier import Verdict, Verifier

logger = logging.getLogger(__name__)


class HintReveal(BaseModel):
    """A revealed hint; `ordinal` counts from 1."""

    challenge_id: str
    text: str
    ordinal: int
    total: int


class LanguageProgress(BaseModel):
    """Completion of one language's challenges."""

    language: Language
    completed: int
    total: int


class ProgressSummary(BaseModel):
    """Completion across both languages."""

    languages: list[LanguageProgress]

    @property
    def completed(self) -> int:
        return sum(p.completed for p in self.languages)

    @property
    def total(self) -> int:
        return sum(p.total for p in self.languages)

    @property
    def percent(self) -> int:
        return round(self.completed / self.total * 100) if self.total > 0 else 0


class CheckStatus(str, Enum):
    """How a check ended."""

    PASSED = "passed"
    FAILED = "failed"
    LAUNCH_ERROR = "launch_error"
    TIMEOUT = "timeout"


class CheckOutcome:
    """Result of checking a solution: the run plus its verdict, if any."""

    def __init__(self, challenge: Challenge, execution: ExecutionResult, verdict: Optional[Verdict] = None):
        self.challenge = challenge
        self.execution = execution
        self.verdict = verdict

    @property
    def status(self) -> CheckStatus:
        if isinstance(self.execution.error, LaunchError):
            return CheckStatus.LAUNCH_ERROR
        if isinstance(self.execution.error, ExecutionTimeout):
            return CheckStatus.TIMEOUT
        if self.verdict is not None and self.verdict.passed:
            return CheckStatus.PASSED
        return CheckStatus.FAILED

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASSED

    @property
    def warning(self) -> Optional[str]:
        """stderr of a program that still produced output to check."""
        return self.execution.stderr.strip() or None


class ChallengeEngine:
    """Owns the session state and exposes the operations the UI calls."""

    def __init__(
        self,
        catalog: ChallengeCatalog,
        store: ProgressStore,
        executor: Optional[Executor] = None,
        workspace_dir: Optional[Path] = None,
    ):
        """Initialize the challenge engine.

        Args:
            catalog: Where challenges come from
            store: Progress of the current workspace
            executor: Runs solutions, a default Executor if not given
            workspace_dir: Directory starter files are written to; none are written if unset
        """
        self.catalog = catalog
        self.store = store
        self.executor = executor or Executor()
        self.verifier = Verifier(store)
        self.workspace_dir = workspace_dir

    @property
    def catalog_error(self) -> Optional[str]:
        """Why the catalog is empty, if its last load failed."""
        return str(self.catalog.load_error) if self.catalog.degraded else None

    def list_challenges(self, language: Language) -> list[Challenge]:
        """Get the challenges of one language in catalog order."""
        return self.catalog.get_challenges(language)

    def get_challenge(self, challenge_id: str) -> Challenge:
        """Get a challenge by id from any language.

        Raises:
            ChallengeNotFoundError: If no challenge has that id
        """
        challenge = self.catalog.find_by_id(challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        return challenge

    async def get_progress(self) -> dict[Language, set[str]]:
        """Get completed challenge ids per language."""
        return await self.store.get_progress()

    async def get_summary(self) -> ProgressSummary:
        """Get completed and total counts per language."""
        progress = await self.store.get_progress()
        catalog = self.catalog.load_challenges()
        return ProgressSummary(
            languages=[
                LanguageProgress(
                    language=language,
                    completed=len(progress[language]),
                    total=len(catalog[language]),
                )
                for language in Language
            ]
        )

    async def get_active(self) -> Optional[ActiveChallenge]:
        return await self.store.get_active()

    def starter_path(self, challenge: Challenge) -> Optional[Path]:
        """Where the starter file of a challenge lives in the workspace."""
        if self.workspace_dir is None:
            return None
        return self.workspace_dir / challenge.starter_filename

    async def start_challenge(self, challenge: Challenge) -> ActiveChallenge:
        """Make a challenge the active one and write its starter file.

        Starting a completed challenge again is allowed; its hint cursor is kept.
        """
        path = self.starter_path(challenge)
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(challenge.starter_code, encoding="utf-8")
            logger.info("Wrote starter code to %s", path)

        active = await self.store.set_active(challenge)
        logger.info("Started challenge %s (#%d)", challenge.id, active.ordinal)
        return active

    async def reveal_next_hint(self, challenge_id: str) -> HintReveal:
        """Reveal the next unseen hint of a challenge.

        Raises:
            ChallengeNotFoundError: If no challenge has that id
            HintsExhaustedError: If every hint was already revealed
        """
        challenge = self.get_challenge(challenge_id)
        total = len(challenge.hints)

        async with self.store.lock_for(f"hint:{challenge_id}"):
            cursor = await self.store.get_hint_cursor(challenge_id)
            if cursor >= total:
                raise HintsExhaustedError(challenge_id, total)
            if not await self.store.advance_hint_cursor(challenge_id, total):
                raise HintsExhaustedError(challenge_id, total)

        logger.debug("Revealed hint %d/%d of %s", cursor + 1, total, challenge_id)
        return HintReveal(
            challenge_id=challenge_id,
            text=challenge.hints[cursor],
            ordinal=cursor + 1,
            total=total,
        )

    async def check_solution(self, challenge_id: str, source_code: str) -> CheckOutcome:
        """Run a solution for the active challenge and verify its output.

        Args:
            challenge_id: Challenge the solution is for; must be the active one
            source_code: The learner's program

        Returns:
            CheckOutcome. A launch failure or timeout carries no verdict.

        Raises:
            NoActiveChallengeError: If `challenge_id` is not the active challenge.
                Nothing is executed in that case.
        """
        active = await self.store.get_active()
        if active is None or active.challenge.id != challenge_id:
            raise NoActiveChallengeError(challenge_id)

        challenge = active.challenge
        language = Language.from_challenge_id(challenge.id)
        execution = await self.executor.execute(source_code, language)

        if isinstance(execution.error, (LaunchError, ExecutionTimeout)):
            return CheckOutcome(challenge, execution)

        verdict = await self.verifier.verify(execution, challenge)
        return CheckOutcome(challenge, execution, verdict)

    async def check_current_solution(self, source_code: str) -> CheckOutcome:
        """Check a solution for whichever challenge is active."""
        active = await self.store.get_active()
        if active is None:
            raise NoActiveChallengeError()
        return await self.check_solution(active.challenge.id, source_code)
