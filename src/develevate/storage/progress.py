"""Per-workspace challenge progress."""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..challenges.types import Challenge, Language
from .database import Database

logger = logging.getLogger(__name__)

ACTIVE_CHALLENGE_KEY = "current_challenge"


class ActiveChallenge(BaseModel):
    """The challenge currently selected for solving."""

    challenge: Challenge
    started_at: datetime = Field(default_factory=datetime.now)
    ordinal: int = Field(default=1, description="How many challenges were started before, plus one")


class ProgressStore:
    """Completed challenges, hint cursors and the active challenge of one workspace."""

    def __init__(self, db: Database, workspace: str):
        """Initialize the progress store.

        Args:
            db: Connected database
            workspace: Key scoping every row, usually the workspace path
        """
        self.db = db
        self.workspace = workspace
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, key: str) -> asyncio.Lock:
        """Lock serializing read-modify-write updates of one key."""
        return self._locks[key]

    # Completion
    async def get_progress(self) -> dict[Language, set[str]]:
        """Get completed challenge ids per language."""
        progress: dict[Language, set[str]] = {language: set() for language in Language}
        for row in await self.db.get_completed_challenges(self.workspace):
            try:
                progress[Language(row["language"])].add(row["challenge_id"])
            except ValueError:
                logger.warning("Ignoring progress for unknown language %r", row["language"])
        return progress

    async def completed_count(self, language: Language) -> int:
        return await self.db.count_completed(self.workspace, language.value)

    async def mark_completed(self, language: Language, challenge_id: str) -> tuple[int, int]:
        """Add a challenge to the completed set of its language.

        Adding an id that is already there changes nothing.

        Returns:
            Completed counts before and after
        """
        async with self.lock_for(f"progress:{language.value}"):
            before = await self.completed_count(language)
            added = await self.db.mark_challenge_completed(
                self.workspace, language.value, challenge_id
            )
            after = before + 1 if added else before

        logger.info(
            "Saving progress for %s %s: %d -> %d", language.value, challenge_id, before, after
        )
        return before, after

    # Hints
    async def get_hint_cursor(self, challenge_id: str) -> int:
        return await self.db.get_hint_cursor(self.workspace, challenge_id)

    async def advance_hint_cursor(self, challenge_id: str, total: int) -> bool:
        return await self.db.advance_hint_cursor(self.workspace, challenge_id, total)

    async def reset_hint_cursor(self, challenge_id: str) -> None:
        async with self.lock_for(f"hint:{challenge_id}"):
            await self.db.reset_hint_cursor(self.workspace, challenge_id)

    # Active challenge
    async def get_active(self) -> Optional[ActiveChallenge]:
        """Get the active challenge, if one was started."""
        data = await self.db.get_state(self.workspace, ACTIVE_CHALLENGE_KEY)
        if data is None:
            return None
        return ActiveChallenge.model_validate(data)

    async def set_active(self, challenge: Challenge) -> ActiveChallenge:
        """Make a challenge the active one, replacing any previous one."""
        async with self.lock_for("active"):
            previous = await self.get_active()
            active = ActiveChallenge(
                challenge=challenge,
                ordinal=previous.ordinal + 1 if previous else 1,
            )
            await self.db.set_state(
                self.workspace, ACTIVE_CHALLENGE_KEY, active.model_dump(mode="json", by_alias=True)
            )
        return active
