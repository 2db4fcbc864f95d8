"""User intents coming from the UI and the dispatcher that routes them."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..errors import ChallengeNotFoundError
from ..storage.progress import ActiveChallenge
from .engine import ChallengeEngine, CheckOutcome, HintReveal, ProgressSummary
from .types import Language


class StartChallenge(BaseModel):
    """Start (or redo) a challenge."""

    model_config = ConfigDict(populate_by_name=True)

    command: Literal["startChallenge"] = "startChallenge"
    challenge_id: str = Field(alias="challengeId")
    language: Optional[Language] = None


class ShowHint(BaseModel):
    """Reveal the next hint of a challenge."""

    model_config = ConfigDict(populate_by_name=True)

    command: Literal["showHint"] = "showHint"
    challenge_id: str = Field(alias="challengeId")


class CheckSolution(BaseModel):
    """Run and verify a solution. Without an id the active challenge is checked."""

    model_config = ConfigDict(populate_by_name=True)

    command: Literal["checkSolution"] = "checkSolution"
    challenge_id: Optional[str] = Field(default=None, alias="challengeId")
    source_code: str = Field(alias="sourceCode")


class Refresh(BaseModel):
    """Re-read catalog and progress."""

    command: Literal["refresh"] = "refresh"


Intent = Annotated[
    Union[StartChallenge, ShowHint, CheckSolution, Refresh],
    Field(discriminator="command"),
]

_intent_adapter = TypeAdapter(Intent)


def parse_intent(message: dict) -> Intent:
    """Build an intent from a UI message such as {"command": "showHint", "challengeId": "js-1"}.

    Raises:
        pydantic.ValidationError: If the message is not a known intent
    """
    return _intent_adapter.validate_python(message)


async def dispatch(
    engine: ChallengeEngine, intent: Intent
) -> Union[ActiveChallenge, HintReveal, CheckOutcome, ProgressSummary]:
    """Route an intent to the engine operation handling it.

    Errors raised by the engine propagate to the caller.
    """
    if isinstance(intent, StartChallenge):
        challenge = engine.get_challenge(intent.challenge_id)
        if intent.language is not None and challenge.language is not intent.language:
            raise ChallengeNotFoundError(intent.challenge_id)
        return await engine.start_challenge(challenge)
    elif isinstance(intent, ShowHint):
        return await engine.reveal_next_hint(intent.challenge_id)
    elif isinstance(intent, CheckSolution):
        if intent.challenge_id is None:
            return await engine.check_current_solution(intent.source_code)
        return await engine.check_solution(intent.challenge_id, intent.source_code)
    elif isinstance(intent, Refresh):
        return await engine.get_summary()
    raise TypeError(f"Unknown intent: {intent!r}")
