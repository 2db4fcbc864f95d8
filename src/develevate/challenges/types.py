"""Challenge type definitions."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UnsupportedLanguageError


class Language(str, Enum):
    """Languages a challenge can be solved in."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"

    @property
    def id_prefix(self) -> str:
        return ID_PREFIXES[self]

    @property
    def extension(self) -> str:
        return ".js" if self is Language.JAVASCRIPT else ".py"

    @property
    def display_name(self) -> str:
        return "JavaScript" if self is Language.JAVASCRIPT else "Python"

    @classmethod
    def from_challenge_id(cls, challenge_id: str) -> "Language":
        """Derive the language from an id such as 'js-sum-array'."""
        for language, prefix in ID_PREFIXES.items():
            if challenge_id.startswith(prefix):
                return language
        raise UnsupportedLanguageError(f"Cannot tell the language of challenge '{challenge_id}'")


ID_PREFIXES = {
    Language.JAVASCRIPT: "js-",
    Language.PYTHON: "py-",
}


class Difficulty(str, Enum):
    """How hard a challenge is."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Challenge(BaseModel):
    """A coding exercise with a known expected output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    description: str = Field(default="")
    prompt: str = Field(description="What the learner needs to do")
    starter_code: str = Field(default="", alias="starter")
    expected_output: str = Field(alias="expectedOutput")
    hints: tuple[str, ...] = Field(default=())
    difficulty: Difficulty = Field(default=Difficulty.BEGINNER)
    language: Language

    @property
    def starter_filename(self) -> str:
        """File the starter code is written to, e.g. 'DevElevate-Sum-Array.js'."""
        slug = re.sub(r"[^a-zA-Z0-9]", "-", self.title)
        return f"DevElevate-{slug}{self.language.extension}"

    @classmethod
    def from_dict(cls, data: dict, language: Language) -> "Challenge":
        """Create a Challenge from a catalog entry."""
        return cls.model_validate({**data, "language": language})
