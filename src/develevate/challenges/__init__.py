"""Challenge definitions and catalog."""

from .types import Challenge, Difficulty, Language
from .catalog import ChallengeCatalog

__all__ = ["Challenge", "ChallengeCatalog", "Difficulty", "Language"]
