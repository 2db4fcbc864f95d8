"""UI Screens."""

from .home import HomeScreen
from .challenge import ChallengeScreen

__all__ = ["ChallengeScreen", "HomeScreen"]
