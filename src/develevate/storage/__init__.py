"""Storage module for persistence."""

from .database import Database
from .progress import ActiveChallenge, ProgressStore

__all__ = ["ActiveChallenge", "Database", "ProgressStore"]
