"""Read-only access to the challenge catalog."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..errors import CatalogLoadError
from .types import Challenge, Language

logger = logging.getLogger(__name__)


def parse_catalog(data: object) -> dict[Language, list[Challenge]]:
    """Validate a decoded catalog document.

    Args:
        data: Decoded JSON, mapping language keys to lists of challenge objects

    Returns:
        Challenges grouped by language, in document order

    Raises:
        CatalogLoadError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog must be a JSON object keyed by language")

    catalog: dict[Language, list[Challenge]] = {language: [] for language in Language}
    seen: set[str] = set()

    for key, entries in data.items():
        try:
            language = Language(key)
        except ValueError:
            raise CatalogLoadError(f"Unknown language in catalog: {key!r}") from None
        if not isinstance(entries, list):
            raise CatalogLoadError(f"Challenges for {key!r} must be a list")

        for entry in entries:
            if not isinstance(entry, dict):
                raise CatalogLoadError(f"Invalid challenge entry under {key!r}")
            try:
                challenge = Challenge.from_dict(entry, language)
            except ValidationError as e:
                raise CatalogLoadError(f"Invalid challenge {entry.get('id')!r}: {e}") from e

            if not challenge.id.startswith(language.id_prefix):
                raise CatalogLoadError(
                    f"Challenge id {challenge.id!r} must start with {language.id_prefix!r}"
                )
            if challenge.id in seen:
                raise CatalogLoadError(f"Duplicate challenge id: {challenge.id!r}")
            seen.add(challenge.id)
            catalog[language].append(challenge)

    return catalog


class ChallengeCatalog:
    """Challenges read from a JSON document on every query."""

    def __init__(self, path: Path):
        """Initialize the catalog.

        Args:
            path: Path to the catalog JSON file
        """
        self.path = Path(path)
        self.load_error: Optional[CatalogLoadError] = None

    @property
    def degraded(self) -> bool:
        """Whether the last load failed and an empty catalog was served."""
        return self.load_error is not None

    def _read(self) -> dict[Language, list[Challenge]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogLoadError(f"Unable to read {self.path}: {e}") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"Corrupt catalog {self.path}: {e}") from e
        return parse_catalog(data)

    def load_challenges(self) -> dict[Language, list[Challenge]]:
        """Load every challenge, grouped by language.

        A load failure yields an empty catalog and is kept in `load_error`.
        """
        try:
            catalog = self._read()
        except CatalogLoadError as e:
            logger.error("Error loading challenges: %s", e)
            self.load_error = e
            return {language: [] for language in Language}

        self.load_error = None
        return catalog

    def get_challenges(self, language: Language) -> list[Challenge]:
        """Get the challenges of one language."""
        return self.load_challenges()[language]

    def find_by_id(self, challenge_id: str) -> Optional[Challenge]:
        """Get a specific challenge by ID, searching every language."""
        for challenges in self.load_challenges().values():
            for challenge in challenges:
                if challenge.id == challenge_id:
                    return challenge
        return None
