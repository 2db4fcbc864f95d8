"""Test configuration."""
import json
from pathlib import Path
from typing import AsyncGenerator, Optional, Sequence, Union

import pytest
import pytest_asyncio

from develevate.challenges.catalog import ChallengeCatalog
from develevate.challenges.engine import ChallengeEngine
from develevate.config import ExecutionSettings
from develevate.errors import ExecutionError
from develevate.runner.executor import Executor
from develevate.runner.process import ProcessOutput
from develevate.storage.database import Database
from develevate.storage.progress import ProgressStore

SAMPLE_CATALOG = {
    "javascript": [
        {
            "id": "js-1",
            "title": "Sum an Array",
            "description": "Add up numbers",
            "prompt": "Print the sum of 1, 2 and 3.",
            "difficulty": "beginner",
            "starter": "// print the sum\n",
            "expectedOutput": "6",
            "hints": ["Use a loop.", "Or use reduce.", "console.log prints."],
        },
        {
            "id": "js-2",
            "title": "Greeting",
            "description": "Say hello",
            "prompt": "Print hello world.",
            "difficulty": "intermediate",
            "starter": "",
            "expectedOutput": "hello world",
            "hints": [],
        },
    ],
    "python": [
        {
            "id": "py-1",
            "title": "Sum a List",
            "description": "Add up numbers",
            "prompt": "Print the sum of 1, 2 and 3.",
            "difficulty": "advanced",
            "starter": "print()\n",
            "expectedOutput": "6",
            "hints": ["Use sum()."],
        },
    ],
}


class FakeRunner:
    """Process runner that records launches instead of spawning processes."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
        error: Optional[ExecutionError] = None,
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.error = error
        self.calls: list[list[str]] = []
        self.programs: list[str] = []

    @property
    def launches(self) -> int:
        return len(self.calls)

    async def run(self, argv: Sequence[str], timeout: float) -> ProcessOutput:
        self.calls.append(list(argv))
        self.programs.append(Path(argv[-1]).read_text(encoding="utf-8"))
        if self.error is not None:
            raise self.error
        return ProcessOutput(self.returncode, self.stdout, self.stderr)


def write_catalog(path: Path, data: Union[dict, str]) -> Path:
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    """A small catalog on disk."""
    return write_catalog(tmp_path / "challenges.json", SAMPLE_CATALOG)


@pytest.fixture
def catalog(catalog_path: Path) -> ChallengeCatalog:
    return ChallengeCatalog(catalog_path)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Directory temporary programs are written to."""
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """A fresh database for each test."""
    db = Database(tmp_path / "state.db")
    await db.connect()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def store(database: Database) -> ProgressStore:
    return ProgressStore(database, "/workspace")


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner(stdout="6\n")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def engine(
    catalog: ChallengeCatalog,
    store: ProgressStore,
    runner: FakeRunner,
    temp_dir: Path,
    workspace: Path,
) -> ChallengeEngine:
    """An engine whose executor never spawns real processes."""
    executor = Executor(ExecutionSettings(temp_dir=temp_dir), runner=runner)
    return ChallengeEngine(catalog, store, executor, workspace_dir=workspace)
