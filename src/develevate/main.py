"""Entry point for DevElevate."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .challenges.catalog import ChallengeCatalog
from .challenges.engine import ChallengeEngine
from .config import Settings, load_settings
from .logging_config import setup_logging
from .runner.executor import Executor
from .storage.database import Database
from .storage.progress import ProgressStore
from .ui.app import DevElevateApp

logger = logging.getLogger(__name__)


def build_engine(settings: Settings, workspace: Path, database: Database) -> ChallengeEngine:
    """Wire catalog, progress store and executor for one workspace."""
    workspace = workspace.resolve()
    return ChallengeEngine(
        catalog=ChallengeCatalog(settings.catalog.path),
        store=ProgressStore(database, str(workspace)),
        executor=Executor(settings.execution),
        workspace_dir=workspace,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="develevate",
        description="Interactive JavaScript and Python coding challenges",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=Path.cwd(),
        help="Directory for solution files; progress is kept per workspace (default: current directory)",
    )
    parser.add_argument("--log-level", help="Override DEVELEVATE_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the DevElevate application."""
    args = parse_args(argv)

    try:
        settings = load_settings(log_level=args.log_level)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    setup_logging(settings)

    database = Database(settings.storage.db_path)
    engine = build_engine(settings, args.workspace, database)
    logger.info("Starting DevElevate in %s", engine.workspace_dir)

    app = DevElevateApp(engine, database=database)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
