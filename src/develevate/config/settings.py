"""Runtime settings loaded from the environment."""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "develevate"
BUNDLED_CATALOG = Path(__file__).parent.parent / "challenges" / "data" / "challenges.json"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ExecutionSettings(BaseModel):
    """How learner programs are run."""

    timeout: float = Field(default=5.0, gt=0, description="Wall-clock limit in seconds")
    node_command: str = Field(default="node", min_length=1)
    python_command: str = Field(default="python3", min_length=1)
    temp_dir: Optional[Path] = Field(
        default=None, description="Where temporary programs are written; system temp if unset"
    )


class StorageSettings(BaseModel):
    """Where progress is persisted."""

    data_dir: Path = Field(default=DEFAULT_DATA_DIR)
    db_name: str = Field(default="state.db")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    file: Optional[Path] = Field(default=None, description="Log file; <data_dir>/develevate.log if unset")


class CatalogSettings(BaseModel):
    """Where challenges are read from."""

    path: Path = Field(default=BUNDLED_CATALOG)


class Settings(BaseModel):
    """All settings of the application."""

    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)

    @property
    def log_file(self) -> Path:
        return self.logging.file or self.storage.data_dir / "develevate.log"


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


def load_settings(env_file: Optional[str] = None, log_level: Optional[str] = None) -> Settings:
    """Build settings from environment variables.

    Args:
        env_file: Optional .env file to load first. Defaults to ./.env
        log_level: Overrides DEVELEVATE_LOG_LEVEL when given

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If a variable has an invalid value
    """
    load_dotenv(env_file or ".env")

    execution: dict = {}
    if timeout := _env("DEVELEVATE_TIMEOUT"):
        execution["timeout"] = timeout
    if node := _env("DEVELEVATE_NODE"):
        execution["node_command"] = node
    if python := _env("DEVELEVATE_PYTHON"):
        execution["python_command"] = python
    if temp_dir := _env("DEVELEVATE_TEMP_DIR"):
        execution["temp_dir"] = temp_dir

    storage: dict = {}
    if data_dir := _env("DEVELEVATE_DATA_DIR"):
        storage["data_dir"] = Path(data_dir).expanduser()

    logging_: dict = {}
    if level := log_level or _env("DEVELEVATE_LOG_LEVEL"):
        logging_["level"] = level.upper()
    if log_file := _env("DEVELEVATE_LOG_FILE"):
        logging_["file"] = log_file

    catalog: dict = {}
    if catalog_path := _env("DEVELEVATE_CATALOG"):
        catalog["path"] = catalog_path

    return Settings(
        execution=ExecutionSettings(**execution),
        storage=StorageSettings(**storage),
        logging=LoggingSettings(**logging_),
        catalog=CatalogSettings(**catalog),
    )
