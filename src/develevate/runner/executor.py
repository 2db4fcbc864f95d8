"""Run learner source code with the matching interpreter."""

import asyncio
import logging
import os
import shlex
import tempfile
from pathlib import Path
from typing import Optional

from ..challenges.types import Language
from ..config import ExecutionSettings
from ..errors import ExecutionError, LaunchError, ProgramRuntimeError, UnsupportedLanguageError
from .process import AsyncioProcessRunner, ProcessRunner

logger = logging.getLogger(__name__)

TEMP_PREFIX = "develevate-"


class ExecutionResult:
    """Outcome of running a program once. Never persisted."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: Optional[int] = None,
        error: Optional[ExecutionError] = None,
        duration: float = 0.0,
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.error = error
        self.duration = duration

    @property
    def program_error(self) -> Optional[ProgramRuntimeError]:
        """The non-zero exit, if that is what happened."""
        if isinstance(self.error, ProgramRuntimeError):
            return self.error
        return None


class Executor:
    """Runs source text in a fresh child process with a time limit."""

    def __init__(
        self,
        settings: Optional[ExecutionSettings] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        """Initialize the executor.

        Args:
            settings: Timeout, interpreter commands and temp directory
            runner: Process runner, AsyncioProcessRunner if not given
        """
        self.settings = settings or ExecutionSettings()
        self.runner = runner or AsyncioProcessRunner()

    def interpreter_for(self, language: Language) -> list[str]:
        """Get the interpreter command line for a language."""
        if language is Language.JAVASCRIPT:
            command = self.settings.node_command
        elif language is Language.PYTHON:
            command = self.settings.python_command
        else:
            raise UnsupportedLanguageError(f"No interpreter for {language!r}")
        return shlex.split(command)

    def _write_program(self, source_code: str, language: Language) -> Path:
        """Write source to a temporary file no other call can share."""
        temp_dir = self.settings.temp_dir
        if temp_dir is not None:
            temp_dir.mkdir(parents=True, exist_ok=True)

        fd, path = tempfile.mkstemp(
            prefix=TEMP_PREFIX,
            suffix=language.extension,
            dir=temp_dir,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(source_code)
        except (OSError, UnicodeError):
            self._cleanup(Path(path))
            raise
        return Path(path)

    def _cleanup(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Cleanup error for %s: %s", path, e)

    async def execute(self, source_code: str, language: Language) -> ExecutionResult:
        """Run a program and capture its output.

        Args:
            source_code: Program text, possibly invalid
            language: Which interpreter to use

        Returns:
            ExecutionResult. Launch failures (a program file that cannot be
            written counts as one), timeouts and non-zero exits are reported
            in its `error` field rather than raised.
        """
        argv = self.interpreter_for(language)
        loop = asyncio.get_running_loop()
        start = loop.time()

        try:
            program = self._write_program(source_code, language)
        except (OSError, UnicodeError) as e:
            logger.warning("Could not write %s program: %s", language.value, e)
            error = LaunchError(argv[0], f"could not write program file: {e}")
            return ExecutionResult(error=error, duration=loop.time() - start)

        try:
            output = await self.runner.run([*argv, str(program)], self.settings.timeout)
        except ExecutionError as e:
            logger.info("Execution of %s failed: %s", program.name, e)
            return ExecutionResult(error=e, duration=loop.time() - start)
        finally:
            self._cleanup(program)

        result = ExecutionResult(
            stdout=output.stdout,
            stderr=output.stderr,
            returncode=output.returncode,
            duration=loop.time() - start,
        )
        if output.returncode != 0:
            result.error = ProgramRuntimeError(output.returncode, output.stderr)

        logger.info(
            "Ran %s program in %.2fs (exit %s)",
            language.value,
            result.duration,
            output.returncode,
        )
        return result
