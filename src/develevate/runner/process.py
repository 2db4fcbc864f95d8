"""Child process launching for learner programs."""

import asyncio
import logging
from typing import Protocol, Sequence

from ..errors import ExecutionTimeout, LaunchError

logger = logging.getLogger(__name__)


class ProcessOutput:
    """What a finished child process left behind."""

    def __init__(self, returncode: int, stdout: str, stderr: str):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ProcessRunner(Protocol):
    """Runs a command to completion or until a timeout."""

    async def run(self, argv: Sequence[str], timeout: float) -> ProcessOutput:
        """Run `argv` and collect its output.

        Raises:
            LaunchError: If the program could not be started
            ExecutionTimeout: If it ran longer than `timeout` seconds
        """
        ...


class AsyncioProcessRunner:
    """Process runner built on asyncio subprocesses."""

    async def run(self, argv: Sequence[str], timeout: float) -> ProcessOutput:
        """Run a command, killing it when the timeout expires.

        Args:
            argv: Command and arguments
            timeout: Wall-clock limit in seconds

        Returns:
            ProcessOutput with decoded stdout and stderr
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            # Missing binary, no exec permission, ...
            raise LaunchError(argv[0], e.strerror or str(e)) from e

        logger.debug("Started pid %s: %s", proc.pid, " ".join(argv))

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("pid %s exceeded %ss, killing it", proc.pid, timeout)
            await self._kill(proc)
            raise ExecutionTimeout(timeout) from None
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        return ProcessOutput(
            returncode=proc.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

    async def _kill(self, proc: asyncio.subprocess.Process) -> None:
        """Kill and reap a child so it does not outlive the check."""
        try:
            proc.kill()
        except ProcessLookupError:
            pass  # Already gone
        await proc.wait()
