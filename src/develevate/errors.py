"""Error types raised across the challenge runner."""

from typing import Optional


class DevElevateError(Exception):
    """Base class for all runner errors."""


class CatalogLoadError(DevElevateError):
    """The challenge catalog could not be read or is invalid."""


class ChallengeNotFoundError(DevElevateError):
    """No challenge with the requested id exists."""

    def __init__(self, challenge_id: str):
        self.challenge_id = challenge_id
        super().__init__(f"Challenge not found: {challenge_id}")


class UnsupportedLanguageError(DevElevateError):
    """A challenge id or language tag does not map to an interpreter."""


class NoActiveChallengeError(DevElevateError):
    """A check was requested for a challenge that is not the active one."""

    def __init__(self, challenge_id: Optional[str] = None):
        self.challenge_id = challenge_id
        super().__init__("No active challenge found. Please start a challenge first.")


class HintsExhaustedError(DevElevateError):
    """Every hint of a challenge has already been revealed."""

    def __init__(self, challenge_id: str, total: int):
        self.challenge_id = challenge_id
        self.total = total
        super().__init__("No more hints available for this challenge!")


class ExecutionError(DevElevateError):
    """Base class for failures reported by the execution engine."""


class LaunchError(ExecutionError):
    """The interpreter could not be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not start '{command}': {reason}")


class ExecutionTimeout(ExecutionError):
    """The program ran longer than the allowed time and was killed."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Program timed out after {timeout:g} seconds")


class ProgramRuntimeError(ExecutionError):
    """The program exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str):
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(f"Program exited with status {returncode}: {detail}")
