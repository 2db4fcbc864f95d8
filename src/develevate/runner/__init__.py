"""Execution of learner programs."""

from .executor import ExecutionResult, Executor
from .process import AsyncioProcessRunner, ProcessOutput, ProcessRunner

__all__ = [
    "AsyncioProcessRunner",
    "ExecutionResult",
    "Executor",
    "ProcessOutput",
    "ProcessRunner",
]
