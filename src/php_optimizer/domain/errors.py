from __future__ import annotations
"""Domain exceptions."""

from pathlib import Path
from typing import Sequence


class ConfigurationError(ValueError):
    """Raised when CLI arguments or environment values are invalid."""


class ToolInvocationError(RuntimeError):
    """An external tool exited non-zero, was killed, or could not be spawned.

    Attributes:
        command: Full argv that was executed.
        working_directory: Directory the tool ran in.
        details: Captured stderr, falling back to stdout.
        return_code: Process exit status, or None when the process never
            completed (spawn failure or timeout).
    """

    def __init__(
        self,
        command: Sequence[str],
        working_directory: Path,
        details: str,
        return_code: int | None = None,
    ) -> None:
        self.command = tuple(command)
        self.working_directory = working_directory
        self.details = details
        self.return_code = return_code
        super().__init__(f"Error in {working_directory}: {details}")
