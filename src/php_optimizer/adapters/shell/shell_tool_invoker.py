from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ToolInvokerPort


class ShellToolInvoker(ToolInvokerPort):
    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._runner = runner
        self._logger = logging.getLogger(__name__)

    def invoke(self, command: Sequence[str], working_directory: Path) -> str:
        argv = list(command)
        self._logger.debug(
            "running tool",
            extra={"event": "tool.start", "command": " ".join(argv), "cwd": str(working_directory)},
        )
        try:
            completed = self._runner(
                argv,
                cwd=str(working_directory),
                check=False,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                timeout=self._timeout_seconds,
            )
        except FileNotFoundError as error:
            raise ToolInvocationError(
                argv,
                working_directory,
                f"Executable '{argv[0]}' was not found in PATH or working directory is missing",
            ) from error
        except OSError as error:
            raise ToolInvocationError(argv, working_directory, str(error)) from error
        except subprocess.TimeoutExpired as error:
            raise ToolInvocationError(
                argv,
                working_directory,
                f"Command timed out after {self._timeout_seconds}s: {' '.join(argv)}",
            ) from error

        stdout = completed.stdout or ""
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            details = stderr or stdout.strip() or "No command output"
            self._logger.debug(
                "tool failed",
                extra={
                    "event": "tool.error",
                    "command": " ".join(argv),
                    "cwd": str(working_directory),
                    "return_code": completed.returncode,
                    "details": details,
                },
            )
            raise ToolInvocationError(argv, working_directory, details, completed.returncode)

        return stdout


class DryRunToolInvoker(ToolInvokerPort):
    """Log planned commands instead of spawning them; always succeeds."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def dry_run(self) -> bool:
        return True

    def invoke(self, command: Sequence[str], working_directory: Path) -> str:
        argv = " ".join(command)
        self._logger.info(
            "[DRY-RUN] %s (cwd: %s)",
            argv,
            working_directory,
            extra={"event": "tool.dry_run", "command": argv, "cwd": str(working_directory)},
        )
        return ""
