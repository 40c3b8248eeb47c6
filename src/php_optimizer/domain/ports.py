from __future__ import annotations
"""Hexagonal architecture port interfaces.

Stages and the orchestrator depend only on these abstractions. Adapters
provide concrete implementations for subprocesses, image tools and prompts.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence


class ToolInvokerPort(ABC):
    """Run one external command and capture its output."""

    @property
    def dry_run(self) -> bool:
        """True when commands are only planned, never spawned."""
        return False

    @abstractmethod
    def invoke(self, command: Sequence[str], working_directory: Path) -> str:
        """Run `command` in `working_directory` and return captured stdout.

        Raises:
            ToolInvocationError: non-zero exit, signal, or spawn failure.
        """
        raise NotImplementedError


class ImageOptimizerPort(ABC):
    """Image-optimization engine applied to a single file."""

    @property
    def dry_run(self) -> bool:
        """True when returned paths are planned outputs, not written files."""
        return False

    @abstractmethod
    def optimize(self, image_path: Path) -> list[Path]:
        """Optimize one image next to itself.

        Returns:
            Files written by the engine. An empty list means no optimizer
            produced output for this file.

        Raises:
            ToolInvocationError: an optimizer failed.
        """
        raise NotImplementedError


class ConfigSource(ABC):
    """Source of run configuration answers (interactive prompts, tests)."""

    @abstractmethod
    def ask_path(self, prompt: str) -> str:
        """Ask for a path; an empty string means no answer."""
        raise NotImplementedError

    @abstractmethod
    def ask_yes_no(self, prompt: str) -> bool:
        """Ask a yes/no question; anything other than `yes` is False."""
        raise NotImplementedError
