from __future__ import annotations
"""Core domain entities shared by discovery, stages and the run orchestrator.

These data models carry no filesystem or subprocess behavior and can be
reused from the CLI, tests, or any other driver.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class FileClassification:
    """Result of one recursive directory traversal.

    Every discovered entry lands in exactly one list. Lists keep pre-order
    depth-first discovery order and hold absolute paths.

    Attributes:
        directories: Every descendant directory, transitively.
        source_files: PHP files.
        image_files: JPEG/PNG/GIF/SVG/WebP files.
        script_files: JavaScript files.
    """

    directories: list[Path] = field(default_factory=list)
    source_files: list[Path] = field(default_factory=list)
    image_files: list[Path] = field(default_factory=list)
    script_files: list[Path] = field(default_factory=list)

    def merge(self, other: FileClassification) -> None:
        """Append all four sequences of `other` onto this classification."""
        self.directories.extend(other.directories)
        self.source_files.extend(other.source_files)
        self.image_files.extend(other.image_files)
        self.script_files.extend(other.script_files)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """User-selected stage toggles, fixed for the lifetime of one run."""

    format_code: bool = False
    analyze_code: bool = False
    check_security: bool = False
    format_scripts: bool = False


@dataclass(slots=True)
class RunRequest:
    """Root directory plus pipeline toggles collected before a run starts."""

    root: Path
    config: PipelineConfig


@dataclass(slots=True)
class OperationOutcome:
    """Result of one external tool invocation or one skipped item.

    Attributes:
        operation: Operation identifier (e.g. `syntax-check`, `style-fix`).
        target: File or directory the operation ran against.
        success: Whether the operation succeeded (skips count as success).
        message: Tool output on success, failure description otherwise.
        metadata: Optional structured details (e.g. `{"skipped": "encrypted"}`).
    """

    operation: str
    target: Path
    success: bool
    message: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class RunSummary:
    """In-memory report of one orchestrator run."""

    directories: tuple[Path, ...]
    skipped_directories: tuple[Path, ...]
    outcomes: tuple[OperationOutcome, ...]

    @property
    def failed_operations(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def successful_operations(self) -> int:
        return len(self.outcomes) - self.failed_operations
