from __future__ import annotations
"""Stage running PHP formatting, analysis and security tools over a directory."""

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import OperationOutcome, PipelineConfig
from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ToolInvokerPort
from php_optimizer.domain.stages import DirectoryStage


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QualityTools:
    """Executables for the directory-wide PHP tools."""

    style_fixer: str = "php-cs-fixer"
    auto_fixer: str = "phpcbf"
    analyzer: str = "phpcs"
    security_analyzer: str = "phpstan"

    def style_fix_command(self) -> list[str]:
        return [self.style_fixer, "fix", "."]

    def auto_fix_command(self) -> list[str]:
        return [self.auto_fixer, "."]

    def analyze_command(self) -> list[str]:
        return [self.analyzer, "."]

    def security_command(self) -> list[str]:
        return [self.security_analyzer, "analyse", "--level", "max", "."]


class QualityPipelineStage(DirectoryStage):
    """Run style-fix, auto-fix, static analysis and security analysis in order.

    Nothing runs for a directory whose tree holds no PHP files. Each step is
    gated by its `PipelineConfig` flag and runs against the directory root,
    not per file. Style-fix and auto-fix share one failure scope: a style-fix
    failure skips auto-fix. Analysis and security always get their turn.
    """

    def __init__(
        self,
        invoker: ToolInvokerPort,
        classifier: FileClassifier,
        tools: QualityTools | None = None,
    ) -> None:
        self._invoker = invoker
        self._classifier = classifier
        self._tools = tools or QualityTools()

    @property
    def name(self) -> str:
        return "quality-pipeline"

    def execute(self, directory: Path, config: PipelineConfig) -> list[OperationOutcome]:
        source_files = self._classifier.classify(directory).source_files
        if not source_files:
            LOGGER.info(
                "No PHP files found in directory: %s",
                directory,
                extra={"event": "quality.skipped.no_sources", "directory": str(directory)},
            )
            return []

        outcomes: list[OperationOutcome] = []

        if config.format_code:
            try:
                outcomes.append(
                    self._run("style-fix", self._tools.style_fix_command(), directory, "Formatted PHP code")
                )
                outcomes.append(
                    self._run("auto-fix", self._tools.auto_fix_command(), directory, "Automatically fixed PHP code")
                )
            except ToolInvocationError as error:
                outcomes.append(self._failed("format", directory, "Error formatting PHP code", error))

        if config.analyze_code:
            try:
                outcomes.append(
                    self._run("analyze", self._tools.analyze_command(), directory, "PHP Code analysis results")
                )
            except ToolInvocationError as error:
                outcomes.append(self._failed("analyze", directory, "Error analyzing PHP code", error))

        if config.check_security:
            try:
                outcomes.append(
                    self._run("security", self._tools.security_command(), directory, "PHP Security analysis results")
                )
            except ToolInvocationError as error:
                outcomes.append(self._failed("security", directory, "Error running PHP security analysis", error))

        return outcomes

    def _run(self, operation: str, command: Sequence[str], directory: Path, label: str) -> OperationOutcome:
        output = self._invoker.invoke(command, directory)
        LOGGER.info(
            "%s:\n%s",
            label,
            output,
            extra={"event": f"quality.{operation}.completed", "directory": str(directory)},
        )
        return OperationOutcome(operation=operation, target=directory, success=True, message=output)

    @staticmethod
    def _failed(operation: str, directory: Path, label: str, error: ToolInvocationError) -> OperationOutcome:
        LOGGER.error(
            "%s: %s",
            label,
            error,
            extra={
                "event": f"quality.{operation}.failed",
                "directory": str(directory),
                "command": " ".join(error.command),
                "return_code": error.return_code,
            },
        )
        return OperationOutcome(
            operation=operation,
            target=directory,
            success=False,
            message=str(error),
            metadata={"command": list(error.command), "return_code": error.return_code},
        )
