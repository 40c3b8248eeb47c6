from __future__ import annotations
"""Stage formatting JavaScript files with Prettier."""

import logging
from pathlib import Path
from typing import Sequence

from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import OperationOutcome, PipelineConfig
from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ToolInvokerPort
from php_optimizer.domain.stages import DirectoryStage


LOGGER = logging.getLogger(__name__)


class ScriptFormattingStage(DirectoryStage):
    def __init__(
        self,
        invoker: ToolInvokerPort,
        classifier: FileClassifier,
        formatter_command: Sequence[str] = ("npx", "prettier"),
    ) -> None:
        self._invoker = invoker
        self._classifier = classifier
        self._formatter_command = tuple(formatter_command)

    @property
    def name(self) -> str:
        return "script-formatting"

    def enabled(self, config: PipelineConfig) -> bool:
        return config.format_scripts

    def execute(self, directory: Path, config: PipelineConfig) -> list[OperationOutcome]:
        LOGGER.info(
            "Formatting JavaScript files in directory: %s",
            directory,
            extra={"event": "scripts.directory.start", "directory": str(directory)},
        )

        outcomes: list[OperationOutcome] = []
        for script in self._classifier.classify(directory).script_files:
            command = [*self._formatter_command, "--write", str(script)]
            try:
                output = self._invoker.invoke(command, directory)
            except ToolInvocationError as error:
                LOGGER.error(
                    "Error formatting JavaScript file %s: %s",
                    script,
                    error,
                    extra={"event": "scripts.file.failed", "file": str(script), "return_code": error.return_code},
                )
                outcomes.append(
                    OperationOutcome(operation="format-script", target=script, success=False, message=str(error))
                )
                continue

            LOGGER.info(
                "Formatted JavaScript file: %s\n%s",
                script,
                output,
                extra={"event": "scripts.file.formatted", "file": str(script)},
            )
            outcomes.append(OperationOutcome(operation="format-script", target=script, success=True, message=output))

        return outcomes
