from __future__ import annotations
"""Application use case driving every stage over a discovered directory set."""

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from php_optimizer.domain.entities import OperationOutcome, PipelineConfig, RunSummary
from php_optimizer.domain.stages import StagePipeline
from php_optimizer.stages.syntax_check import SyntaxChecker


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunOrchestrator:
    """Core orchestration use case.

    Responsibilities:
    - visit directories strictly in the given (discovery) order, one at a time
    - skip directories that vanished or stopped being real directories
    - run the stage pipeline per directory
    - run the syntax checker once over the whole set afterwards
    """

    stage_pipeline: StagePipeline
    syntax_checker: SyntaxChecker

    def run(self, directories: Sequence[Path], config: PipelineConfig) -> RunSummary:
        """Execute one processing run.

        Args:
            directories: Root followed by every discovered subdirectory. Not
                deduplicated or reordered.
            config: Stage toggles applied to every directory.

        Returns:
            `RunSummary` with every recorded outcome.
        """
        LOGGER.info(
            "run started",
            extra={
                "event": "orchestrator.started",
                "directory_count": len(directories),
                "format_code": config.format_code,
                "analyze_code": config.analyze_code,
                "check_security": config.check_security,
                "format_scripts": config.format_scripts,
                "stages": [stage.name for stage in self.stage_pipeline.enabled_stages(config)],
            },
        )

        processed: list[Path] = []
        skipped: list[Path] = []
        outcomes: list[OperationOutcome] = []

        for directory in directories:
            LOGGER.info(
                "Processing directory: %s",
                directory,
                extra={"event": "orchestrator.directory.start", "directory": str(directory)},
            )

            if directory.is_symlink() or not directory.is_dir():
                LOGGER.error(
                    "Directory does not exist: %s",
                    directory,
                    extra={"event": "orchestrator.directory.missing", "directory": str(directory)},
                )
                skipped.append(directory)
                continue

            outcomes.extend(self.stage_pipeline.run(directory, config))
            processed.append(directory)

        outcomes.extend(self.syntax_checker.check(directories))

        summary = RunSummary(
            directories=tuple(processed),
            skipped_directories=tuple(skipped),
            outcomes=tuple(outcomes),
        )

        LOGGER.info(
            "Processing complete!",
            extra={
                "event": "orchestrator.completed",
                "processed_directories": len(summary.directories),
                "skipped_directories": len(summary.skipped_directories),
                "successful_operations": summary.successful_operations,
                "failed_operations": summary.failed_operations,
            },
        )
        return summary
