from __future__ import annotations
"""Per-directory stage contracts and pipeline composition primitives."""

from abc import ABC, abstractmethod
import logging
from pathlib import Path
from typing import Sequence

from .entities import OperationOutcome, PipelineConfig


LOGGER = logging.getLogger(__name__)


class DirectoryStage(ABC):
    """Pluggable unit of work run once per processed directory.

    Implementers should:
    - classify the directory themselves (no classification is handed down),
    - catch failures of individual tool invocations,
    - return one `OperationOutcome` per invocation or skipped item.
    """

    @property
    def name(self) -> str:
        """Stable default stage name used in logging."""
        return self.__class__.__name__

    def enabled(self, config: PipelineConfig) -> bool:
        """Whether this stage runs at all for the given configuration."""
        return True

    @abstractmethod
    def execute(self, directory: Path, config: PipelineConfig) -> list[OperationOutcome]:
        """Execute stage logic for a single directory.

        Args:
            directory: Absolute directory path being processed.
            config: Run-wide stage toggles.

        Returns:
            Outcomes of every tool invocation performed.
        """
        raise NotImplementedError


class StagePipeline:
    """Ordered sequence of `DirectoryStage` instances executed per directory."""

    def __init__(self, stages: Sequence[DirectoryStage]) -> None:
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[DirectoryStage, ...]:
        """Read-only ordered stages configured for this pipeline."""
        return self._stages

    def enabled_stages(self, config: PipelineConfig) -> tuple[DirectoryStage, ...]:
        return tuple(stage for stage in self._stages if stage.enabled(config))

    def run(self, directory: Path, config: PipelineConfig) -> list[OperationOutcome]:
        """Run enabled stages in order for one directory.

        A filesystem error inside one stage (typically the directory vanishing
        while it is being walked) is logged and recorded, and the next stage
        still runs.
        """
        outcomes: list[OperationOutcome] = []
        for stage in self.enabled_stages(config):
            try:
                outcomes.extend(stage.execute(directory, config))
            except OSError as error:
                LOGGER.error(
                    "Error running %s in %s: %s",
                    stage.name,
                    directory,
                    error,
                    extra={
                        "event": "pipeline.stage.failed",
                        "stage": stage.name,
                        "directory": str(directory),
                        "error": str(error),
                    },
                )
                outcomes.append(
                    OperationOutcome(
                        operation=stage.name,
                        target=directory,
                        success=False,
                        message=str(error),
                    )
                )
        return outcomes
