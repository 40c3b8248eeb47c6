from __future__ import annotations
"""Stage optimizing every image found under a directory."""

import logging
from pathlib import Path

from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import OperationOutcome, PipelineConfig
from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ImageOptimizerPort
from php_optimizer.domain.stages import DirectoryStage


LOGGER = logging.getLogger(__name__)


class ImageOptimizationStage(DirectoryStage):
    """Optimize images in place. Always enabled; there is no toggle for it."""

    def __init__(self, engine: ImageOptimizerPort, classifier: FileClassifier) -> None:
        self._engine = engine
        self._classifier = classifier

    @property
    def name(self) -> str:
        return "image-optimization"

    def execute(self, directory: Path, config: PipelineConfig) -> list[OperationOutcome]:
        LOGGER.info(
            "Optimizing image files in directory: %s",
            directory,
            extra={"event": "images.directory.start", "directory": str(directory)},
        )

        outcomes: list[OperationOutcome] = []
        for image in self._classifier.classify(directory).image_files:
            try:
                written = self._engine.optimize(image)
            except ToolInvocationError as error:
                LOGGER.error(
                    "Error optimizing %s: %s",
                    image,
                    error,
                    extra={"event": "images.file.failed", "file": str(image), "return_code": error.return_code},
                )
                outcomes.append(
                    OperationOutcome(operation="optimize-image", target=image, success=False, message=str(error))
                )
                continue

            metadata: dict[str, object] = {"written": written}
            if written and self._engine.dry_run:
                LOGGER.info(
                    "Planned image optimization: %s",
                    image,
                    extra={"event": "images.file.planned", "file": str(image), "planned": [str(p) for p in written]},
                )
                message = "planned"
                metadata = {"planned": written, "dry_run": True}
            elif written:
                LOGGER.info(
                    "Optimized image: %s",
                    image,
                    extra={"event": "images.file.optimized", "file": str(image), "written": [str(p) for p in written]},
                )
                message = "optimized"
            else:
                LOGGER.info(
                    "No optimization performed on: %s",
                    image,
                    extra={"event": "images.file.unchanged", "file": str(image)},
                )
                message = "no optimization performed"

            outcomes.append(
                OperationOutcome(
                    operation="optimize-image",
                    target=image,
                    success=True,
                    message=message,
                    metadata=metadata,
                )
            )

        return outcomes
