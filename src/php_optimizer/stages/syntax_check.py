from __future__ import annotations
"""PHP lint pass over every source file under a set of directories."""

import logging
from pathlib import Path
from typing import Sequence

from php_optimizer.discovery.encrypted_detector import EncryptedFileDetector
from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import OperationOutcome
from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ToolInvokerPort


LOGGER = logging.getLogger(__name__)


class SyntaxChecker:
    """Run `php -l` on each PHP file, skipping encoded ones.

    Each directory is classified recursively, so files in nested directories
    are linted once per ancestor in the directory set. A lint failure, an
    unreadable file or a vanished directory is logged and the walk goes on.
    """

    def __init__(
        self,
        invoker: ToolInvokerPort,
        classifier: FileClassifier,
        detector: EncryptedFileDetector | None = None,
        *,
        php_executable: str = "php",
    ) -> None:
        self._invoker = invoker
        self._classifier = classifier
        self._detector = detector or EncryptedFileDetector()
        self._php_executable = php_executable

    def check(self, directories: Sequence[Path]) -> list[OperationOutcome]:
        outcomes: list[OperationOutcome] = []

        for directory in directories:
            LOGGER.info(
                "Checking PHP files in directory: %s",
                directory,
                extra={"event": "syntax.directory.start", "directory": str(directory)},
            )
            try:
                source_files = self._classifier.classify(directory).source_files
            except OSError as error:
                LOGGER.error(
                    "Cannot read directory %s: %s",
                    directory,
                    error,
                    extra={"event": "syntax.directory.failed", "directory": str(directory)},
                )
                outcomes.append(
                    OperationOutcome(operation="syntax-check", target=directory, success=False, message=str(error))
                )
                continue

            for source_file in source_files:
                outcomes.append(self._check_file(source_file))

        return outcomes

    def _check_file(self, source_file: Path) -> OperationOutcome:
        try:
            if self._detector.is_encrypted(source_file):
                LOGGER.info(
                    "Skipping encrypted file: %s",
                    source_file,
                    extra={"event": "syntax.file.skipped", "file": str(source_file)},
                )
                return OperationOutcome(
                    operation="syntax-check",
                    target=source_file,
                    success=True,
                    message="skipped",
                    metadata={"skipped": "encrypted"},
                )

            output = self._invoker.invoke([self._php_executable, "-l", str(source_file)], source_file.parent)
        except (OSError, ToolInvocationError) as error:
            LOGGER.error(
                "Syntax error in %s: %s",
                source_file,
                error,
                extra={"event": "syntax.file.failed", "file": str(source_file)},
            )
            return OperationOutcome(operation="syntax-check", target=source_file, success=False, message=str(error))

        LOGGER.info(
            "Checked %s: %s",
            source_file,
            output,
            extra={"event": "syntax.file.checked", "file": str(source_file)},
        )
        return OperationOutcome(operation="syntax-check", target=source_file, success=True, message=output)
