from __future__ import annotations
"""Recursive directory traversal that buckets files by category."""

import os
import re
import stat
from pathlib import Path
from typing import Iterable

from php_optimizer.domain.entities import FileClassification


DEFAULT_SOURCE_SUFFIXES = (".php",)
DEFAULT_SCRIPT_SUFFIXES = (".js",)
DEFAULT_IMAGE_PATTERN = re.compile(r"\.(jpe?g|png|gif|svg|webp)$", re.IGNORECASE)


class FileClassifier:
    """Partition a directory tree into directories, source, image and script files.

    Classification is rebuilt from the filesystem on every call; nothing is
    cached. Files are tested against the source suffixes, then the image
    pattern, then the script suffixes, and the first match wins. Files that
    match nothing are dropped.

    Entries are `stat`ed following symlinks and there is no cycle detection:
    a symlink loop recurses until the interpreter or the OS gives up
    (`RecursionError` or `OSError`), which propagates to the caller.
    """

    def __init__(
        self,
        *,
        source_suffixes: Iterable[str] = DEFAULT_SOURCE_SUFFIXES,
        image_pattern: re.Pattern[str] = DEFAULT_IMAGE_PATTERN,
        script_suffixes: Iterable[str] = DEFAULT_SCRIPT_SUFFIXES,
    ) -> None:
        self._source_suffixes = tuple(source_suffixes)
        self._image_pattern = image_pattern
        self._script_suffixes = tuple(script_suffixes)

    def classify(self, root: Path) -> FileClassification:
        """Walk `root` recursively in pre-order and classify every entry.

        Raises:
            OSError: `root` is missing or unreadable, or an entry cannot be
                `stat`ed. Not caught here.
        """
        root_path = Path(os.path.abspath(root))
        result = FileClassification()

        for name in sorted(os.listdir(root_path)):
            entry = root_path / name
            mode = entry.stat().st_mode

            if stat.S_ISDIR(mode):
                result.directories.append(entry)
                result.merge(self.classify(entry))
            elif name.endswith(self._source_suffixes):
                result.source_files.append(entry)
            elif self._image_pattern.search(name):
                result.image_files.append(entry)
            elif name.endswith(self._script_suffixes):
                result.script_files.append(entry)

        return result
