from __future__ import annotations
"""Heuristic detection of encoded/obfuscated PHP files."""

from pathlib import Path
from typing import Iterable


ENCRYPTION_MARKERS = ("eval(base64_decode", "zend_loader")


class EncryptedFileDetector:
    """Flag files whose content contains a known encoder marker.

    False negatives are expected; plain source without any marker is never
    flagged.
    """

    def __init__(self, markers: Iterable[str] = ENCRYPTION_MARKERS) -> None:
        self._markers = tuple(markers)

    def is_encrypted(self, file_path: Path) -> bool:
        content = file_path.read_text(encoding="utf-8", errors="replace")
        return any(marker in content for marker in self._markers)
