"""Shared pytest fixtures and fakes."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from php_optimizer.domain.errors import ToolInvocationError
from php_optimizer.domain.ports import ImageOptimizerPort, ToolInvokerPort


class RecordingToolInvoker(ToolInvokerPort):
    """Record every invocation; fail those whose argv contains a marked token."""

    def __init__(self, fail_on: Sequence[str] = (), output: str = "ok", return_code: int = 1) -> None:
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self._fail_on = tuple(fail_on)
        self._output = output
        self._return_code = return_code

    def invoke(self, command: Sequence[str], working_directory: Path) -> str:
        argv = tuple(command)
        self.calls.append((argv, working_directory))
        if any(token in part for token in self._fail_on for part in argv):
            raise ToolInvocationError(argv, working_directory, "boom", self._return_code)
        return self._output

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]


class FakeImageEngine(ImageOptimizerPort):
    def __init__(self, fail_on: Sequence[str] = (), unchanged: Sequence[str] = ()) -> None:
        self.optimized: list[Path] = []
        self._fail_on = tuple(fail_on)
        self._unchanged = tuple(unchanged)

    def optimize(self, image_path: Path) -> list[Path]:
        self.optimized.append(image_path)
        if image_path.name in self._fail_on:
            raise ToolInvocationError(["fake-optimizer", str(image_path)], image_path.parent, "corrupt image", 1)
        if image_path.name in self._unchanged:
            return []
        return [image_path]


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Create files from a `{relative_path: content}` mapping under tmp_path/root."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def invoker() -> RecordingToolInvoker:
    return RecordingToolInvoker()
