from __future__ import annotations

from typing import Callable

from php_optimizer.domain.ports import ConfigSource


class ConsoleConfigSource(ConfigSource):
    def __init__(self, input_func: Callable[[str], str] = input) -> None:
        self._input = input_func

    def ask_path(self, prompt: str) -> str:
        return self._read(prompt).strip()

    def ask_yes_no(self, prompt: str) -> bool:
        return self._read(prompt).strip().lower() == "yes"

    def _read(self, prompt: str) -> str:
        # Closed or exhausted stdin counts as an empty answer.
        try:
            return self._input(prompt)
        except EOFError:
            return ""
