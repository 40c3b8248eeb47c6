from __future__ import annotations
"""Interactive collection of the run request."""

from pathlib import Path

from php_optimizer.domain.entities import PipelineConfig, RunRequest
from php_optimizer.domain.ports import ConfigSource


DIRECTORY_PROMPT = "Enter the main directory: "
FORMAT_CODE_PROMPT = "Do you want to format the code? (yes/no): "
ANALYZE_CODE_PROMPT = "Do you want to analyze the code? (yes/no): "
CHECK_SECURITY_PROMPT = "Do you want to check for security issues? (yes/no): "
FORMAT_SCRIPTS_PROMPT = "Do you want to format JavaScript files? (yes/no): "


def collect_run_request(source: ConfigSource) -> RunRequest | None:
    """Ask for the root directory, then the four toggles, in that order.

    Returns None as soon as the directory answer is empty; no further
    questions are asked in that case.
    """
    raw_directory = source.ask_path(DIRECTORY_PROMPT)
    if not raw_directory:
        return None

    config = PipelineConfig(
        format_code=source.ask_yes_no(FORMAT_CODE_PROMPT),
        analyze_code=source.ask_yes_no(ANALYZE_CODE_PROMPT),
        check_security=source.ask_yes_no(CHECK_SECURITY_PROMPT),
        format_scripts=source.ask_yes_no(FORMAT_SCRIPTS_PROMPT),
    )
    return RunRequest(root=Path(raw_directory).expanduser(), config=config)
