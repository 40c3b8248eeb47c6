from __future__ import annotations

import json
import logging

from php_optimizer.logging_utils import ConsoleLogFormatter, JsonLogFormatter


def _record(level: int, message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("php_optimizer.test", level, __file__, 1, message, None, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields():
    payload = json.loads(
        JsonLogFormatter().format(_record(logging.ERROR, "Syntax error in x.php", event="syntax.file.failed"))
    )

    assert payload["level"] == "ERROR"
    assert payload["message"] == "Syntax error in x.php"
    assert payload["event"] == "syntax.file.failed"
    assert "timestamp" in payload


def test_console_formatter_prints_message_and_prefixes_errors():
    formatter = ConsoleLogFormatter()

    assert formatter.format(_record(logging.INFO, "Processing complete!", event="x")) == "Processing complete!"
    assert formatter.format(_record(logging.ERROR, "Directory does not exist: /a")) == (
        "ERROR: Directory does not exist: /a"
    )
