from __future__ import annotations

import os
import shutil

import pytest

from php_optimizer.adapters.shell.shell_tool_invoker import ShellToolInvoker
from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.stages.syntax_check import SyntaxChecker
from conftest import RecordingToolInvoker


def test_each_file_is_linted_in_its_own_directory(make_tree, invoker):
    root = make_tree({"a/app.php": "<?php", "b.php": "<?php"})

    SyntaxChecker(invoker, FileClassifier()).check([root])

    assert invoker.calls == [
        (("php", "-l", str(root / "a" / "app.php")), root / "a"),
        (("php", "-l", str(root / "b.php")), root),
    ]


def test_encrypted_files_are_skipped(make_tree, invoker, caplog):
    root = make_tree(
        {
            "plain.php": "<?php echo 1;",
            "encoded.php": "<?php eval(base64_decode('abc'));",
            "ioncube.php": "<?php // zend_loader required",
        }
    )

    with caplog.at_level("INFO"):
        outcomes = SyntaxChecker(invoker, FileClassifier()).check([root])

    assert invoker.commands == [("php", "-l", str(root / "plain.php"))]
    assert f"Skipping encrypted file: {root / 'encoded.php'}" in caplog.messages
    assert sum(1 for outcome in outcomes if outcome.metadata.get("skipped") == "encrypted") == 2


def test_syntax_error_does_not_abort_remaining_files_or_directories(make_tree, caplog):
    root = make_tree({"a/bad.php": "<?php (", "a/good.php": "<?php", "b/other.php": "<?php"})
    invoker = RecordingToolInvoker(fail_on=["bad.php"])

    with caplog.at_level("INFO"):
        outcomes = SyntaxChecker(invoker, FileClassifier()).check([root / "a", root / "b"])

    assert len(invoker.calls) == 3
    assert [outcome.success for outcome in outcomes] == [False, True, True]
    assert any(message.startswith(f"Syntax error in {root / 'a' / 'bad.php'}") for message in caplog.messages)


def test_nested_files_are_checked_once_per_ancestor_in_the_set(make_tree, invoker):
    root = make_tree({"a/app.php": "<?php"})

    SyntaxChecker(invoker, FileClassifier()).check([root, root / "a"])

    assert invoker.commands == [("php", "-l", str(root / "a" / "app.php"))] * 2


def test_missing_directory_is_logged_and_skipped(make_tree, invoker):
    root = make_tree({"a.php": "<?php"})

    outcomes = SyntaxChecker(invoker, FileClassifier(), php_executable="php8.3").check([root / "gone", root])

    assert invoker.commands == [("php8.3", "-l", str(root / "a.php"))]
    assert [outcome.success for outcome in outcomes] == [False, True]


@pytest.mark.skipif(shutil.which("sh") is None, reason="POSIX shell unavailable")
def test_non_utf8_lint_output_does_not_stop_the_walk(make_tree, tmp_path):
    root = make_tree({"z.php": "<?php"})
    try:
        (root / os.fsdecode(b"caf\xe9.php")).write_text("<?php", encoding="utf-8")
    except (OSError, UnicodeError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    fake_php = tmp_path / "fake-php"
    fake_php.write_text("#!/bin/sh\nprintf 'No syntax errors detected in %s\\n' \"$2\"\n", encoding="utf-8")
    fake_php.chmod(0o755)

    outcomes = SyntaxChecker(ShellToolInvoker(), FileClassifier(), php_executable=str(fake_php)).check([root])

    assert [outcome.target.name for outcome in outcomes] == [os.fsdecode(b"caf\xe9.php"), "z.php"]
    assert all(outcome.success for outcome in outcomes)
    assert "�" in outcomes[0].message
