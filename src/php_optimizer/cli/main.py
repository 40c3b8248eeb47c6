from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Sequence

from php_optimizer.adapters.console.console_config_source import ConsoleConfigSource
from php_optimizer.adapters.images.shell_image_optimizer import ShellImageOptimizer
from php_optimizer.adapters.shell.shell_tool_invoker import DryRunToolInvoker, ShellToolInvoker
from php_optimizer.application.use_cases.run_orchestrator import RunOrchestrator
from php_optimizer.cli.config import ToolchainConfig, load_config
from php_optimizer.cli.prompts import collect_run_request
from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import RunSummary
from php_optimizer.domain.errors import ConfigurationError
from php_optimizer.domain.ports import ConfigSource, ToolInvokerPort
from php_optimizer.domain.stages import StagePipeline
from php_optimizer.logging_utils import configure_logging
from php_optimizer.stages import (
    ImageOptimizationStage,
    QualityPipelineStage,
    ScriptFormattingStage,
    SyntaxChecker,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="php-optimizer",
        description=(
            "Walk a PHP project tree, run formatting/analysis/security tools, optimize images, "
            "format JavaScript and lint every PHP file. Prompts for input unless --directory is given."
        ),
    )

    parser.add_argument(
        "--directory",
        required=False,
        help="Main directory to process. Skips the interactive prompts when set.",
    )
    parser.add_argument("--format-code", action="store_true", help="Run php-cs-fixer and phpcbf (with --directory).")
    parser.add_argument("--analyze-code", action="store_true", help="Run phpcs (with --directory).")
    parser.add_argument("--check-security", action="store_true", help="Run phpstan at max level (with --directory).")
    parser.add_argument("--format-scripts", action="store_true", help="Run prettier on .js files (with --directory).")
    parser.add_argument("--dry-run", action="store_true", help="Log planned tool commands without running them.")
    parser.add_argument("--log-level", required=False, help="Log level. Falls back to LOG_LEVEL.")
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        required=False,
        help="Log output format. Falls back to LOG_FORMAT.",
    )

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    config_source: ConfigSource | None = None,
) -> int:
    environment = os.environ if env is None else env
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args=args, env=environment)
    except ConfigurationError as error:
        parser.error(str(error))

    configure_logging(config.log_level, config.log_format)
    logger = logging.getLogger(__name__)

    request = config.request or collect_run_request(config_source or ConsoleConfigSource())
    if request is None:
        logger.error("No valid directory provided. Exiting...", extra={"event": "cli.directory.missing"})
        return 1

    root = Path(os.path.abspath(request.root))
    logger.info(
        "cli configuration resolved",
        extra={
            "event": "cli.config.resolved",
            "root": str(root),
            "dry_run": config.dry_run,
            "format_code": request.config.format_code,
            "analyze_code": request.config.analyze_code,
            "check_security": request.config.check_security,
            "format_scripts": request.config.format_scripts,
        },
    )

    classifier = FileClassifier()
    discovered = classifier.classify(root)
    orchestrator = _build_orchestrator(config.toolchain, classifier, dry_run=config.dry_run)
    summary = orchestrator.run([root, *discovered.directories], request.config)

    _print_summary(summary, dry_run=config.dry_run)
    return 0


def _build_orchestrator(toolchain: ToolchainConfig, classifier: FileClassifier, *, dry_run: bool) -> RunOrchestrator:
    invoker: ToolInvokerPort
    if dry_run:
        invoker = DryRunToolInvoker()
    else:
        invoker = ShellToolInvoker(timeout_seconds=toolchain.timeout_seconds)

    stage_pipeline = StagePipeline(
        [
            QualityPipelineStage(invoker, classifier, toolchain.quality_tools),
            ImageOptimizationStage(ShellImageOptimizer(invoker, toolchain.image_toolchain), classifier),
            ScriptFormattingStage(invoker, classifier, toolchain.prettier_command),
        ]
    )
    return RunOrchestrator(
        stage_pipeline=stage_pipeline,
        syntax_checker=SyntaxChecker(invoker, classifier, php_executable=toolchain.php_executable),
    )


def _print_summary(summary: RunSummary, *, dry_run: bool) -> None:
    mode = "DRY-RUN" if dry_run else "RUN"
    print(f"[{mode}] Directories processed: {len(summary.directories)}")
    print(f"Directories skipped: {len(summary.skipped_directories)}")
    label = "Planned operations" if dry_run else "Successful operations"
    print(f"{label}: {summary.successful_operations}")
    print(f"Failed operations: {summary.failed_operations}")

    for outcome in summary.outcomes:
        if not outcome.success:
            print(f"- {outcome.operation}: {outcome.target}")
