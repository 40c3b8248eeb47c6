from __future__ import annotations

from php_optimizer.adapters.images.shell_image_optimizer import ShellImageOptimizer
from php_optimizer.adapters.shell.shell_tool_invoker import DryRunToolInvoker
from php_optimizer.discovery.file_classifier import FileClassifier
from php_optimizer.domain.entities import PipelineConfig
from php_optimizer.stages.image_optimization import ImageOptimizationStage
from conftest import FakeImageEngine


def test_every_image_in_subtree_is_optimized(make_tree):
    root = make_tree({"a.png": "", "sub/b.jpg": "", "c.php": ""})
    engine = FakeImageEngine()

    outcomes = ImageOptimizationStage(engine, FileClassifier()).execute(root, PipelineConfig())

    assert engine.optimized == [root / "a.png", root / "sub" / "b.jpg"]
    assert all(outcome.success for outcome in outcomes)


def test_failure_is_logged_and_next_file_still_processed(make_tree, caplog):
    root = make_tree({"a.png": "", "b.png": ""})
    engine = FakeImageEngine(fail_on=["a.png"])

    with caplog.at_level("INFO"):
        outcomes = ImageOptimizationStage(engine, FileClassifier()).execute(root, PipelineConfig())

    assert engine.optimized == [root / "a.png", root / "b.png"]
    assert [outcome.success for outcome in outcomes] == [False, True]
    assert any(message.startswith(f"Error optimizing {root / 'a.png'}") for message in caplog.messages)


def test_no_output_is_reported_but_not_an_error(make_tree, caplog):
    root = make_tree({"done.webp": ""})
    engine = FakeImageEngine(unchanged=["done.webp"])
    stage = ImageOptimizationStage(engine, FileClassifier())

    with caplog.at_level("INFO"):
        first = stage.execute(root, PipelineConfig())
        second = stage.execute(root, PipelineConfig())

    assert [outcome.success for outcome in first + second] == [True, True]
    assert caplog.messages.count(f"No optimization performed on: {root / 'done.webp'}") == 2


def test_dry_run_reports_images_as_planned(make_tree, caplog):
    root = make_tree({"logo.png": ""})
    engine = ShellImageOptimizer(DryRunToolInvoker())

    with caplog.at_level("INFO"):
        outcomes = ImageOptimizationStage(engine, FileClassifier()).execute(root, PipelineConfig())

    assert f"Planned image optimization: {root / 'logo.png'}" in caplog.messages
    assert f"Optimized image: {root / 'logo.png'}" not in caplog.messages
    assert outcomes[0].message == "planned"
    assert outcomes[0].metadata["dry_run"] is True
    assert (root / "logo.webp").exists() is False
