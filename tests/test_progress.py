import sys

import pytest

from cloud_gaming_operator.core.config import OperatorConfig
from cloud_gaming_operator.utils.progress import ProgressTracker
from conftest import PROJECT, ZONE, FakeCompute


def test_step_lines(mocker):
    logger = mocker.Mock()

    with ProgressTracker(total_steps=2, desc="Remove instance", logger=logger) as tracker:
        tracker.update_step("Stopping instance")
        tracker.advance()
        tracker.update_step("Deleting instance")
        tracker.advance()

    messages = [c.args[0] for c in logger.info.call_args_list]
    assert messages[:3] == [
        "┌── Remove instance",
        "├── [1/2] Stopping instance...",
        "├── [2/2] Deleting instance...",
    ]
    assert messages[3].startswith("└── Remove instance completed in ")
    assert tracker.current_step == 2


def test_failed_workflow_has_no_footer(mocker):
    logger = mocker.Mock()

    with pytest.raises(RuntimeError):
        with ProgressTracker(total_steps=2, desc="Create instance", logger=logger) as tracker:
            tracker.update_step("Selecting machine image")
            raise RuntimeError("boom")

    messages = [c.args[0] for c in logger.info.call_args_list]
    assert not any("completed" in m for m in messages)


def test_tqdm_bar_replaces_step_lines(mocker):
    bar_class = mocker.patch("cloud_gaming_operator.utils.progress.tqdm")
    bar = bar_class.return_value
    logger = mocker.Mock()

    with ProgressTracker(total_steps=2, desc="Create instance", logger=logger,
                         use_tqdm=True) as tracker:
        tracker.update_step("Selecting machine image")
        tracker.advance()

    bar_class.assert_called_once()
    kwargs = bar_class.call_args.kwargs
    assert kwargs["total"] == 2
    assert kwargs["desc"] == "Create instance"
    assert kwargs["file"] is sys.stdout
    bar.set_description.assert_called_once_with("Create instance - Selecting machine image")
    bar.update.assert_called_once_with(1)
    bar.close.assert_called_once()
    messages = [c.args[0] for c in logger.info.call_args_list]
    assert not any(m.startswith(("┌──", "├──")) for m in messages)


def test_tqdm_bar_closed_on_failure(mocker):
    bar_class = mocker.patch("cloud_gaming_operator.utils.progress.tqdm")

    with pytest.raises(RuntimeError):
        with ProgressTracker(total_steps=4, use_tqdm=True):
            raise RuntimeError("boom")

    bar_class.return_value.close.assert_called_once()


def test_lifecycle_drives_bar_when_configured(mocker, make_controller):
    bar_class = mocker.patch("cloud_gaming_operator.utils.progress.tqdm")
    compute = FakeCompute(instances=["instance-x"])
    config = OperatorConfig(project=PROJECT, zone=ZONE, progress_bar=True)

    make_controller(compute, config=config).snapshot_and_terminate()

    assert bar_class.call_args.kwargs["total"] == 4
    assert bar_class.return_value.update.call_count == 4


def test_lifecycle_uses_step_lines_by_default(mocker, make_controller, caplog):
    bar_class = mocker.patch("cloud_gaming_operator.utils.progress.tqdm")

    make_controller(FakeCompute(instances=["instance-x"])).snapshot_and_terminate()

    bar_class.assert_not_called()
    assert "├── [1/4] Stopping instance instance-x..." in caplog.messages
