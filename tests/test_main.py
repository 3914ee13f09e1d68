import logging

import pytest

from cloud_gaming_operator.core.config import OperatorConfig
from cloud_gaming_operator.core.exceptions import AuthenticationError
from cloud_gaming_operator.main import create_vm, list_vms, remove_vm
from conftest import PROJECT, ZONE, FakeCompute, make_http_error


@pytest.fixture
def fast_config():
    return OperatorConfig(project=PROJECT, zone=ZONE, poll_interval=0)


@pytest.fixture
def auth(mocker):
    def factory(compute):
        manager = mocker.Mock()
        manager.get_client.return_value = (compute, PROJECT)
        return manager
    return factory


@pytest.fixture(autouse=True)
def propagate_logs(caplog):
    caplog.set_level(logging.INFO, logger="cloud_gaming_operator")
    yield
    # setup_logging binds a handler to the captured stdout of this test
    logging.getLogger("cloud_gaming_operator").handlers.clear()


def test_list_success(fast_config, auth, caplog):
    compute = FakeCompute(instances=["instance-a"])

    assert list_vms(fast_config, auth=auth(compute)) is True
    assert any(m.startswith("Name: instance-a") for m in caplog.messages)


def test_create_and_remove_round_trip(fast_config, auth):
    compute = FakeCompute(machine_images=["golden"])
    manager = auth(compute)

    assert create_vm(fast_config, auth=manager) is True
    assert len(compute.instances_state) == 1

    assert remove_vm(fast_config, auth=manager) is True
    assert compute.instances_state == {}
    assert len(compute.images_state) == 1
    [backup] = compute.images_state
    assert backup.startswith("backup-")
    manager.get_client.assert_called_with(PROJECT)


def test_precondition_error_returns_false(fast_config, auth, caplog):
    compute = FakeCompute()

    assert remove_vm(fast_config, auth=auth(compute)) is False
    assert any("No instance is running in zone" in m for m in caplog.messages)
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_api_error_returns_false(fast_config, auth, caplog):
    compute = FakeCompute()
    compute.failures["instances.list"] = make_http_error(403, "Required 'compute.instances.list' permission")

    assert list_vms(fast_config, auth=auth(compute)) is False
    assert any(m.startswith("GCP API error:") for m in caplog.messages)


def test_authentication_error_returns_false(fast_config, mocker, caplog):
    manager = mocker.Mock()
    manager.get_client.side_effect = AuthenticationError("No credentials found.", fix="gcloud auth application-default login")

    assert create_vm(fast_config, auth=manager) is False
    assert any("gcloud auth application-default login" in m for m in caplog.messages)


def test_unexpected_error_returns_false(fast_config, mocker, caplog):
    manager = mocker.Mock()
    manager.get_client.side_effect = RuntimeError("boom")

    assert list_vms(fast_config, auth=manager) is False
    assert "Unexpected error: boom" in caplog.messages


def test_keyboard_interrupt_propagates(fast_config, mocker):
    manager = mocker.Mock()
    manager.get_client.side_effect = KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        list_vms(fast_config, auth=manager)
