import json
import logging
from datetime import datetime

import httplib2
import pytest
from googleapiclient.errors import HttpError

from cloud_gaming_operator.core.config import JST, OperatorConfig
from cloud_gaming_operator.operations import OperationPoller
from cloud_gaming_operator.orchestration import LifecycleController

PROJECT = "gaming-project"
ZONE = "asia-northeast1-a"
REGION = "asia-northeast1"

FIXED_NOW = datetime(2024, 1, 1, 12, 30, 45, tzinfo=JST)


def make_http_error(status=403, message="Forbidden"):
    resp = httplib2.Response({"status": str(status)})
    resp.reason = message
    content = json.dumps({"error": {"code": status, "message": message}}).encode()
    return HttpError(resp, content)


class FakeRequest:
    def __init__(self, fn, **kwargs):
        self._fn = fn
        self.kwargs = kwargs

    def execute(self):
        return self._fn()


class _Resource:
    def __init__(self, compute):
        self.compute = compute

    def list_next(self, previous_request, previous_response):
        token = previous_response.get("nextPageToken")
        if not token:
            return None
        return self.list(**dict(previous_request.kwargs, pageToken=token))


class _Instances(_Resource):
    def list(self, project, zone, pageToken=None):
        def run():
            self.compute.record("instances.list", project=project, zone=zone,
                                **self.compute.token_kwargs(pageToken))
            return self.compute.page(self.compute.instances_state, pageToken)
        return FakeRequest(run, project=project, zone=zone)

    def insert(self, project, zone, body):
        def run():
            self.compute.record("instances.insert", project=project, zone=zone, body=body)
            image_name = body["sourceMachineImage"].rsplit("/", 1)[-1]
            assert image_name in self.compute.images_state
            self.compute.instances_state[body["name"]] = {
                "name": body["name"],
                "status": "RUNNING",
                "lastStartTimestamp": "2024-01-01T03:30:45.000+00:00",
                "sourceMachineImage": body["sourceMachineImage"],
            }
            return self.compute.new_operation("insert", zone=zone)
        return FakeRequest(run)

    def stop(self, project, zone, instance):
        def run():
            self.compute.record("instances.stop", project=project, zone=zone, instance=instance)
            self.compute.instances_state[instance]["status"] = "TERMINATED"
            return self.compute.new_operation("stop", zone=zone)
        return FakeRequest(run)

    def delete(self, project, zone, instance):
        def run():
            self.compute.record("instances.delete", project=project, zone=zone, instance=instance)
            del self.compute.instances_state[instance]
            return self.compute.new_operation("delete", zone=zone)
        return FakeRequest(run)


class _MachineImages(_Resource):
    def list(self, project, pageToken=None):
        def run():
            self.compute.record("machineImages.list", project=project,
                                **self.compute.token_kwargs(pageToken))
            return self.compute.page(self.compute.images_state, pageToken)
        return FakeRequest(run, project=project)

    def insert(self, project, body):
        def run():
            self.compute.record("machineImages.insert", project=project, body=body)
            self.compute.images_state[body["name"]] = dict(body)
            return self.compute.new_operation("insert")
        return FakeRequest(run)

    def delete(self, project, machineImage):
        def run():
            self.compute.record("machineImages.delete", project=project, machineImage=machineImage)
            del self.compute.images_state[machineImage]
            return self.compute.new_operation("delete")
        return FakeRequest(run)


class _Operations(_Resource):
    def get(self, project, operation, zone=None):
        def run():
            kwargs = {"project": project, "operation": operation}
            if zone is not None:
                kwargs["zone"] = zone
            self.compute.record(self.method, **kwargs)
            return self.compute.advance_operation(operation)
        return FakeRequest(run)


class _ZoneOperations(_Operations):
    method = "zoneOperations.get"


class _GlobalOperations(_Operations):
    method = "globalOperations.get"


class FakeCompute:
    """In-memory stand-in for the Compute discovery client.

    Mutations apply immediately; their operations report RUNNING until
    polled `polls_until_done` times. With `page_size` set, list calls
    return that many items per page and a nextPageToken while more remain.
    """

    def __init__(self, instances=(), machine_images=(), polls_until_done=2, page_size=None):
        self.instances_state = {name: {"name": name, "status": "RUNNING",
                                       "lastStartTimestamp": "2024-01-01T00:00:00Z"}
                                for name in instances}
        self.images_state = {name: {"name": name} for name in machine_images}
        self.polls_until_done = polls_until_done
        self.page_size = page_size
        self.operations = {}
        self.calls = []
        self.failures = {}

    def record(self, method, **kwargs):
        self.calls.append((method, kwargs))
        if method in self.failures:
            raise self.failures[method]

    def methods(self):
        return [method for method, _ in self.calls]

    def calls_to(self, method):
        return [kwargs for name, kwargs in self.calls if name == method]

    def token_kwargs(self, page_token):
        return {"pageToken": page_token} if page_token else {}

    def page(self, state, page_token=None):
        items = [dict(i) for i in state.values()]
        start = int(page_token or 0)
        end = len(items) if self.page_size is None else start + self.page_size
        response = {"items": items[start:end]} if items[start:end] else {}
        if end < len(items):
            response["nextPageToken"] = str(end)
        return response

    def new_operation(self, kind, zone=None):
        name = f"operation-{len(self.operations) + 1}-{kind}"
        operation = {"name": name, "operationType": kind, "status": "RUNNING", "progress": 0}
        if zone:
            operation["zone"] = zone
        self.operations[name] = {"remaining": self.polls_until_done, "operation": operation}
        return dict(operation)

    def advance_operation(self, name):
        entry = self.operations[name]
        entry["remaining"] -= 1
        operation = entry["operation"]
        if entry["remaining"] <= 0:
            operation.update(status="DONE", progress=100)
        else:
            operation.update(progress=50)
        return dict(operation)

    def instances(self):
        return _Instances(self)

    def machineImages(self):
        return _MachineImages(self)

    def zoneOperations(self):
        return _ZoneOperations(self)

    def globalOperations(self):
        return _GlobalOperations(self)


@pytest.fixture
def config():
    return OperatorConfig(project=PROJECT, region=REGION, zone=ZONE, poll_interval=5)


@pytest.fixture
def logger(caplog):
    caplog.set_level(logging.DEBUG, logger="cloud_gaming_operator")
    return logging.getLogger("cloud_gaming_operator")


@pytest.fixture
def make_controller(config, logger):
    def factory(compute, **overrides):
        sleeps = []
        poller = OperationPoller(interval=config.poll_interval, sleep=sleeps.append, logger=logger)
        controller = LifecycleController(
            compute, overrides.get("config", config), logger=logger,
            poller=poller, now=lambda: FIXED_NOW
        )
        controller.sleeps = sleeps
        return controller
    return factory
