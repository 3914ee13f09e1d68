"""
Cloud Gaming Operator - Operation Poller

Waits for asynchronous GCP operations to reach DONE.

GCP splits operations by scope: instance create/stop/delete are zonal
operations, machine image create/delete are global operations. The wait
loop is the same for both; only the status lookup differs, so the lookup
lives in an OperationFetcher and the loop in OperationPoller.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from cloud_gaming_operator.core.exceptions import (
    OperationFailedError,
    OperationTimeoutError,
)
from cloud_gaming_operator.utils.logger import log_api_call

DONE = 'DONE'


class OperationFetcher(ABC):
    """
    Looks up the current state of an operation by name.

    Example:
        fetcher = ZoneOperationFetcher(compute, project, zone)
        operation = fetcher.fetch('operation-1700000000000-abc')
        print(operation['status'])
    """

    def __init__(self, compute, project: str, logger=None):
        """
        Args:
            compute: GCP compute client
            project: GCP project ID
            logger: Optional logger for debug output
        """
        self.compute = compute
        self.project = project
        self.logger = logger

    @property
    @abstractmethod
    def scope(self) -> str:
        """gcloud flag selecting this scope, e.g. --zone=asia-northeast1-a"""
        pass

    @abstractmethod
    def fetch(self, operation_name: str) -> Dict[str, Any]:
        """Return the operation resource for operation_name."""
        pass


class ZoneOperationFetcher(OperationFetcher):
    """Status lookup for zonal operations (instance insert/stop/delete)."""

    def __init__(self, compute, project: str, zone: str, logger=None):
        super().__init__(compute, project, logger)
        self.zone = zone

    @property
    def scope(self) -> str:
        return f"--zone={self.zone}"

    def fetch(self, operation_name: str) -> Dict[str, Any]:
        log_api_call(self.logger, 'zoneOperations.get',
                     project=self.project, zone=self.zone, operation=operation_name)
        return self.compute.zoneOperations().get(
            project=self.project,
            zone=self.zone,
            operation=operation_name
        ).execute()


class GlobalOperationFetcher(OperationFetcher):
    """Status lookup for global operations (machine image insert/delete)."""

    @property
    def scope(self) -> str:
        return "--global"

    def fetch(self, operation_name: str) -> Dict[str, Any]:
        log_api_call(self.logger, 'globalOperations.get',
                     project=self.project, operation=operation_name)
        return self.compute.globalOperations().get(
            project=self.project,
            operation=operation_name
        ).execute()


class OperationPoller:
    """
    Blocks until an operation is DONE, reporting progress on every tick.

    The interval is fixed (no backoff) and there is no iteration cap.
    A failing status lookup is never retried: the error propagates to the
    caller straight away. With timeout=None the wait is unbounded.

    Example:
        poller = OperationPoller(interval=5, logger=logger)
        operation = compute.instances().stop(...).execute()
        poller.wait(operation, ZoneOperationFetcher(compute, project, zone))
    """

    def __init__(self, interval: float = 5, timeout: Optional[float] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic,
                 logger=None):
        """
        Args:
            interval: Seconds to sleep between status lookups
            timeout: Maximum seconds to wait (None: wait forever)
            sleep: Sleep function (injectable for tests)
            clock: Monotonic clock used for the timeout
            logger: Optional logger for progress output
        """
        self.interval = interval
        self.timeout = timeout
        self.sleep = sleep
        self.clock = clock
        self.logger = logger

    def wait(self, operation: Dict[str, Any], fetcher: OperationFetcher) -> Dict[str, Any]:
        """
        Wait for operation to reach DONE.

        Args:
            operation: Operation resource returned by the mutating call
            fetcher: Status lookup for the operation's scope

        Returns:
            The final operation resource

        Raises:
            OperationFailedError: If the operation finished with errors
            OperationTimeoutError: If timeout elapsed before DONE
            googleapiclient.errors.HttpError: If a status lookup fails
        """
        name = operation['name']

        if operation.get('status') == DONE:
            self._check_errors(operation)
            return operation

        deadline = None if self.timeout is None else self.clock() + self.timeout

        while True:
            if deadline is not None and self.clock() >= deadline:
                raise OperationTimeoutError(name, self.timeout, fetcher.scope)

            self.sleep(self.interval)

            operation = fetcher.fetch(name)
            status = operation.get('status')
            self._log_info(f"Status: {status}, Progress: {operation.get('progress', 0)}")

            if status == DONE:
                break

        self._check_errors(operation)
        return operation

    def _check_errors(self, operation: Dict[str, Any]):
        """Raise if a DONE operation carries an error payload."""
        errors = operation.get('error', {}).get('errors', [])
        if not errors:
            return

        reason = '; '.join(
            f"{e.get('code', 'UNKNOWN')}: {e.get('message', 'no message')}"
            for e in errors
        )
        raise OperationFailedError(operation['name'], reason)

    def _log_info(self, message: str):
        if self.logger:
            self.logger.info(message)
