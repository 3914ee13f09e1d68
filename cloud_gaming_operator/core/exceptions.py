"""
Cloud Gaming Operator - Custom Exception Classes

This module defines all custom exceptions used by the operator.
Cardinality errors explain what the operator has to fix by hand.
"""

from typing import List


class OperatorError(Exception):
    """
    Base exception for all operator errors.

    Provider errors (googleapiclient.errors.HttpError) are not wrapped;
    they propagate as raised by the client library.
    """
    pass


class AuthenticationError(OperatorError):
    """
    Raised when authentication fails.

    Common causes:
    - No credentials configured
    - Credentials expired
    - Invalid credentials
    """

    def __init__(self, message: str, fix: str = None):
        """
        Args:
            message: Error description
            fix: Suggested fix command (e.g., "gcloud auth application-default login")
        """
        self.fix = fix
        full_message = f"{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"
        super().__init__(full_message)


class NoInstanceError(OperatorError):
    """
    Raised when remove finds no instance in the managed zone.
    """

    def __init__(self, project: str, zone: str):
        self.project = project
        self.zone = zone

        message = f"No instance is running in zone '{zone}' (project: {project})"
        super().__init__(message)


class MultipleInstancesError(OperatorError):
    """
    Raised when more than one instance exists in the managed zone.

    Only a single gaming instance is supported; picking one automatically
    could destroy the wrong session.
    """

    def __init__(self, names: List[str], project: str, zone: str):
        self.names = list(names)
        self.project = project
        self.zone = zone

        message = (
            f"{len(self.names)} instances are running in zone '{zone}' "
            f"(project: {project})"
        )
        message += "\nOperating on multiple instances is not supported."
        for name in self.names:
            message += f"\n  - {name}"
        message += "\n\nDelete the extra instances from the Cloud Console:"
        message += f"\n  https://console.cloud.google.com/compute/instances?project={project}"

        super().__init__(message)


class NoMachineImageError(OperatorError):
    """
    Raised when create finds no machine image to build the instance from.
    """

    def __init__(self, project: str):
        self.project = project

        message = (
            f"No machine image exists in project '{project}', "
            "so no instance can be created"
        )
        message += "\n\nList machine images:"
        message += f"\n  gcloud compute machine-images list --project={project}"
        super().__init__(message)


class MultipleMachineImagesError(OperatorError):
    """
    Raised when create finds several machine images and cannot choose one.
    """

    def __init__(self, names: List[str], project: str):
        self.names = list(names)
        self.project = project

        message = (
            f"{len(self.names)} machine images exist in project '{project}', "
            "cannot tell which one to create the instance from"
        )
        for name in self.names:
            message += f"\n  - {name}"
        message += "\n\nDelete all but one machine image:"
        message += f"\n  gcloud compute machine-images delete IMAGE_NAME --project={project}"
        super().__init__(message)


class OperationFailedError(OperatorError):
    """
    Raised when a GCP operation reaches DONE with an error payload.
    """

    def __init__(self, operation_name: str, reason: str):
        """
        Args:
            operation_name: Name of the GCP operation
            reason: Why it failed
        """
        self.operation_name = operation_name
        self.reason = reason

        message = f"Operation '{operation_name}' failed: {reason}"
        super().__init__(message)


class OperationTimeoutError(OperatorError):
    """
    Raised when an operation is not DONE before the configured timeout.

    The operation keeps running on the GCP side.
    """

    def __init__(self, operation_name: str, timeout: float, scope: str = None):
        self.operation_name = operation_name
        self.timeout = timeout
        self.scope = scope

        message = f"Timeout waiting for operation '{operation_name}' (>{timeout}s)"
        message += "\n\nThe operation is still running in GCP. Check it with:"
        message += f"\n  gcloud compute operations describe {operation_name}"
        if scope:
            message += f" {scope}"
        super().__init__(message)
