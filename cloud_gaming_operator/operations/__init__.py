"""
Cloud Gaming Operator - Operations Module

Compute API calls and the poller that waits for their operations.

Usage:
    from cloud_gaming_operator.operations import (
        OperationPoller,
        ZoneOperationFetcher,
        stop_instance,
    )

    operation = stop_instance(compute, project, zone, 'instance-2024-01-01-00-00-00')
    OperationPoller(interval=5).wait(
        operation, ZoneOperationFetcher(compute, project, zone)
    )
"""

from cloud_gaming_operator.operations.poller import (
    DONE,
    OperationFetcher,
    ZoneOperationFetcher,
    GlobalOperationFetcher,
    OperationPoller,
)
from cloud_gaming_operator.operations.instances import (
    list_instances,
    insert_instance_from_machine_image,
    stop_instance,
    delete_instance,
)
from cloud_gaming_operator.operations.machine_images import (
    list_machine_images,
    insert_machine_image,
    delete_machine_image,
)

__all__ = [
    # Polling
    'DONE',
    'OperationFetcher',
    'ZoneOperationFetcher',
    'GlobalOperationFetcher',
    'OperationPoller',

    # Instances
    'list_instances',
    'insert_instance_from_machine_image',
    'stop_instance',
    'delete_instance',

    # Machine images
    'list_machine_images',
    'insert_machine_image',
    'delete_machine_image',
]
