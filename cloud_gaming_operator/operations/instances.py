"""
Cloud Gaming Operator - Instance Calls

Thin wrappers around the Compute API instances resource.
Mutating calls return the operation resource; waiting is the caller's job.
"""

from typing import Any, Dict, List

from cloud_gaming_operator.utils.logger import log_api_call


def list_instances(compute, project: str, zone: str, logger=None) -> List[Dict[str, Any]]:
    """
    List all instances in a zone.

    Args:
        compute: GCP compute client
        project: GCP project ID
        zone: GCP zone

    Returns:
        List of instance resources (empty if the zone has none)
    """
    log_api_call(logger, 'instances.list', project=project, zone=zone)

    instances = []
    request = compute.instances().list(project=project, zone=zone)
    while request is not None:
        response = request.execute()
        instances.extend(response.get('items', []))
        request = compute.instances().list_next(request, response)
    return instances


def insert_instance_from_machine_image(compute, project: str, zone: str,
                                       name: str, machine_image_name: str,
                                       logger=None) -> Dict[str, Any]:
    """
    Create an instance from a machine image.

    Args:
        name: Name of the new instance
        machine_image_name: Machine image to create the instance from

    Returns:
        Zonal operation resource
    """
    body = {
        'name': name,
        'sourceMachineImage': f'global/machineImages/{machine_image_name}',
    }
    log_api_call(logger, 'instances.insert', project=project, zone=zone, body=body)

    return compute.instances().insert(
        project=project,
        zone=zone,
        body=body
    ).execute()


def stop_instance(compute, project: str, zone: str, name: str, logger=None) -> Dict[str, Any]:
    """Stop an instance. Returns the zonal operation resource."""
    log_api_call(logger, 'instances.stop', project=project, zone=zone, instance=name)

    return compute.instances().stop(
        project=project,
        zone=zone,
        instance=name
    ).execute()


def delete_instance(compute, project: str, zone: str, name: str, logger=None) -> Dict[str, Any]:
    """Delete an instance. Returns the zonal operation resource."""
    log_api_call(logger, 'instances.delete', project=project, zone=zone, instance=name)

    return compute.instances().delete(
        project=project,
        zone=zone,
        instance=name
    ).execute()
