"""
Cloud Gaming Operator - Machine Image Calls

Thin wrappers around the Compute API machineImages resource.
Machine images are global resources, so their operations are global too.
"""

from typing import Any, Dict, List

from cloud_gaming_operator.utils.logger import log_api_call


def list_machine_images(compute, project: str, logger=None) -> List[Dict[str, Any]]:
    """List all machine images in a project."""
    log_api_call(logger, 'machineImages.list', project=project)

    images = []
    request = compute.machineImages().list(project=project)
    while request is not None:
        response = request.execute()
        images.extend(response.get('items', []))
        request = compute.machineImages().list_next(request, response)
    return images


def insert_machine_image(compute, project: str, name: str, source_instance: str,
                         description: str, storage_location: str,
                         logger=None) -> Dict[str, Any]:
    """
    Create a machine image from an instance.

    Args:
        compute: GCP compute client
        project: GCP project ID
        name: Name of the machine image
        source_instance: Partial URL of the source instance
            (projects/PROJECT/zones/ZONE/instances/NAME)
        description: Human-readable description
        storage_location: Region the image is stored in

    Returns:
        Global operation resource
    """
    body = {
        'name': name,
        'description': description,
        'sourceInstance': source_instance,
        'storageLocations': [storage_location],
    }
    log_api_call(logger, 'machineImages.insert', project=project, body=body)

    return compute.machineImages().insert(
        project=project,
        body=body
    ).execute()


def delete_machine_image(compute, project: str, name: str, logger=None) -> Dict[str, Any]:
    """Delete a machine image. Returns the global operation resource."""
    log_api_call(logger, 'machineImages.delete', project=project, machineImage=name)

    return compute.machineImages().delete(
        project=project,
        machineImage=name
    ).execute()
