"""Cloud Gaming Operator - manage the GCE instance used for cloud gaming.

Core functionality:
- list: Show the instances running in the managed zone
- create: Start the instance from the project's single machine image
- remove: Back the instance up to a machine image, then delete it

Example usage:
    >>> from cloud_gaming_operator import OperatorConfig, create_vm, remove_vm
    >>> config = OperatorConfig(project='my-gaming-project')
    >>> create_vm(config)
    >>> remove_vm(config)
"""

from cloud_gaming_operator.core.config import VERSION, OperatorConfig
from cloud_gaming_operator.main import create_vm, list_vms, remove_vm

__version__ = VERSION

__all__ = [
    'OperatorConfig',
    'list_vms',
    'create_vm',
    'remove_vm',
]
