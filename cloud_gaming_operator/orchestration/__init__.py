"""
Cloud Gaming Operator - Orchestration Module

Coordinates the instance lifecycle workflows.
"""

from cloud_gaming_operator.orchestration.lifecycle import LifecycleController

__all__ = [
    'LifecycleController',
]
