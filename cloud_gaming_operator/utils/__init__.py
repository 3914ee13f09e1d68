"""Utils package."""

from cloud_gaming_operator.utils.logger import setup_logging
from cloud_gaming_operator.utils.output import format_output, format_timestamp
from cloud_gaming_operator.utils.progress import ProgressTracker

__all__ = [
    'setup_logging',
    'format_output',
    'format_timestamp',
    'ProgressTracker',
]
