"""
Cloud Gaming Operator - Configuration Management

This module holds the configuration shared by every workflow.
The configuration is built once at startup and never modified afterwards.
"""

from dataclasses import dataclass
from datetime import timedelta, timezone
from typing import Optional

# Version for usage tracking
VERSION = '1.0.0'

DEFAULT_REGION = 'asia-northeast1'
DEFAULT_ZONE = 'asia-northeast1-a'

# All displayed timestamps use this fixed offset, whatever the host locale.
JST = timezone(timedelta(hours=9), 'JST')

OUTPUT_FORMATS = ('json', 'yaml', 'disable')


@dataclass(frozen=True)
class OperatorConfig:
    """
    Configuration for a single operator invocation.

    Region and zone are independent: region is where machine images are
    stored, zone is where the gaming instance lives.

    Example:
        config = OperatorConfig(
            project='my-gaming-project',
            zone='asia-northeast1-b'
        )
    """

    project: str

    # Location settings
    region: str = DEFAULT_REGION
    zone: str = DEFAULT_ZONE

    # Polling settings (in seconds)
    poll_interval: int = 5
    operation_timeout: Optional[int] = None  # None: wait forever

    # Output settings
    output_format: str = 'json'  # How raw operation objects are printed
    progress_bar: bool = False  # tqdm bar instead of step lines

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        if not self.project:
            raise ValueError("project is required")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got '{self.output_format}'"
            )
        if self.poll_interval < 0:
            raise ValueError("poll_interval cannot be negative")


def create_operator_config(project: str, **kwargs) -> OperatorConfig:
    """
    Create an operator configuration with custom options.

    Options left as None fall back to the defaults, which lets callers pass
    unset command line flags straight through.

    Args:
        project: GCP project ID
        **kwargs: Configuration options (any field from OperatorConfig)

    Returns:
        OperatorConfig: Configuration object

    Example:
        config = create_operator_config(
            'my-gaming-project',
            region=None,
            zone='asia-northeast1-c'
        )
    """
    options = {key: value for key, value in kwargs.items() if value is not None}
    return OperatorConfig(project=project, **options)
