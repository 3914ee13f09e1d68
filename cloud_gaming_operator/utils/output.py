"""
Cloud Gaming Operator - Output Formatting

Formats raw API objects and timestamps for display.
"""

import json
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional

import yaml

from cloud_gaming_operator.core.config import JST

DISPLAY_FORMAT = '%Y-%m-%d %H:%M:%S %z %Z'
NAME_SUFFIX_FORMAT = '%Y-%m-%d-%H-%M-%S'


def format_output(data: Any, format_type: str = 'json') -> str:
    """
    Format an API object for display.

    Args:
        data: Object to format (usually an operation dict)
        format_type: One of json, yaml, disable

    Returns:
        Formatted text ('' when output is disabled)
    """
    if format_type == 'disable':
        return ''
    elif format_type == 'yaml':
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip('\n')
    elif format_type == 'json':
        return json.dumps(data, indent=2)
    else:
        raise ValueError(f"Unknown output format: {format_type}")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as returned by the Compute API."""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[str], tz: tzinfo = JST) -> str:
    """
    Convert an RFC 3339 timestamp to a display string in a fixed zone.

    Example:
        format_timestamp('2024-01-01T00:00:00Z')
        # '2024-01-01 09:00:00 +0900 JST'
    """
    if not value:
        return '-'
    return parse_timestamp(value).astimezone(tz).strftime(DISPLAY_FORMAT)


def timestamp_suffix(moment: datetime) -> str:
    """Second-resolution suffix used in generated resource names."""
    return moment.strftime(NAME_SUFFIX_FORMAT)
