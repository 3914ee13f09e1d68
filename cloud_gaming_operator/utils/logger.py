"""
Cloud Gaming Operator - Logging Setup

All user-facing output goes through the 'cloud_gaming_operator' logger.

Logging Strategy:
- INFO (default): Status lines, operation dumps, poll progress
- DEBUG (--verbosity=debug): API calls and their parameters
- WARNING: Recoverable issues
- ERROR: Problems that stop the command
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = 'cloud_gaming_operator'


class CleanFormatter(logging.Formatter):
    """
    Custom formatter for clean user-facing logs.

    - INFO: Just the message
    - WARNING/ERROR/CRITICAL: Prefixed with the level
    """

    def format(self, record):
        """Format log record based on level."""

        if record.levelno == logging.INFO:
            return record.getMessage()

        elif record.levelno == logging.WARNING:
            return f"[!]  WARNING: {record.getMessage()}"

        elif record.levelno == logging.ERROR:
            return f"[X] ERROR: {record.getMessage()}"

        elif record.levelno == logging.CRITICAL:
            return f"[!!] CRITICAL: {record.getMessage()}"

        else:
            return f"[DEBUG] {record.getMessage()}"


def setup_logging(level='INFO', log_file=None, debug=False):
    """
    Setup logging for the operator.

    Configures logging to:
    1. Output to console (stdout)
    2. Optionally write to log file
    3. Use a timestamped format in debug mode

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only logs to console.
        debug: If True, use DEBUG level and detailed format

    Returns:
        logging.Logger: Configured logger instance

    Example:
        logger = setup_logging('INFO')
        logger.info("Instance is already running.")
    """

    if debug:
        level = 'DEBUG'

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers (in case setup_logging called multiple times)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if debug:
        # Format: [2025-11-02 10:30:45] DEBUG [stop_instance:45]: API call: instances.stop(...)
        console_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(funcName)s:%(lineno)d]: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_format = CleanFormatter('%(message)s')

    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)

        # File format includes more details
        file_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file}")

    return logger


def log_api_call(logger, method_name: str, **params):
    """
    Log an API call (DEBUG level).

    Args:
        logger: Logger instance (None disables logging)
        method_name: Name of the API method (e.g., 'instances.stop')
        **params: API call parameters

    Example:
        log_api_call(logger, 'instances.stop', project='p', zone='z', instance='vm')
        # Output: API call: instances.stop(project=p, zone=z, instance=vm)
    """
    if logger is None:
        return
    param_str = ', '.join(f'{k}={v}' for k, v in params.items())
    logger.debug(f"API call: {method_name}({param_str})")


def print_header(logger, title: str, char='=', length=60):
    """
    Print a formatted header (INFO level).

    Example:
        print_header(logger, 'Cloud Gaming Operator - Remove')
        # Output:
        # ============================================================
        # Cloud Gaming Operator - Remove
        # ============================================================
    """
    logger.info(char * length)
    logger.info(title)
    logger.info(char * length)
