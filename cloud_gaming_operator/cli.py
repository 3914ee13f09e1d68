"""
Cloud Gaming Operator - Command Line Interface

Manages the GCE instance used for cloud gaming sessions.

Usage:
    cloud-gaming-operator --project=my-gaming-project list
    cloud-gaming-operator --project=my-gaming-project create
    cloud-gaming-operator --project=my-gaming-project remove
"""

import argparse
import os
import sys
from typing import Mapping, Optional

from cloud_gaming_operator.core.config import (
    DEFAULT_REGION,
    DEFAULT_ZONE,
    OUTPUT_FORMATS,
    VERSION,
    create_operator_config,
)
from cloud_gaming_operator.main import create_vm, list_vms, remove_vm

ENV_PROJECT = 'CLOUD_GAMING_OPERATOR_PROJECT_ID'
ENV_REGION = 'CLOUD_GAMING_OPERATOR_REGION'
ENV_ZONE = 'CLOUD_GAMING_OPERATOR_ZONE'

ALIASES = {
    'l': 'list',
    'c': 'create',
    'r': 'remove',
}


def create_parser(environ: Optional[Mapping[str, str]] = None) -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Flags fall back to CLOUD_GAMING_OPERATOR_* environment variables.

    Args:
        environ: Environment to read defaults from (default: os.environ)

    Returns:
        Configured ArgumentParser
    """
    environ = os.environ if environ is None else environ

    parser = argparse.ArgumentParser(
        prog='cloud-gaming-operator',
        description='Manage the GCE instance used for cloud gaming.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
EXAMPLES
    To see what is running:
        $ cloud-gaming-operator --project=my-gaming-project list

    To start a session from the machine image:
        $ cloud-gaming-operator --project=my-gaming-project create

    To back up and delete the instance:
        $ cloud-gaming-operator --project=my-gaming-project remove

ENVIRONMENT
    {ENV_PROJECT}   default for --project
    {ENV_REGION}    default for --region
    {ENV_ZONE}      default for --zone
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'cloud-gaming-operator v{VERSION}'
    )

    gcp = parser.add_argument_group('GCP FLAGS')
    project_default = environ.get(ENV_PROJECT) or None
    gcp.add_argument(
        '-p', '--project', '--projectID',
        dest='project',
        metavar='PROJECT',
        default=project_default,
        required=project_default is None,
        help=f'GCP project ID. Env: {ENV_PROJECT}'
    )
    gcp.add_argument(
        '--region',
        metavar='REGION',
        default=environ.get(ENV_REGION) or DEFAULT_REGION,
        help=f'Region machine images are stored in. Default: {DEFAULT_REGION}. Env: {ENV_REGION}'
    )
    gcp.add_argument(
        '--zone',
        metavar='ZONE',
        default=environ.get(ENV_ZONE) or DEFAULT_ZONE,
        help=f'Zone of the gaming instance. Default: {DEFAULT_ZONE}. Env: {ENV_ZONE}'
    )

    output = parser.add_argument_group('OUTPUT FLAGS')
    output.add_argument(
        '--format',
        metavar='FORMAT',
        choices=OUTPUT_FORMATS,
        default='json',
        help='Format of raw operation output. One of: json, yaml, disable. Default: json'
    )
    output.add_argument(
        '--verbosity',
        metavar='VERBOSITY',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='info',
        help='Logging verbosity. One of: debug, info, warning, error, critical. Default: info'
    )
    output.add_argument(
        '--log-file',
        metavar='LOG_FILE',
        help='Write logs to this file.'
    )
    output.add_argument(
        '--progress-bar',
        action='store_true',
        help='Show a progress bar for create and remove instead of step lines.'
    )

    timing = parser.add_argument_group('TIMING FLAGS')
    timing.add_argument(
        '--poll-interval',
        type=int,
        metavar='SECONDS',
        default=5,
        help='Seconds between operation status checks. Default: 5'
    )
    timing.add_argument(
        '--timeout',
        type=int,
        metavar='SECONDS',
        help='Give up waiting for an operation after this many seconds. Default: wait forever'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        metavar='COMMAND',
        help='Available commands'
    )
    subparsers.add_parser(
        'list',
        aliases=['l'],
        help='Show the running instances.'
    )
    subparsers.add_parser(
        'create',
        aliases=['c'],
        help='Start the instance from the machine image. Does nothing if one is running.'
    )
    subparsers.add_parser(
        'remove',
        aliases=['r'],
        help='Back up the instance to a machine image, then delete it.'
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """
    Validate arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if valid, False with error message
    """

    if not args.project or not args.project.strip():
        print("ERROR: (cloud-gaming-operator) Invalid value:", file=sys.stderr)
        print("  --project cannot be empty", file=sys.stderr)
        return False

    if args.poll_interval < 1:
        print("ERROR: (cloud-gaming-operator) Invalid value:", file=sys.stderr)
        print("  --poll-interval must be at least 1 second", file=sys.stderr)
        return False

    if args.timeout is not None and args.timeout < args.poll_interval:
        print("ERROR: (cloud-gaming-operator) Invalid value:", file=sys.stderr)
        print("  --timeout must be at least --poll-interval", file=sys.stderr)
        return False

    return True


def args_to_config(args: argparse.Namespace):
    """Convert arguments to OperatorConfig."""
    return create_operator_config(
        args.project,
        region=args.region,
        zone=args.zone,
        poll_interval=args.poll_interval,
        operation_timeout=args.timeout,
        output_format=args.format,
        log_level=args.verbosity.upper(),
        log_file=args.log_file,
        progress_bar=args.progress_bar,
    )


def main(argv=None) -> int:
    """Main CLI entry point."""

    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        if not validate_args(args):
            return 1

        command = ALIASES.get(args.command, args.command)
        config = args_to_config(args)
        debug = args.verbosity == 'debug'

        if command == 'list':
            success = list_vms(config, debug=debug)
        elif command == 'create':
            success = create_vm(config, debug=debug)
        elif command == 'remove':
            success = remove_vm(config, debug=debug)
        else:
            print(f"ERROR: (cloud-gaming-operator) Unknown command: {args.command}", file=sys.stderr)
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == '__main__':
    sys.exit(main())
