"""
Cloud Gaming Operator - Main Entry Points

Simple entry points for the three commands.

Usage:
    from cloud_gaming_operator.core.config import OperatorConfig
    from cloud_gaming_operator.main import list_vms, create_vm, remove_vm

    config = OperatorConfig(project='my-gaming-project')

    success = create_vm(config)   # start playing
    success = remove_vm(config)   # done for today
"""

from googleapiclient.errors import HttpError

from cloud_gaming_operator.core.auth import AuthManager
from cloud_gaming_operator.core.config import OperatorConfig
from cloud_gaming_operator.core.exceptions import OperatorError
from cloud_gaming_operator.orchestration import LifecycleController
from cloud_gaming_operator.utils.logger import print_header, setup_logging


def _run(title: str, workflow, config: OperatorConfig, debug: bool = False,
         auth: AuthManager = None) -> bool:
    """
    Authenticate, build the controller and run one workflow.

    Args:
        title: Header shown before the workflow starts
        workflow: Function taking a LifecycleController
        config: Operator configuration
        debug: Enable debug logging
        auth: Optional AuthManager (a new one is created if not provided)

    Returns:
        True if the workflow succeeded, False if it failed
    """

    logger = setup_logging(
        level='DEBUG' if debug else config.log_level,
        log_file=config.log_file,
        debug=debug
    )

    print_header(logger, f"Cloud Gaming Operator - {title}")
    logger.info(f"Project: {config.project}")
    logger.info(f"Zone: {config.zone}")
    logger.info(f"Region: {config.region}")
    logger.info("")

    try:
        auth = auth or AuthManager()
        compute, project = auth.get_client(config.project)
        logger.debug(f"Authenticated to project: {project}")

        controller = LifecycleController(compute=compute, config=config, logger=logger)
        workflow(controller)
        return True

    except OperatorError as e:
        logger.error(str(e))
        return False

    except HttpError as e:
        logger.error(f"GCP API error: {e}")
        return False

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        if debug:
            logger.exception("Full traceback:")
        return False


def list_vms(config: OperatorConfig, debug: bool = False, auth: AuthManager = None) -> bool:
    """
    Show the instances running in the managed zone.

    Returns:
        True on success, False on failure
    """
    return _run("List", lambda c: c.list_instances(), config, debug, auth)


def create_vm(config: OperatorConfig, debug: bool = False, auth: AuthManager = None) -> bool:
    """
    Start the gaming instance from the machine image.

    Does nothing but list the instance if one is already running.

    Returns:
        True on success, False on failure
    """
    return _run("Create", lambda c: c.ensure_running(), config, debug, auth)


def remove_vm(config: OperatorConfig, debug: bool = False, auth: AuthManager = None) -> bool:
    """
    Back up the gaming instance to a machine image and delete it.

    This will:
    1. Stop the instance
    2. Create a backup machine image from it
    3. Delete every other machine image
    4. Delete the instance

    Returns:
        True on success, False on failure
    """
    return _run("Remove", lambda c: c.snapshot_and_terminate(), config, debug, auth)
