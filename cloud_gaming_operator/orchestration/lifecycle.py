"""
Cloud Gaming Operator - Instance Lifecycle Controller

Coordinates the three workflows over the single gaming instance:
1. list: show what is running in the managed zone
2. ensure_running: create the instance from the machine image (no-op if running)
3. snapshot_and_terminate: stop, back up to a new machine image, delete
   older images, delete the instance

Every step waits for the previous operation to be DONE. Any failure aborts
the workflow where it is; nothing is rolled back.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from cloud_gaming_operator.core.config import JST, OperatorConfig
from cloud_gaming_operator.core.exceptions import (
    MultipleInstancesError,
    MultipleMachineImagesError,
    NoInstanceError,
    NoMachineImageError,
)
from cloud_gaming_operator.operations import (
    GlobalOperationFetcher,
    OperationPoller,
    ZoneOperationFetcher,
    delete_instance,
    delete_machine_image,
    insert_instance_from_machine_image,
    insert_machine_image,
    list_instances,
    list_machine_images,
    stop_instance,
)
from cloud_gaming_operator.utils.output import (
    format_output,
    format_timestamp,
    timestamp_suffix,
)
from cloud_gaming_operator.utils.progress import ProgressTracker

INSTANCE_PREFIX = 'instance'
BACKUP_PREFIX = 'backup'


def _now_jst() -> datetime:
    return datetime.now(JST)


class LifecycleController:
    """
    Manages the lifecycle of the single cloud gaming instance.

    At most one instance may exist in the managed zone and exactly one
    machine image is kept as the template for the next session. Anything
    else is reported as an error for the operator to resolve by hand.

    Example:
        controller = LifecycleController(compute, config, logger=logger)

        controller.ensure_running()          # start a session
        controller.list_instances()          # check on it
        controller.snapshot_and_terminate()  # save and stop paying
    """

    def __init__(self, compute, config: OperatorConfig, logger=None,
                 poller: OperationPoller = None,
                 now: Callable[[], datetime] = None):
        """
        Initialize lifecycle controller.

        Args:
            compute: GCP compute client
            config: Operator configuration
            logger: Optional logger
            poller: Optional poller (built from config if not provided)
            now: Optional clock returning an aware datetime (default: JST now)
        """
        self.compute = compute
        self.config = config
        self.logger = logger
        self.poller = poller or OperationPoller(
            interval=config.poll_interval,
            timeout=config.operation_timeout,
            logger=logger
        )
        self.now = now or _now_jst

        self.zone_operations = ZoneOperationFetcher(
            compute, config.project, config.zone, logger)
        self.global_operations = GlobalOperationFetcher(
            compute, config.project, logger)

    @property
    def project(self) -> str:
        return self.config.project

    @property
    def zone(self) -> str:
        return self.config.zone

    def _log_info(self, message: str):
        """Log info message."""
        if self.logger:
            self.logger.info(message)

    def _log_debug(self, message: str):
        """Log debug message."""
        if self.logger:
            self.logger.debug(message)

    def _emit_operation(self, operation: Dict[str, Any]):
        """Print the raw operation resource in the configured format."""
        text = format_output(operation, self.config.output_format)
        if text:
            self._log_info(text)

    def _list_instances(self) -> List[Dict[str, Any]]:
        return list_instances(self.compute, self.project, self.zone, self.logger)

    def _list_machine_images(self) -> List[Dict[str, Any]]:
        return list_machine_images(self.compute, self.project, self.logger)

    # list

    def list_instances(self) -> List[Dict[str, Any]]:
        """
        Show the instances running in the managed zone.

        Returns:
            The instance resources found
        """
        instances = self._list_instances()
        self._show_instances(instances)
        return instances

    def _show_instances(self, instances: List[Dict[str, Any]]):
        if not instances:
            self._log_info("No instance is running.")
            return

        for instance in instances:
            last_start = format_timestamp(instance.get('lastStartTimestamp'))
            self._log_info(f"Name: {instance['name']}, LastStart: {last_start}")

    # create

    def ensure_running(self) -> Optional[str]:
        """
        Make sure the gaming instance is running.

        If any instance exists this only lists it. Otherwise the instance
        is created from the project's single machine image.

        Returns:
            Name of the created instance, or None if one was already running

        Raises:
            NoMachineImageError: If the project has no machine image
            MultipleMachineImagesError: If the project has more than one
        """
        instances = self._list_instances()
        if instances:
            self._log_info("Instance is already running.")
            self._show_instances(instances)
            return None

        with ProgressTracker(total_steps=2, desc="Create instance", logger=self.logger,
                             use_tqdm=self.config.progress_bar) as tracker:
            tracker.update_step("Selecting machine image")
            machine_image = self._select_machine_image()
            self._log_debug(f"Using machine image: {machine_image['name']}")
            tracker.advance()

            instance_name = f"{INSTANCE_PREFIX}-{timestamp_suffix(self.now())}"
            tracker.update_step(f"Creating instance {instance_name}")
            operation = insert_instance_from_machine_image(
                self.compute, self.project, self.zone,
                instance_name, machine_image['name'], self.logger
            )
            self._emit_operation(operation)
            self.poller.wait(operation, self.zone_operations)
            tracker.advance()

        self._log_info(f"Instance {instance_name} was created.")
        return instance_name

    def _select_machine_image(self) -> Dict[str, Any]:
        images = self._list_machine_images()
        if not images:
            raise NoMachineImageError(self.project)
        if len(images) > 1:
            raise MultipleMachineImagesError(
                [image['name'] for image in images], self.project)
        return images[0]

    # remove

    def snapshot_and_terminate(self) -> str:
        """
        Back up the running instance to a machine image and delete it.

        Only the new machine image is kept; all others are deleted to save
        storage cost.

        Returns:
            Name of the machine image created

        Raises:
            NoInstanceError: If nothing is running
            MultipleInstancesError: If more than one instance exists
        """
        instances = self._list_instances()
        if not instances:
            raise NoInstanceError(self.project, self.zone)
        if len(instances) > 1:
            raise MultipleInstancesError(
                [instance['name'] for instance in instances],
                self.project, self.zone)

        instance_name = instances[0]['name']

        with ProgressTracker(total_steps=4, desc="Remove instance", logger=self.logger,
                             use_tqdm=self.config.progress_bar) as tracker:
            tracker.update_step(f"Stopping instance {instance_name}")
            operation = stop_instance(
                self.compute, self.project, self.zone, instance_name, self.logger)
            self._emit_operation(operation)
            self.poller.wait(operation, self.zone_operations)
            self._log_info(f"Instance {instance_name} stopped.")
            tracker.advance()

            tracker.update_step("Creating machine image")
            image_name = self._create_backup_image(instance_name)
            tracker.advance()

            tracker.update_step("Deleting old machine images")
            self._delete_other_machine_images(image_name)
            tracker.advance()

            tracker.update_step(f"Deleting instance {instance_name}")
            operation = delete_instance(
                self.compute, self.project, self.zone, instance_name, self.logger)
            self._emit_operation(operation)
            self.poller.wait(operation, self.zone_operations)
            self._log_info(f"Instance {instance_name} was deleted.")
            tracker.advance()

        return image_name

    def _create_backup_image(self, instance_name: str) -> str:
        moment = self.now()
        image_name = f"{BACKUP_PREFIX}-{timestamp_suffix(moment)}"
        description = (
            f"Machine image created at "
            f"{moment.astimezone(JST).strftime('%Y-%m-%d %H:%M:%S')}"
        )
        source_instance = (
            f"projects/{self.project}/zones/{self.zone}/instances/{instance_name}"
        )

        operation = insert_machine_image(
            self.compute, self.project, image_name, source_instance,
            description, self.config.region, self.logger
        )
        self._emit_operation(operation)
        self.poller.wait(operation, self.global_operations)
        self._log_info(f"Machine image {image_name} was created.")
        return image_name

    def _delete_other_machine_images(self, keep: str):
        # Deletions are accepted, not awaited
        for image in self._list_machine_images():
            if image['name'] == keep:
                continue
            operation = delete_machine_image(
                self.compute, self.project, image['name'], self.logger)
            self._emit_operation(operation)
            self._log_debug(f"Requested deletion of machine image {image['name']}")

        self._log_info(f"Deleted all machine images except {keep}.")
