"""
Cloud Gaming Operator - Progress Tracking

Step-based progress feedback for multi-step workflows.
Logs one line per step, or drives a tqdm bar when asked to.
"""

import sys
import time

from tqdm import tqdm


class ProgressTracker:
    """
    Track progress of a workflow with numbered steps.

    Example:
        with ProgressTracker(total_steps=3, desc="Remove", logger=logger) as tracker:
            tracker.update_step("Stopping instance")
            # ... do work ...
            tracker.advance()

    Output (step lines):
        ┌── Remove
        ├── [1/3] Stopping instance...
        └── Remove completed in 42.0s
    """

    def __init__(self, total_steps: int, desc: str = "Operation", logger=None,
                 use_tqdm: bool = False):
        """
        Initialize progress tracker.

        Args:
            total_steps: Total number of steps in the workflow
            desc: Description of the workflow
            logger: Optional logger; without one the step lines are silent
            use_tqdm: Show a tqdm bar instead of step lines
        """
        self.total_steps = total_steps
        self.current_step = 0
        self.desc = desc
        self.start_time = None
        self.logger = logger
        self.use_tqdm = use_tqdm
        self.tqdm_bar = None

    def _log(self, message: str):
        if self.logger:
            self.logger.info(message)

    def start(self):
        """Start the progress tracker."""
        self.start_time = time.time()
        self.current_step = 0

        if self.use_tqdm:
            self.tqdm_bar = tqdm(
                total=self.total_steps,
                desc=self.desc,
                bar_format='{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} [{elapsed}]',
                ncols=80,
                file=sys.stdout
            )
        else:
            self._log(f"┌── {self.desc}")

    def update_step(self, step_name: str):
        """
        Update the current step name.

        Args:
            step_name: Name of the current step
        """
        if self.tqdm_bar:
            self.tqdm_bar.set_description(f"{self.desc} - {step_name}")
        else:
            self._log(f"├── [{self.current_step + 1}/{self.total_steps}] {step_name}...")

    def advance(self, steps: int = 1):
        """Advance the progress by one or more steps."""
        self.current_step += steps

        if self.tqdm_bar:
            self.tqdm_bar.update(steps)

    def finish(self):
        """Finish the progress tracker."""
        elapsed = time.time() - self.start_time if self.start_time else 0

        if self.tqdm_bar:
            self.tqdm_bar.close()
            self.tqdm_bar = None
        self._log(f"└── {self.desc} completed in {elapsed:.1f}s")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit. Only a completed workflow gets the footer."""
        if exc_type is None:
            self.finish()
        elif self.tqdm_bar:
            self.tqdm_bar.close()
            self.tqdm_bar = None
        return False
