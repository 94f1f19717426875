"""Progress tracking utilities."""

import logging
import threading
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from ..core.types import StatusResult

logger = logging.getLogger('gitocd')

# Small scans finish too quickly for a progress bar to be useful
PROGRESS_THRESHOLD = 20


class ProgressTracker:
    """Count completed status checks and display progress on stderr.

    The completed counter has its own lock so updating it never contends
    with the lock on the results collector.
    """

    def __init__(
        self,
        total: int,
        operation_name: str = "status",
        enabled: bool = True,
        console: Optional[Console] = None
    ):
        """Initialize progress tracker.

        Args:
            total: Total number of repositories to check
            operation_name: Name of the operation being performed
            enabled: Whether to display a progress bar at all
            console: Console to draw on (default: stderr)
        """
        self.total = total
        self.operation_name = operation_name
        self.completed = 0
        self.clean_count = 0
        self.dirty_count = 0
        self.unknown_count = 0
        self._lock = threading.Lock()

        self.progress: Optional[Progress] = None
        if enabled and total > PROGRESS_THRESHOLD:
            self.progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console or Console(stderr=True),
                transient=True
            )
            self._task = self.progress.add_task("Checking repositories...", total=total)
            self.progress.start()

    def update(self, result: StatusResult) -> int:
        """Record one completed check.

        Args:
            result: Status result that just completed

        Returns:
            Number of checks completed so far
        """
        with self._lock:
            self.completed += 1
            if result.clean:
                self.clean_count += 1
            elif result.dirty:
                self.dirty_count += 1
            else:
                self.unknown_count += 1
            current = self.completed

        if self.progress is not None:
            self.progress.advance(self._task)
        return current

    def finish(self) -> None:
        """Finish progress tracking."""
        if self.progress is not None:
            self.progress.stop()

        logger.info(f"Completed {self.operation_name} check")
        logger.info(f"Total: {self.total}, Clean: {self.clean_count}, "
                    f"Dirty: {self.dirty_count}, Unknown: {self.unknown_count}")
