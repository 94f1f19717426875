"""Bounded worker pool with wait-group joins.

Both engines fan work out through the same primitive: units are spawned
onto a :class:`WaitGroup`, and the caller blocks in :meth:`WorkerPool.wait`
until every unit on that group, including units spawned by other units,
has finished.
"""

import logging
import multiprocessing
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

logger = logging.getLogger('gitocd')


class WaitGroup:
    """Count outstanding units of work and remember the first failure."""

    def __init__(self):
        self._pending = 0
        self._error: Optional[BaseException] = None
        self._cond = threading.Condition()

    def add(self, count: int = 1) -> None:
        with self._cond:
            self._pending += count

    def done(self, error: Optional[BaseException] = None) -> None:
        with self._cond:
            if error is not None and self._error is None:
                self._error = error
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    @property
    def failed(self) -> bool:
        """Check if any unit on this group has raised."""
        with self._cond:
            return self._error is not None

    @property
    def error(self) -> Optional[BaseException]:
        with self._cond:
            return self._error

    def wait(self) -> None:
        """Block until the pending count drops to zero."""
        with self._cond:
            while self._pending > 0:
                self._cond.wait()


class WorkerPool:
    """A fixed number of reusable worker threads."""

    def __init__(self, max_workers: Optional[int] = None):
        """Initialize worker pool.

        Args:
            max_workers: Number of worker threads (None = CPU count)

        Raises:
            ValueError: If max_workers is not positive
        """
        if max_workers is None:
            self.max_workers = multiprocessing.cpu_count()
        else:
            self.max_workers = max_workers

        if self.max_workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {self.max_workers}")

        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix='gitocd-worker'
        )

    def spawn(self, wg: WaitGroup, fn: Callable[..., Any], *args: Any) -> None:
        """Queue ``fn(*args)`` as one unit of work tied to ``wg``."""
        wg.add()
        try:
            self._executor.submit(self._run, wg, fn, args)
        except RuntimeError:
            # Pool already shut down
            wg.done()
            raise

    def wait(self, wg: WaitGroup) -> None:
        """Block until every unit on ``wg`` has completed.

        Raises:
            The first exception raised by any unit on the group
        """
        wg.wait()
        if wg.error is not None:
            raise wg.error

    def shutdown(self, cancel_pending: bool = False) -> None:
        """Stop the worker threads.

        Args:
            cancel_pending: Drop queued units that have not started yet
        """
        self._executor.shutdown(wait=True, cancel_futures=cancel_pending)

    def __enter__(self) -> 'WorkerPool':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Interrupted or failed: do not start the rest of the queue
        self.shutdown(cancel_pending=exc_type is not None)
        return False

    @staticmethod
    def _run(wg: WaitGroup, fn: Callable[..., Any], args: tuple) -> None:
        error = None
        try:
            fn(*args)
        except Exception as e:
            logger.debug(f"Worker unit {getattr(fn, '__name__', fn)} failed: {e}")
            error = e
        finally:
            wg.done(error)
