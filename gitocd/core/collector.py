"""Thread-safe append-only collection."""

import threading
from typing import Generic, List, TypeVar

T = TypeVar('T')


class Collector(Generic[T]):
    """List guarded by its own lock.

    Items come back in insertion order, which under concurrent producers
    is arbitrary.
    """

    def __init__(self):
        self._items: List[T] = []
        self._lock = threading.Lock()

    def add(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def items(self) -> List[T]:
        """Get a snapshot of the collected items."""
        with self._lock:
            return list(self._items)
