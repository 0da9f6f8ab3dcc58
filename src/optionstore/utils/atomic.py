"""Thread-safe value cell."""

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class AtomicReference(Generic[T]):
    """A single value that can be read and swapped from any thread.

    Every access goes through one lock, so a ``set`` is visible to any later
    ``get`` and callers never observe a half-applied update.
    """

    def __init__(self, value: T):
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"AtomicReference({self.get()!r})"
