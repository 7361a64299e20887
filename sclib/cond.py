"""One-shot hand-off of a value from one thread to another."""

from __future__ import annotations

import threading
from typing import Any


class Cond:
    """A signal carrying data; ``wait`` blocks until ``signal`` has been called.

    A signal sent before anyone waits is kept, so the next ``wait`` returns
    at once. A later signal before the wait replaces the earlier data. Each
    ``wait`` consumes the signal.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._done = False
        self._data: Any = None

    def signal(self, data: Any = None) -> None:
        """Hand ``data`` to the thread calling ``wait``."""
        with self._cond:
            self._data = data
            self._done = True
            self._cond.notify()

    def wait(self) -> Any:
        """Block until signalled and return the data passed to ``signal``."""
        with self._cond:
            self._cond.wait_for(lambda: self._done)
            data, self._data = self._data, None
            self._done = False
            return data