# status.py
# Observable status values (loading flag, dictionary size, loader state).
# Holds the current value and notifies subscribers on change; UI layers poll
# .value or subscribe, whichever suits them.

from __future__ import annotations
import logging
import threading
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[[T], None]


class Observable(Generic[T]):

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        with self._lock:
            if value == self._value:
                return
            self._value = value
            listeners = list(self._listeners)
        for fn in listeners:
            try:
                fn(value)
            except Exception:
                # a broken listener must not stop the engine
                logger.exception("status listener %r failed", fn)

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        """Register `fn`; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(fn)

        def _unsubscribe() -> None:
            with self._lock:
                if fn in self._listeners:
                    self._listeners.remove(fn)

        return _unsubscribe

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"
