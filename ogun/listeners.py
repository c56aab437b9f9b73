"""An ordered set of listener objects notified by method name."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class ListenerList:
    """Keeps listeners in registration order, each one at most once."""

    def __init__(self) -> None:
        self._listeners: list[Any] = []

    def _index(self, listener: Any) -> int | None:
        return next((i for i, item in enumerate(self._listeners) if item is listener), None)

    def add(self, listener: Any) -> None:
        """Register ``listener`` unless it is already registered."""
        if self._index(listener) is None:
            self._listeners.append(listener)

    def remove(self, listener: Any) -> None:
        """Unregister ``listener``; unknown listeners are ignored."""
        idx = self._index(listener)
        if idx is not None:
            del self._listeners[idx]

    def call(self, method_name: str, *args: Any) -> None:
        """Call ``method_name(*args)`` on every listener in order."""
        for listener in tuple(self._listeners):
            getattr(listener, method_name)(*args)

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(self._listeners))

    def __len__(self) -> int:
        return len(self._listeners)