"""Listener registration shared by the chat components.

Hides how change notifications reach the presentation layer: listeners are
plain callables invoked synchronously on the owning event loop, in
subscription order.
"""

from collections.abc import Callable
from typing import Any

Listener = Callable[[Any], None]


class Observable:
    """Minimal subscribe/emit mixin.

    Usage:
        unsubscribe = log.subscribe(on_change)
        ...
        unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, event: Any) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event)
