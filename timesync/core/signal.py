"""
Publish/subscribe primitives.

EventDispatcher broadcasts arguments to its subscribers. ValueDispatcher holds a
current value and broadcasts it whenever it is assigned. Both hand out a
Subscribable view so that consumers can listen without being able to dispatch.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[..., Any]
Unsubscribe = Callable[[], None]


class EventDispatcher:
    """Synchronous signal with an ordered list of handlers."""

    def __init__(self) -> None:
        self._handlers: List[Handler] = []
        self._subscribable = Subscribable(self)

    @property
    def subscribable(self) -> "Subscribable":
        return self._subscribable

    def subscribe(self, handler: Handler) -> Unsubscribe:
        """
        Add handler to the end of the dispatch list.

        Returns:
            Callable that removes the handler again
        """
        self._handlers.append(handler)
        return lambda: self.unsubscribe(handler)

    def unsubscribe(self, handler: Handler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def dispatch(self, *args: Any) -> None:
        # Iterate over a copy so handlers may unsubscribe while dispatching.
        for handler in list(self._handlers):
            try:
                handler(*args)
            except Exception:
                logger.exception("Signal handler %r failed", handler)

    def __len__(self) -> int:
        return len(self._handlers)


class ValueDispatcher(EventDispatcher, Generic[T]):
    """
    Dispatcher that remembers the last dispatched value.

    Usage:
        events = ValueDispatcher([])
        events.subscribe(print)         # prints [] right away
        events.current = [1, 2]         # prints [1, 2]
    """

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial

    @property
    def current(self) -> T:
        return self._value

    @current.setter
    def current(self, value: T) -> None:
        self._value = value
        self.dispatch(value)

    def subscribe(self, handler: Handler, dispatch_immediately: bool = True) -> Unsubscribe:
        unsubscribe = super().subscribe(handler)
        if dispatch_immediately:
            handler(self._value)
        return unsubscribe


class Subscribable:
    """Read-only view of a dispatcher."""

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self._dispatcher = dispatcher

    def subscribe(self, handler: Handler, *args: Any, **kwargs: Any) -> Unsubscribe:
        return self._dispatcher.subscribe(handler, *args, **kwargs)

    def unsubscribe(self, handler: Handler) -> None:
        self._dispatcher.unsubscribe(handler)
