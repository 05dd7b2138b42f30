"""Observer events used in place of Qt signals by the property tree."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class Event(Generic[T]):
    """
    Notification point with a list of subscribers.

    Usage:
        prop.changed += handler          # subscribe
        prop.changed -= handler          # unsubscribe
        prop.changed.emit(prop)          # notify all subscribers

        with prop.changed.blocked():     # like QObject.blockSignals()
            prop.set_value(1.0)

    Handlers run synchronously, in subscription order, on the caller's thread.
    A handler may re-enter the emitting object; breaking such cycles is up to
    the owner (see RotationProperty).
    """

    def __init__(self):
        self._handlers: list[Callable[[T], None]] = []
        self._block_depth = 0

    def __iadd__(self, handler: Callable[[T], None]) -> "Event[T]":
        if handler not in self._handlers:
            self._handlers.append(handler)
        return self

    def __isub__(self, handler: Callable[[T], None]) -> "Event[T]":
        if handler in self._handlers:
            self._handlers.remove(handler)
        return self

    connect = __iadd__
    disconnect = __isub__

    def emit(self, value: T) -> None:
        """Notify subscribers unless the event is blocked."""
        if self._block_depth:
            return
        for handler in list(self._handlers):
            handler(value)

    @property
    def is_blocked(self) -> bool:
        return self._block_depth > 0

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress emission for the duration of the with-block. Nests."""
        self._block_depth += 1
        try:
            yield
        finally:
            self._block_depth -= 1

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return len(self._handlers) > 0
