"""Declarative events for reflected classes.

Example:
    class Thermostat:
        changed = Event(Callable[[float], None])

    t = Thermostat()
    t.changed += print
    t.changed(21.5)
"""

from collections.abc import Callable, Iterator
from typing import Any


class BoundEvent:
    """Per-instance list of handlers for one event."""

    __slots__ = ("name", "_handlers")

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def __iadd__(self, handler: Callable[..., Any]) -> "BoundEvent":
        if not callable(handler):
            raise TypeError(f"Event handler for {self.name} must be callable")
        self._handlers.append(handler)
        return self

    def __isub__(self, handler: Callable[..., Any]) -> "BoundEvent":
        self._handlers.remove(handler)
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        # Snapshot so handlers may unsubscribe while firing
        for handler in tuple(self._handlers):
            handler(*args, **kwargs)

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(tuple(self._handlers))


class Event:
    """Class-level event declaration.

    Instances of the owning class must have a ``__dict__``; handlers are
    stored there under a private name.
    """

    def __init__(self, handler_type: Any = Any) -> None:
        self.handler_type = handler_type
        self.name = ""
        self._attr = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._attr = f"_event_{name}"

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        bound = instance.__dict__.get(self._attr)
        if bound is None:
            bound = instance.__dict__.setdefault(self._attr, BoundEvent(self.name))
        return bound

    def __set__(self, instance: Any, value: Any) -> None:
        # `obj.evt += handler` writes the same BoundEvent back
        if value is not instance.__dict__.get(self._attr):
            raise AttributeError(f"Event {self.name} cannot be reassigned")
