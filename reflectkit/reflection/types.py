"""Runtime member descriptors produced by the member extractor.

These dataclasses describe the public surface of a class. They are
immutable and shared freely between threads once a type descriptor
has been published.
"""

import inspect
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from .errors import TypeMismatch

# Sentinel for "no declared default", shared with inspect.Signature
EMPTY: Any = inspect.Parameter.empty


def cast_to(value: Any, expected: Any) -> Any:
    """Return ``value`` if it is an instance of ``expected``.

    ``None`` and ``Any`` accept everything. Parameterized generics are
    checked against their origin (``list[int]`` checks ``list``).

    Raises:
        TypeMismatch: if the value is of another type.
    """
    if expected is None or expected is Any:
        return value
    origin = typing.get_origin(expected)
    if origin is None or origin in (typing.Union, types.UnionType):
        origin = expected
    if not isinstance(value, origin):
        raise TypeMismatch(expected, type(value))
    return value


class ParameterKind(StrEnum):
    """How an argument reaches a parameter."""

    POSITIONAL = auto()
    KEYWORD = auto()


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Describes one parameter of a method or constructor."""

    name: str
    declared_type: Any
    kind: ParameterKind = ParameterKind.POSITIONAL
    default: Any = EMPTY

    @property
    def is_optional(self) -> bool:
        return self.default is not EMPTY


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """Describes one callable overload of a public instance method.

    All overloads declared with ``typing.overload`` share the same
    implementation ``function``; ``parameters`` come from the overload.
    """

    name: str
    parameters: tuple[ParameterInfo, ...]
    return_type: Any
    function: Callable[..., Any] = field(compare=False, repr=False)
    is_generic: bool = False

    @property
    def positional(self) -> tuple[ParameterInfo, ...]:
        return tuple(p for p in self.parameters if p.kind is ParameterKind.POSITIONAL)


@dataclass(frozen=True, slots=True)
class ConstructorSignature:
    """Describes one way of constructing an instance."""

    parameters: tuple[ParameterInfo, ...]


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """Describes a public data attribute declared on the class."""

    name: str
    declared_type: Any
    default: Any = EMPTY


@dataclass(frozen=True, slots=True)
class EventInfo:
    """Describes an event declared with :class:`reflectkit.reflection.events.Event`."""

    name: str
    handler_type: Any
