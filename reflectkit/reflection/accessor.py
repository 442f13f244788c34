"""Compiled property accessors.

A :class:`PropertyAccessor` is built once per public property when its
type descriptor is constructed. The getter and setter are bound at build
time to the property's underlying functions, so a call does not repeat
the attribute lookup and descriptor dispatch of ``getattr``/``setattr``.
"""

import logging
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

from .errors import InvalidOperation
from .extractor import type_hints
from .types import cast_to

logger = logging.getLogger(__name__)

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]

# Scalar types with value semantics
VALUE_TYPES: tuple[type, ...] = (bool, int, float, complex, Decimal, Fraction, Enum)

# Immutable reference types that consumers may treat like scalars
BASIC_REFERENCE_TYPES = frozenset([str, datetime, timedelta])


def unwrap_optional(t: Any) -> tuple[bool, Any]:
    """Split a nullable value type ``X | None`` into (True, X).

    Only value types are nullable; ``str | None`` and other optional
    reference types are returned unchanged as (False, t).
    """
    if typing.get_origin(t) in (typing.Union, types.UnionType):
        args = typing.get_args(t)
        rest = [a for a in args if a is not types.NoneType]
        if len(args) == 2 and len(rest) == 1 and is_value_type(rest[0]):
            return True, rest[0]
    return False, t


def is_value_type(t: Any) -> bool:
    """Check if a type has value semantics (scalars, enums, frozen records)."""
    if not isinstance(t, type) or typing.get_origin(t) is not None:
        return False
    if issubclass(t, VALUE_TYPES):
        return True
    params = getattr(t, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return True
    # NamedTuple
    return issubclass(t, tuple) and hasattr(t, "_fields")


def _declared_type(prop: property, owner: type) -> Any:
    if prop.fget is not None:
        returns = type_hints(prop.fget, owner).get("return")
        if returns is not None:
            return returns
    if prop.fset is not None:
        hints = type_hints(prop.fset, owner)
        hints.pop("return", None)
        if len(hints) == 1:
            return next(iter(hints.values()))
    return Any


def _checked(func: Any, what: str) -> Any:
    if not callable(func):
        raise TypeError(f"{what} {func!r} is not callable")
    return func


def _bind_getter(prop: property, owner: type) -> Getter | None:
    if prop.fget is None:
        return None
    fget = _checked(prop.fget, "getter")
    if type(prop) is property:
        return fget
    # property subclasses may customize __get__
    bound_get = _checked(prop.__get__, "__get__")
    return lambda instance: bound_get(instance, owner)


def _bind_setter(prop: property) -> Setter | None:
    if prop.fset is None:
        return None
    fset = _checked(prop.fset, "setter")
    if type(prop) is property:
        return fset
    return _checked(prop.__set__, "__set__")


@dataclass(frozen=True, slots=True)
class PropertyAccessor:
    """Getter/setter pair for one property, plus static type classification."""

    name: str
    declared_type: Any
    underlying_type: Any
    is_nullable: bool
    is_value_type: bool
    is_basic_reference_type: bool
    getter: Getter | None = field(default=None, compare=False, repr=False)
    setter: Setter | None = field(default=None, compare=False, repr=False)

    @classmethod
    def build(cls, name: str, prop: property, owner: type) -> "PropertyAccessor":
        """Compile an accessor for ``prop``.

        A getter or setter that cannot be bound leaves that half absent
        instead of failing the whole build.
        """
        try:
            getter = _bind_getter(prop, owner)
        except (TypeError, AttributeError) as ex:
            logger.debug("%s.%s: getter not bound: %s", owner.__qualname__, name, ex)
            getter = None
        try:
            setter = _bind_setter(prop)
        except (TypeError, AttributeError) as ex:
            logger.debug("%s.%s: setter not bound: %s", owner.__qualname__, name, ex)
            setter = None

        declared = _declared_type(prop, owner)
        nullable, underlying = unwrap_optional(declared)
        return cls(
            name=name,
            declared_type=declared,
            underlying_type=underlying,
            is_nullable=nullable,
            is_value_type=is_value_type(underlying),
            is_basic_reference_type=underlying in BASIC_REFERENCE_TYPES,
            getter=getter,
            setter=setter,
        )

    @property
    def is_gettable(self) -> bool:
        return self.getter is not None

    @property
    def is_settable(self) -> bool:
        return self.setter is not None

    @property
    def is_basic_type(self) -> bool:
        return self.is_value_type or self.is_basic_reference_type

    def get(self, instance: Any, expected_type: Any = None) -> Any:
        """Read the property from ``instance``.

        Args:
            instance: The object to read from.
            expected_type: If given, the value must be an instance of it.

        Raises:
            InvalidOperation: if the property has no getter.
            TypeMismatch: if the value is not an ``expected_type``.
        """
        if self.getter is None:
            raise InvalidOperation(f"Property [{self.name}] is not gettable")
        return cast_to(self.getter(instance), expected_type)

    def set(self, instance: Any, value: Any, value_type: Any = None) -> None:
        """Write the property on ``instance``.

        Nothing is written when the property is read-only or ``value`` is
        not a ``value_type``. Exceptions from the setter itself propagate.

        Raises:
            InvalidOperation: if the property has no setter.
            TypeMismatch: if ``value`` is not a ``value_type``.
        """
        if self.setter is None:
            raise InvalidOperation(f"Property [{self.name}] is not settable")
        self.setter(instance, cast_to(value, value_type))
