"""Exceptions raised by the reflection core."""

from typing import Any

__all__ = [
    "ReflectionError",
    "TypeNotFound",
    "PropertyNotFound",
    "FieldNotFound",
    "MethodNotFound",
    "InvalidOperation",
    "InvokeFailure",
    "TypeMismatch",
]


class ReflectionError(RuntimeError):
    """Base class for all reflection failures."""


class TypeNotFound(ReflectionError, LookupError):
    """Raised when a type identity does not resolve to exactly one class."""

    def __init__(self, identity: Any, reason: str | None = None) -> None:
        self.identity = identity
        message = f"Type not found: {identity!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class PropertyNotFound(ReflectionError, LookupError):
    """Raised when a named property is not part of a type's public surface."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Property [{name}] not found")


class FieldNotFound(ReflectionError, LookupError):
    """Raised when a named field is not part of a type's public surface."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Field [{name}] not found")


class MethodNotFound(ReflectionError, LookupError):
    """Raised when no overload satisfies the name, arity and argument types."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Method [{name}] not found")


class InvalidOperation(ReflectionError):
    """Raised for operations an accessor structurally cannot perform."""


class InvokeFailure(ReflectionError):
    """Raised when an invoked method (or the call itself) fails.

    The original exception is available as ``cause`` and ``__cause__``.
    """

    def __init__(self, method_name: str, cause: BaseException) -> None:
        self.method_name = method_name
        self.cause = cause
        super().__init__(f"Invoke failure: {method_name}: {cause}")


class TypeMismatch(ReflectionError, TypeError):
    """Raised when a value is not an instance of the requested type."""

    def __init__(self, expected: Any, actual: type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {_type_name(expected)}, got {_type_name(actual)}")


def _type_name(t: Any) -> str:
    return getattr(t, "__qualname__", None) or repr(t)
