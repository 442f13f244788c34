"""Argument completion and method invocation."""

from collections.abc import Sequence
from typing import Any

from .errors import InvalidOperation, InvokeFailure
from .types import MethodSignature, ParameterKind, cast_to


def complete_arguments(
    signature: MethodSignature, args: Sequence[Any]
) -> tuple[list[Any], dict[str, Any]]:
    """Fill parameters not covered by ``args`` with their declared defaults.

    Returns:
        Tuple of (positional arguments, keyword-only arguments).

    Raises:
        InvalidOperation: if a remaining parameter has no default.
    """
    positional = list(args)
    keywords: dict[str, Any] = {}

    for param in signature.positional[len(args) :]:
        if not param.is_optional:
            raise InvalidOperation(f"Required parameter [{param.name}] is missing")
        positional.append(param.default)

    for param in signature.parameters:
        if param.kind is not ParameterKind.KEYWORD:
            continue
        if not param.is_optional:
            raise InvalidOperation(f"Required parameter [{param.name}] is missing")
        keywords[param.name] = param.default

    return positional, keywords


def _call(signature: MethodSignature, owner: type, instance: Any, args: Sequence[Any]) -> Any:
    try:
        if not isinstance(instance, owner):
            raise TypeError(f"{type(instance).__qualname__} is not a {owner.__qualname__}")
        positional, keywords = complete_arguments(signature, args)
        return signature.function(instance, *positional, **keywords)
    except Exception as ex:
        raise InvokeFailure(signature.name, ex) from ex


def invoke(
    signature: MethodSignature,
    owner: type,
    instance: Any,
    args: Sequence[Any],
    result_type: Any = None,
) -> Any:
    """Call ``signature`` on ``instance`` and return its result.

    Raises:
        InvokeFailure: if completing arguments or the call itself fails.
        TypeMismatch: if the result is not a ``result_type``.
    """
    return cast_to(_call(signature, owner, instance, args), result_type)


def invoke_void(signature: MethodSignature, owner: type, instance: Any, args: Sequence[Any]) -> None:
    """Call ``signature`` on ``instance`` and discard the result.

    Raises:
        InvokeFailure: if completing arguments or the call itself fails.
    """
    _call(signature, owner, instance, args)
