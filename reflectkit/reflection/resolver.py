"""Overload resolution by argument count and exact runtime type.

Matching is strict: an argument matches a parameter only
when ``type(arg) is declared_type``. There is no widening (``int`` does not
match ``float``), no subclass assignability and no ``None`` for optional
types. Parameters without an annotation (declared ``Any``) accept anything.

The first matching overload in enumeration order wins; there is no
"most specific" ranking.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .errors import MethodNotFound
from .types import MethodSignature, ParameterInfo, ParameterKind

if TYPE_CHECKING:
    from .descriptor import TypeDescriptor


def accepts(param: ParameterInfo, arg: Any) -> bool:
    return param.declared_type is Any or type(arg) is param.declared_type


def matches(signature: MethodSignature, args: Sequence[Any]) -> bool:
    """Check whether ``args`` can be bound positionally to ``signature``.

    Every parameter left over after binding must carry a default.
    """
    if signature.is_generic:
        return False

    positional = signature.positional
    if len(positional) < len(args):
        return False

    for param, arg in zip(positional, args):
        if not accepts(param, arg):
            return False

    remaining = positional[len(args) :]
    keywords = [p for p in signature.parameters if p.kind is ParameterKind.KEYWORD]
    return all(p.is_optional for p in (*remaining, *keywords))


def resolve(descriptor: TypeDescriptor, method_name: str, args: Sequence[Any]) -> MethodSignature:
    """Pick the first overload of ``method_name`` that accepts ``args``.

    Raises:
        MethodNotFound: if no overload matches.
    """
    for signature in descriptor.methods_named(method_name):
        if matches(signature, args):
            return signature
    raise MethodNotFound(method_name)
