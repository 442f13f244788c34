"""Public member enumeration for classes.

Members are reported in a fixed order: the class itself first, then each
base in MRO order (``object`` is skipped). Inside one class, members follow
declaration order. A name defined on a more-derived class hides the same
name on its bases, and overloads of one method keep declaration order.
The overload resolver's first-match rule depends on this order.
"""

import inspect
import logging
import sys
import typing
from collections.abc import Callable, Iterator
from dataclasses import Field, dataclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from .events import Event
from .types import (
    EMPTY,
    ConstructorSignature,
    EventInfo,
    FieldInfo,
    MethodSignature,
    ParameterInfo,
    ParameterKind,
)

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_NOT_FIELDS = (property, Event, staticmethod, classmethod)
_INTERFACE_ROOTS = (object, Protocol, Generic)
_EVAL_ERRORS = (NameError, TypeError, AttributeError, SyntaxError)


@dataclass(frozen=True, slots=True)
class Members:
    """Everything the extractor found on one class."""

    constructors: tuple[ConstructorSignature, ...]
    properties: tuple[tuple[str, property], ...]
    methods: tuple[MethodSignature, ...]
    fields: tuple[FieldInfo, ...]
    events: tuple[EventInfo, ...]
    interfaces: frozenset[type]


def is_public(name: str) -> bool:
    return not name.startswith("_")


def _namespace(cls: type) -> Iterator[tuple[str, Any]]:
    """Yield (name, raw attribute) for visible public class attributes."""
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if is_public(name):
                yield name, attr


def _evaluate(raw: Any, globalns: dict[str, Any], localns: dict[str, Any] | None) -> Any:
    """Evaluate one annotation, keeping the raw value if it does not resolve."""
    if raw is None:
        return type(None)
    if not isinstance(raw, str):
        return raw
    try:
        return eval(raw, globalns, localns)  # pylint: disable=eval-used
    except _EVAL_ERRORS:
        return raw


def _module_globals(cls: type) -> dict[str, Any]:
    return getattr(sys.modules.get(cls.__module__), "__dict__", {})


def type_hints(obj: Any, owner: type | None = None) -> dict[str, Any]:
    """Resolve annotations of a function or class.

    ``typing.get_type_hints`` fails as a whole when any single annotation
    does not resolve (e.g. a name imported only under ``TYPE_CHECKING``).
    In that case each annotation is evaluated on its own, and only the ones
    that fail are kept as written.

    Args:
        obj: The function or class.
        owner: Class whose namespace is searched for names after the
            function's globals.
    """
    try:
        return typing.get_type_hints(obj)
    except _EVAL_ERRORS as ex:
        logger.debug("Unresolvable annotations on %r: %s", obj, ex)

    if isinstance(obj, type):
        hints: dict[str, Any] = {}
        for klass in reversed(obj.__mro__):
            localns = dict(vars(klass))
            for name, raw in inspect.get_annotations(klass).items():
                hints[name] = _evaluate(raw, _module_globals(klass), localns)
        return hints

    annotations = getattr(obj, "__annotations__", None)
    if not isinstance(annotations, dict):
        return {}
    globalns = getattr(obj, "__globals__", {})
    localns = dict(vars(owner)) if owner is not None else None
    return {name: _evaluate(raw, globalns, localns) for name, raw in annotations.items()}


def _mentions_typevar(t: Any, bound: tuple[Any, ...]) -> bool:
    if isinstance(t, (TypeVar, typing.ParamSpec, typing.TypeVarTuple)):
        return t not in bound
    return any(_mentions_typevar(arg, bound) for arg in typing.get_args(t))


def _parameters(
    func: Callable[..., Any],
    *,
    owner: type,
    impl: Callable[..., Any] | None = None,
) -> tuple[tuple[ParameterInfo, ...], Any]:
    """Return (parameters without self, return type) for a function."""
    sig = inspect.signature(func)
    hints = type_hints(func, owner)
    class_params = getattr(owner, "__parameters__", ())

    impl_defaults: dict[str, Any] = {}
    if impl is not None:
        impl_defaults = {p.name: p.default for p in inspect.signature(impl).parameters.values()}

    params: list[ParameterInfo] = []
    for param in list(sig.parameters.values())[1:]:
        if param.kind in _SKIPPED_KINDS:
            continue

        declared = hints.get(param.name, param.annotation)
        if declared is EMPTY or (isinstance(declared, TypeVar) and declared in class_params):
            declared = Any

        default = param.default
        if default is Ellipsis and impl is not None:
            # Overload stubs commonly write `= ...`; the implementation has the value
            default = impl_defaults.get(param.name, EMPTY)

        kind = (
            ParameterKind.KEYWORD
            if param.kind is inspect.Parameter.KEYWORD_ONLY
            else ParameterKind.POSITIONAL
        )
        params.append(ParameterInfo(param.name, declared, kind, default))

    returns = hints.get("return", sig.return_annotation)
    if returns is EMPTY:
        returns = Any
    return tuple(params), returns


def _method_signatures(name: str, func: Callable[..., Any], owner: type) -> list[MethodSignature]:
    class_params = getattr(owner, "__parameters__", ())
    overloads = typing.get_overloads(func)
    declarations = overloads or [func]
    impl = func if overloads else None

    result = []
    for decl in declarations:
        try:
            params, returns = _parameters(decl, owner=owner, impl=impl)
        except (TypeError, ValueError) as ex:
            logger.debug("Skipping %s.%s: no signature (%s)", owner.__qualname__, name, ex)
            continue
        is_generic = bool(getattr(decl, "__type_params__", ())) or any(
            _mentions_typevar(t, class_params) for t in [returns, *(p.declared_type for p in params)]
        )
        result.append(MethodSignature(name, params, returns, func, is_generic))
    return result


def _constructors(cls: type) -> tuple[ConstructorSignature, ...]:
    init = inspect.getattr_static(cls, "__init__", None)
    if init is None or init is object.__init__:
        return (ConstructorSignature(()),)
    if not inspect.isfunction(init):
        # Builtin initializers carry no introspectable signature
        return ()

    overloads = typing.get_overloads(init)
    declarations = overloads or [init]
    impl = init if overloads else None
    return tuple(
        ConstructorSignature(_parameters(decl, owner=cls, impl=impl)[0]) for decl in declarations
    )


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _fields(cls: type) -> tuple[FieldInfo, ...]:
    hints = type_hints(cls)
    seen: set[str] = set()
    result: list[FieldInfo] = []

    for klass in cls.__mro__:
        if klass is object:
            continue
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        annotations = inspect.get_annotations(klass)

        for name in [*annotations, *slots]:
            if name in seen or not is_public(name):
                continue
            seen.add(name)

            raw = annotations.get(name)
            hint = hints.get(name, raw if raw is not None else Any)
            if _is_classvar(hint) or _is_classvar(raw):
                continue
            static = inspect.getattr_static(cls, name, None)
            if isinstance(static, _NOT_FIELDS) or inspect.isfunction(static):
                continue

            default = vars(klass).get(name, EMPTY)
            if isinstance(default, Field) or inspect.ismemberdescriptor(default):
                default = EMPTY
            result.append(FieldInfo(name, hint, default))
    return tuple(result)


def _is_interface(base: type) -> bool:
    if base in _INTERFACE_ROOTS:
        return False
    return bool(getattr(base, "_is_protocol", False) or getattr(base, "__abstractmethods__", None))


def extract_members(cls: type) -> Members:
    """Enumerate the public surface of ``cls``."""
    properties: list[tuple[str, property]] = []
    methods: list[MethodSignature] = []
    events: list[EventInfo] = []

    for name, attr in _namespace(cls):
        if isinstance(attr, property):
            properties.append((name, attr))
        elif isinstance(attr, Event):
            events.append(EventInfo(name, attr.handler_type))
        elif inspect.isfunction(attr):
            methods.extend(_method_signatures(name, attr, cls))

    return Members(
        constructors=_constructors(cls),
        properties=tuple(properties),
        methods=tuple(methods),
        fields=_fields(cls),
        events=tuple(events),
        interfaces=frozenset(b for b in cls.__mro__[1:] if _is_interface(b)),
    )
