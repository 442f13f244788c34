"""Immutable description of a class's public surface."""

import operator
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from . import invoker, resolver
from .accessor import PropertyAccessor
from .errors import FieldNotFound, InvalidOperation, PropertyNotFound
from .extractor import extract_members
from .names import matches_qualname
from .types import ConstructorSignature, EventInfo, FieldInfo, MethodSignature, cast_to


@dataclass(frozen=True, slots=True, eq=False)
class TypeDescriptor:
    """Public constructors, properties, methods, fields, events and interfaces of a type.

    Use :func:`reflectkit.reflection.get_type_info` to obtain a cached
    instance rather than calling :meth:`build` directly.
    """

    type: type
    constructors: tuple[ConstructorSignature, ...]
    properties: Mapping[str, PropertyAccessor]
    methods: tuple[MethodSignature, ...]
    fields: tuple[FieldInfo, ...]
    events: tuple[EventInfo, ...]
    interfaces: frozenset[type]
    _methods_by_name: Mapping[str, tuple[MethodSignature, ...]] = field(
        compare=False, repr=False
    )
    _field_getters: Mapping[str, Callable[[Any], Any]] = field(compare=False, repr=False)

    @classmethod
    def build(cls, t: type) -> "TypeDescriptor":
        """Extract members of ``t`` and compile its property accessors."""
        members = extract_members(t)

        properties = {name: PropertyAccessor.build(name, prop, t) for name, prop in members.properties}

        by_name: dict[str, list[MethodSignature]] = {}
        for method in members.methods:
            by_name.setdefault(method.name, []).append(method)

        return cls(
            type=t,
            constructors=members.constructors,
            properties=MappingProxyType(properties),
            methods=members.methods,
            fields=members.fields,
            events=members.events,
            interfaces=members.interfaces,
            _methods_by_name=MappingProxyType({k: tuple(v) for k, v in by_name.items()}),
            _field_getters=MappingProxyType(
                {f.name: operator.attrgetter(f.name) for f in members.fields}
            ),
        )

    @property
    def name(self) -> str:
        return self.type.__qualname__

    def has_interface(self, interface: type | str) -> bool:
        """Check for an implemented interface, by class or qualified name."""
        if isinstance(interface, str):
            return any(matches_qualname(i, interface) for i in self.interfaces)
        return interface in self.interfaces

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def has_method(self, name: str) -> bool:
        return name in self._methods_by_name

    def has_event(self, name: str) -> bool:
        return any(e.name == name for e in self.events)

    def has_field(self, name: str) -> bool:
        return name in self._field_getters

    def get_property(self, name: str) -> PropertyAccessor | None:
        return self.properties.get(name)

    def get_property_value(self, instance: Any, name: str, expected_type: Any = None) -> Any:
        """Read a property by name.

        Raises:
            PropertyNotFound: if there is no such public property.
        """
        accessor = self.properties.get(name)
        if accessor is None:
            raise PropertyNotFound(name)
        return accessor.get(instance, expected_type)

    def set_property_value(self, instance: Any, name: str, value: Any) -> None:
        """Write a property by name.

        Raises:
            PropertyNotFound: if there is no such public property.
            InvalidOperation: if the property is read-only.
        """
        accessor = self.properties.get(name)
        if accessor is None:
            raise PropertyNotFound(name)
        accessor.set(instance, value)

    def get_field_value(self, instance: Any, name: str, expected_type: Any = None) -> Any:
        """Read a public field by name.

        Raises:
            FieldNotFound: if there is no such public field.
            InvalidOperation: if the field has not been assigned on ``instance``.
            TypeMismatch: if the value is not an ``expected_type``.
        """
        getter = self._field_getters.get(name)
        if getter is None:
            raise FieldNotFound(name)
        try:
            value = getter(instance)
        except AttributeError as ex:
            raise InvalidOperation(f"Field [{name}] has no value") from ex
        return cast_to(value, expected_type)

    def methods_named(self, name: str) -> tuple[MethodSignature, ...]:
        return self._methods_by_name.get(name, ())

    def invoke(self, instance: Any, method_name: str, *args: Any, result_type: Any = None) -> Any:
        """Invoke a method by name and return its result.

        Args:
            instance: The target object.
            method_name: Name of the public method.
            *args: Positional arguments; omitted trailing parameters take
                their declared defaults.
            result_type: If given, the result must be an instance of it.

        Raises:
            MethodNotFound: if no overload accepts ``args``.
            InvokeFailure: if the call fails; the cause is attached.
            TypeMismatch: if the result is not a ``result_type``.
        """
        signature = resolver.resolve(self, method_name, args)
        return invoker.invoke(signature, self.type, instance, args, result_type)

    def invoke_void(self, instance: Any, method_name: str, *args: Any) -> None:
        """Invoke a method by name, discarding any result."""
        signature = resolver.resolve(self, method_name, args)
        invoker.invoke_void(signature, self.type, instance, args)
