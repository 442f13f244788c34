"""JSON-friendly summaries of type descriptors."""

import inspect
import typing
from dataclasses import dataclass
from typing import Any

from dataclasses_json import DataClassJsonMixin

from reflectkit.reflection import TypeDescriptor
from reflectkit.reflection.names import qualified_name
from reflectkit.reflection.types import EMPTY, ParameterInfo


@dataclass
class ParameterSummary(DataClassJsonMixin):
    """Represents one method or constructor parameter."""

    name: str
    type: str
    kind: str
    default: str | None


@dataclass
class ConstructorSummary(DataClassJsonMixin):
    """Represents one constructor signature."""

    parameters: list[ParameterSummary]


@dataclass
class MethodSummary(DataClassJsonMixin):
    """Represents one method overload."""

    name: str
    parameters: list[ParameterSummary]
    returns: str
    generic: bool


@dataclass
class PropertySummary(DataClassJsonMixin):
    """Represents a property and its classification flags."""

    name: str
    type: str
    underlying_type: str
    gettable: bool
    settable: bool
    nullable: bool
    value_type: bool
    basic_type: bool


@dataclass
class FieldSummary(DataClassJsonMixin):
    """Represents a public field."""

    name: str
    type: str
    default: str | None


@dataclass
class EventSummary(DataClassJsonMixin):
    """Represents an event."""

    name: str
    handler_type: str


@dataclass
class TypeSummary(DataClassJsonMixin):
    """Represents the public surface of one type."""

    name: str
    module: str
    interfaces: list[str]
    constructors: list[ConstructorSummary]
    properties: list[PropertySummary]
    methods: list[MethodSummary]
    fields: list[FieldSummary]
    events: list[EventSummary]


def format_type(t: Any) -> str:
    """Render a declared type the way it would be written in an annotation."""
    if t is Any:
        return "Any"
    if t is None or t is type(None):
        return "None"
    if isinstance(t, str):
        return t
    if isinstance(t, type) and typing.get_origin(t) is None:
        return qualified_name(t)
    return repr(t).replace("typing.", "")


def format_default(value: Any) -> str | None:
    return None if value is EMPTY else repr(value)


def _parameters(params: tuple[ParameterInfo, ...]) -> list[ParameterSummary]:
    return [
        ParameterSummary(p.name, format_type(p.declared_type), str(p.kind), format_default(p.default))
        for p in params
    ]


def _declared_on(cls: type, name: str) -> bool:
    return name in vars(cls) or name in inspect.get_annotations(cls)


def summarize(descriptor: TypeDescriptor, show_inherited: bool = True) -> TypeSummary:
    """Build a summary of ``descriptor``.

    Args:
        descriptor: The type descriptor to summarize.
        show_inherited: If False, only members declared on the type itself
            are listed.
    """
    cls = descriptor.type

    def visible(name: str) -> bool:
        return show_inherited or _declared_on(cls, name)

    return TypeSummary(
        name=cls.__qualname__,
        module=cls.__module__,
        interfaces=sorted(qualified_name(i) for i in descriptor.interfaces),
        constructors=[ConstructorSummary(_parameters(c.parameters)) for c in descriptor.constructors],
        properties=[
            PropertySummary(
                name=p.name,
                type=format_type(p.declared_type),
                underlying_type=format_type(p.underlying_type),
                gettable=p.is_gettable,
                settable=p.is_settable,
                nullable=p.is_nullable,
                value_type=p.is_value_type,
                basic_type=p.is_basic_type,
            )
            for p in descriptor.properties.values()
            if visible(p.name)
        ],
        methods=[
            MethodSummary(m.name, _parameters(m.parameters), format_type(m.return_type), m.is_generic)
            for m in descriptor.methods
            if visible(m.name)
        ],
        fields=[
            FieldSummary(f.name, format_type(f.declared_type), format_default(f.default))
            for f in descriptor.fields
            if visible(f.name)
        ],
        events=[
            EventSummary(e.name, format_type(e.handler_type))
            for e in descriptor.events
            if visible(e.name)
        ],
    )
