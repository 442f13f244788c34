"""Tests for member extraction"""

from decimal import Decimal
from typing import Any, overload

from reflectkit.reflection.extractor import extract_members, is_public
from reflectkit.reflection.types import EMPTY, ParameterKind

from .samples import (
    Box,
    Derived,
    Formatter,
    Greeter,
    Record,
    Resettable,
    SimpleClass,
    Slotted,
)
from .samples_deferred import Deferred


class Stubbed:
    @overload
    def fill(self, a: int) -> str: ...

    @overload
    def fill(self, a: int, b: str = ...) -> str: ...

    def fill(self, a, b="filled"):
        return f"{a}{b}"

    @staticmethod
    def helper() -> None:
        pass

    @classmethod
    def make(cls) -> "Stubbed":
        return cls()


def describe_is_public():
    def rejects_leading_underscore(expect):
        expect(is_public("name")) == True
        expect(is_public("_name")) == False
        expect(is_public("__init__")) == False


def describe_methods():
    def keeps_declaration_order(expect):
        members = extract_members(SimpleClass)
        expect([m.name for m in members.methods]) == [
            "reset",
            "method_void",
            "method_void_with_args",
            "method_with_result_string",
            "method_with_result_string",
            "method_with_result_string_full_optional",
        ]

    def lists_derived_before_base(expect):
        members = extract_members(Derived)
        expect([m.name for m in members.methods]) == ["shared", "extra", "describe"]

    def hides_overridden_methods(expect):
        members = extract_members(Derived)
        shared = [m for m in members.methods if m.name == "shared"]
        expect(len(shared)) == 1
        expect(shared[0].function.__qualname__) == "Derived.shared"

    def describes_parameters(expect):
        members = extract_members(SimpleClass)
        method = next(m for m in members.methods if m.name == "method_void_with_args")
        expect(len(method.parameters)) == 1
        param = method.parameters[0]
        expect(param.name) == "short_value"
        expect(param.declared_type) == int
        expect(param.kind) == ParameterKind.POSITIONAL
        expect(param.default is EMPTY) == True
        expect(method.return_type) == type(None)

    def models_overloads_separately(expect):
        members = extract_members(SimpleClass)
        overloads = [m for m in members.methods if m.name == "method_with_result_string"]
        expect([len(m.parameters) for m in overloads]) == [3, 4]
        expect(overloads[0].function is overloads[1].function) == True
        expect(overloads[1].parameters[3].default) == 0.0

    def takes_stub_ellipsis_defaults_from_implementation(expect):
        members = extract_members(Stubbed)
        second = [m for m in members.methods if m.name == "fill"][1]
        expect(second.parameters[1].default) == "filled"

    def skips_static_and_class_methods(expect):
        members = extract_members(Stubbed)
        expect({m.name for m in members.methods}) == {"fill"}

    def marks_keyword_only_parameters(expect):
        members = extract_members(Formatter)
        scaled = next(m for m in members.methods if m.name == "scaled")
        expect([p.kind for p in scaled.parameters]) == [
            ParameterKind.POSITIONAL,
            ParameterKind.KEYWORD,
        ]
        expect(scaled.positional[0].name) == "a"

    def treats_unannotated_parameters_as_any(expect):
        members = extract_members(Formatter)
        untyped = next(m for m in members.methods if m.name == "untyped")
        expect([p.declared_type for p in untyped.parameters]) == [Any, Any]
        expect(untyped.return_type) == Any

    def marks_methods_with_own_type_variables_generic(expect):
        members = extract_members(Formatter)
        generic = {m.name for m in members.methods if m.is_generic}
        expect(generic) == {"first"}

    def replaces_class_type_variables_with_any(expect):
        members = extract_members(Box)
        put = next(m for m in members.methods if m.name == "put")
        expect(put.is_generic) == False
        expect(put.parameters[0].declared_type) == Any

    def ignores_builtin_slot_methods(expect):
        expect(extract_members(dict).methods) == ()


def describe_constructors():
    def lists_each_overload(expect):
        members = extract_members(SimpleClass)
        expect([len(c.parameters) for c in members.constructors]) == [0, 1]
        expect(members.constructors[1].parameters[0].declared_type) == float

    def reports_implicit_constructor(expect):
        members = extract_members(Derived)
        expect(len(members.constructors)) == 1
        expect(members.constructors[0].parameters) == ()

    def reports_dataclass_constructor(expect):
        members = extract_members(Record)
        params = members.constructors[0].parameters
        expect([p.name for p in params]) == ["name", "size", "tags", "_hidden"]
        expect(params[1].default) == 0

    def reports_no_constructor_for_builtin_initializers(expect):
        expect(extract_members(dict).constructors) == ()


def describe_fields():
    def lists_public_annotations(expect):
        members = extract_members(SimpleClass)
        expect([(f.name, f.declared_type) for f in members.fields]) == [
            ("public_field_string", str)
        ]

    def skips_class_variables_and_private_names(expect):
        members = extract_members(Record)
        expect([f.name for f in members.fields]) == ["name", "size", "tags"]

    def records_class_level_defaults(expect):
        fields = {f.name: f for f in extract_members(Record).fields}
        expect(fields["name"].default is EMPTY) == True
        expect(fields["size"].default) == 0
        expect(fields["tags"].default is EMPTY) == True

    def lists_public_slots(expect):
        fields = extract_members(Slotted).fields
        expect([(f.name, f.declared_type) for f in fields]) == [("x", Any)]
        expect(fields[0].default is EMPTY) == True

    def skips_properties_and_events(expect):
        expect(extract_members(Formatter).fields) == ()


def describe_properties_and_events():
    def lists_properties_in_order(expect):
        members = extract_members(SimpleClass)
        expect([name for name, _ in members.properties]) == [
            "public_property_int",
            "public_property_float_read_only",
        ]

    def lists_events(expect):
        events = extract_members(Formatter).events
        expect([e.name for e in events]) == ["changed"]


def describe_interfaces():
    def finds_abstract_bases(expect):
        expect(extract_members(SimpleClass).interfaces) == frozenset([Resettable])

    def finds_protocols(expect):
        expect(extract_members(Formatter).interfaces) == frozenset([Greeter])

    def ignores_concrete_bases(expect):
        expect(extract_members(Derived).interfaces) == frozenset()
        expect(extract_members(Box).interfaces) == frozenset()

    def does_not_include_self(expect):
        expect(Resettable in extract_members(Resettable).interfaces) == False


def describe_decimal_annotations():
    def keeps_exact_declared_type(expect):
        members = extract_members(Formatter)
        fmt = next(m for m in members.methods if m.name == "format")
        expect([p.declared_type for p in fmt.parameters]) == [int, Decimal, str, float]


def describe_string_annotations():
    def resolves_annotations_one_by_one(expect):
        members = extract_members(Deferred)
        add = next(m for m in members.methods if m.name == "add")
        expect([p.declared_type for p in add.parameters]) == [int, "OrderedDict | None"]
        expect(add.return_type) == int

    def resolves_fully_evaluable_signatures(expect):
        members = extract_members(Deferred)
        join = next(m for m in members.methods if m.name == "join")
        expect([p.declared_type for p in join.parameters]) == [list[str], str]
        expect(join.return_type) == str

    def resolves_field_annotations_one_by_one(expect):
        fields = extract_members(Deferred).fields
        expect([(f.name, f.declared_type) for f in fields]) == [
            ("label", str),
            ("pending", "OrderedDict"),
        ]
