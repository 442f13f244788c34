"""Tests for property accessors"""

# pylint: disable=redefined-outer-name,unused-variable,expression-not-assigned,singleton-comparison

from datetime import datetime
from typing import Any, Optional

import pytest

from reflectkit.reflection import InvalidOperation, PropertyAccessor, TypeMismatch, get_type_info
from reflectkit.reflection.accessor import is_value_type, unwrap_optional

from .samples import Classified, Color, Guarded, Pair, Point, Reentrant, SimpleClass
from .samples_deferred import Deferred


@pytest.fixture
def classified():
    return get_type_info(Classified)


def describe_unwrap_optional():
    def splits_union_with_none(expect):
        expect(unwrap_optional(int | None)) == (True, int)
        expect(unwrap_optional(Optional[Color])) == (True, Color)

    def leaves_optional_reference_types(expect):
        expect(unwrap_optional(str | None)) == (False, str | None)
        expect(unwrap_optional(Optional[list[int]])) == (False, Optional[list[int]])

    def leaves_other_types(expect):
        expect(unwrap_optional(int)) == (False, int)
        expect(unwrap_optional(int | str)) == (False, int | str)
        expect(unwrap_optional(Any)) == (False, Any)


def describe_is_value_type():
    def accepts_scalars_and_records(expect):
        for t in (int, bool, float, Color, Point, Pair):
            expect(is_value_type(t)) == True

    def rejects_reference_types(expect):
        for t in (str, list, list[int], Classified, Any):
            expect(is_value_type(t)) == False


def describe_classification():
    def classifies_value_types(expect, classified):
        for name in ("count", "color", "point", "pair", "price"):
            accessor = classified.get_property(name)
            expect(accessor.is_value_type) == True
            expect(accessor.is_basic_reference_type) == False
            expect(accessor.is_basic_type) == True

    def classifies_basic_reference_types(expect, classified):
        for name in ("name", "stamp", "span"):
            accessor = classified.get_property(name)
            expect(accessor.is_value_type) == False
            expect(accessor.is_basic_reference_type) == True
            expect(accessor.is_basic_type) == True

    def classifies_nullable_properties_by_underlying_type(expect, classified):
        maybe_count = classified.get_property("maybe_count")
        expect(maybe_count.is_nullable) == True
        expect(maybe_count.declared_type) == int | None
        expect(maybe_count.underlying_type) == int
        expect(maybe_count.is_value_type) == True

    def treats_optional_reference_types_as_not_nullable(expect, classified):
        maybe_name = classified.get_property("maybe_name")
        expect(maybe_name.is_nullable) == False
        expect(maybe_name.underlying_type) == str | None
        expect(maybe_name.is_basic_type) == False

    def leaves_other_types_unclassified(expect, classified):
        for name in ("items", "untyped"):
            accessor = classified.get_property(name)
            expect(accessor.is_nullable) == False
            expect(accessor.is_basic_type) == False
        expect(classified.get_property("untyped").declared_type) == Any

    def takes_type_from_setter_when_write_only(expect, classified):
        expect(classified.get_property("written").declared_type) == str


def describe_get():
    def reads_through_getter(expect):
        accessor = get_type_info(SimpleClass).get_property("public_property_int")
        expect(accessor.get(SimpleClass())) == 100
        expect(accessor.get(SimpleClass(), int)) == 100

    def reads_through_custom_property_type(expect, classified):
        expect(classified.get_property("shout").get(Classified())) == "QUIET"

    def rejects_wrong_expected_type(expect):
        accessor = get_type_info(SimpleClass).get_property("public_property_int")
        with pytest.raises(TypeMismatch):
            accessor.get(SimpleClass(), str)

    def accepts_parameterized_expected_type(expect, classified):
        expect(classified.get_property("items").get(Classified(), list[int])) == [1]

    def rejects_write_only(expect, classified):
        accessor = classified.get_property("written")
        expect(accessor.is_gettable) == False
        with pytest.raises(InvalidOperation):
            accessor.get(Classified())

    def leaves_unbindable_getter_absent(expect, classified):
        accessor = classified.get_property("broken")
        expect(accessor.is_gettable) == False
        expect(accessor.is_settable) == False

    def leaves_unbindable_custom_accessors_absent(expect):
        info = get_type_info(Guarded)
        instance = Guarded()

        level = info.get_property("level")
        expect(level.is_gettable) == True
        expect(level.is_settable) == False
        expect(level.get(instance)) == 5
        with pytest.raises(InvalidOperation):
            level.set(instance, 6)

        secret = info.get_property("secret")
        expect(secret.is_gettable) == False
        expect(secret.is_settable) == True
        secret.set(instance, "hidden")
        expect(instance._secret) == "hidden"  # pylint: disable=protected-access

        expect(info.get_property_value(instance, "plain")) == 2.5

    def allows_reflection_from_inside_getter(expect):
        names = get_type_info(Reentrant).get_property_value(Reentrant(), "other_method_names")
        expect(names) == ["shared", "extra", "describe"]


def describe_set():
    def writes_through_setter(expect):
        accessor = get_type_info(SimpleClass).get_property("public_property_int")
        instance = SimpleClass()

        accessor.set(instance, 200)

        expect(accessor.get(instance)) == 200

    def writes_write_only_property(expect, classified):
        instance = Classified()
        classified.get_property("written").set(instance, "hello", str)
        expect(instance._written) == "hello"  # pylint: disable=protected-access

    def rejects_read_only(expect):
        accessor = get_type_info(SimpleClass).get_property("public_property_float_read_only")
        instance = SimpleClass()
        expect(accessor.is_settable) == False

        with pytest.raises(InvalidOperation):
            accessor.set(instance, 2.0)

        expect(accessor.get(instance)) == 1.0

    def rejects_wrong_value_type_without_writing(expect):
        accessor = get_type_info(SimpleClass).get_property("public_property_int")
        instance = SimpleClass()

        with pytest.raises(TypeMismatch):
            accessor.set(instance, "200", int)

        expect(accessor.get(instance)) == 100

    def propagates_setter_errors(expect):
        class Frozen:
            @property
            def when(self) -> datetime:
                return datetime(2000, 1, 1)

            @when.setter
            def when(self, value: datetime) -> None:
                raise ValueError("frozen")

        accessor = PropertyAccessor.build("when", Frozen.__dict__["when"], Frozen)
        with pytest.raises(ValueError):
            accessor.set(Frozen(), datetime(2001, 1, 1))


def describe_string_annotations():
    def resolves_each_annotation_that_can_be_evaluated(expect):
        info = get_type_info(Deferred)

        count = info.get_property("count")
        expect(count.declared_type) == int
        expect(count.is_value_type) == True

        maybe_count = info.get_property("maybe_count")
        expect(maybe_count.is_nullable) == True
        expect(maybe_count.underlying_type) == int

    def keeps_unresolvable_annotation_as_written(expect):
        table = get_type_info(Deferred).get_property("table")
        expect(table.declared_type) == "OrderedDict"
        expect(table.is_nullable) == False
        expect(table.is_basic_type) == False
