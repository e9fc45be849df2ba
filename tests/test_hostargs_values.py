import math

import pytest
from hostargs.hostargs_errors import HostError
from hostargs.hostargs_values import (
    UNDEFINED, NativeDescriptor, HostFunction, HostObject, ValueKind,
    kind_of, type_name, is_callable, to_primitive, to_boolean, to_number, to_string,
    number_to_string
)


def _boom():
    raise HostError("boom")


# --- Classification ---

@pytest.mark.parametrize(
    "value,kind",
    [
        (UNDEFINED, ValueKind.UNDEFINED),
        (True, ValueKind.BOOLEAN),
        (False, ValueKind.BOOLEAN),
        (0, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ("", ValueKind.STRING),
        (HostFunction("f", lambda: None), ValueKind.FUNCTION),
        (len, ValueKind.FUNCTION),
        (HostObject(), ValueKind.OBJECT),
        (None, ValueKind.OTHER),
        ([1, 2], ValueKind.OTHER),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_bool_is_not_a_number():
    assert kind_of(True) is not ValueKind.NUMBER


def test_type_name_names_null():
    assert type_name(None) == "null"
    assert type_name("x") == "string"
    assert type_name(UNDEFINED) == "undefined"


def test_is_callable():
    assert is_callable(HostFunction("f", lambda: 1))
    assert not is_callable(HostObject())


def test_undefined_is_a_falsy_singleton():
    assert not UNDEFINED
    assert type(UNDEFINED)() is UNDEFINED
    assert repr(UNDEFINED) == "undefined"


def test_descriptors_compare_by_identity():
    a = NativeDescriptor("Point")
    b = NativeDescriptor("Point")
    assert a == a
    assert a != b
    assert len({a, b}) == 2


def test_host_object_native_pointer():
    desc = NativeDescriptor("Point")
    obj = HostObject(native=object(), descriptor=desc)
    assert obj.has_native
    assert not HostObject().has_native
    assert HostObject({"x": 1})["y"] is UNDEFINED


# --- to-boolean ---

@pytest.mark.parametrize(
    "value,expected",
    [
        (UNDEFINED, False),
        (None, False),
        (True, True),
        (0, False),
        (-0.0, False),
        (math.nan, False),
        (2.5, True),
        ("", False),
        ("0", True),
        ("false", True),
        (HostObject(), True),
        (HostFunction("f", lambda: None), True),
    ],
)
def test_to_boolean(value, expected):
    assert to_boolean(value) is expected


# --- to-number ---

@pytest.mark.parametrize(
    "text,expected",
    [
        ("42", 42.0),
        ("  12  ", 12.0),
        ("", 0.0),
        ("   ", 0.0),
        ("-1.5e3", -1500.0),
        (".5", 0.5),
        ("0x1A", 26.0),
        ("0b101", 5.0),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_string_to_number(text, expected):
    assert to_number(text) == expected


@pytest.mark.parametrize(
    "text", ["abc", "1_000", "inf", "nan", "12px", "0xZZ", "0x-1", "0x1_0", "0x 1", "0x", "0b2", "0o8"]
)
def test_string_to_number_nan(text):
    assert math.isnan(to_number(text))


def test_to_number_primitives():
    assert math.isnan(to_number(UNDEFINED))
    assert to_number(None) == 0.0
    assert to_number(True) == 1.0
    assert to_number(False) == 0.0
    assert to_number(7) == 7.0
    assert isinstance(to_number(7), float)


def test_huge_integers_saturate_to_infinity():
    assert to_number(10**400) == math.inf
    assert to_number(-10**400) == -math.inf
    assert to_number("0x" + "f" * 300) == math.inf
    assert to_boolean(10**400) is True
    assert to_string(10**400) == "Infinity"
    assert to_string(-10**400) == "-Infinity"


def test_to_number_uses_value_of_then_to_string():
    assert to_number(HostObject(value_of=lambda: 7)) == 7.0
    assert to_number(HostObject(to_string=lambda: "3")) == 3.0
    assert math.isnan(to_number(HostObject()))


def test_to_number_propagates_hook_errors():
    with pytest.raises(HostError, match="boom"):
        to_number(HostObject(value_of=_boom))


def test_object_hooks_returning_objects_raise():
    obj = HostObject(value_of=lambda: HostObject(), to_string=lambda: HostObject())
    with pytest.raises(HostError):
        to_primitive(obj)


# --- to-string ---

@pytest.mark.parametrize(
    "value,expected",
    [
        (UNDEFINED, "undefined"),
        (None, "null"),
        (True, "true"),
        (1.0, "1"),
        (-0.0, "0"),
        (1234.567, "1234.567"),
        (math.nan, "NaN"),
        (-math.inf, "-Infinity"),
        ("hi", "hi"),
        (HostObject(), "[object Object]"),
    ],
)
def test_to_string(value, expected):
    assert to_string(value) == expected


@pytest.mark.parametrize(
    "n,expected",
    [
        (123.0, "123"),
        (0.001, "0.001"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (-2.5e-10, "-2.5e-10"),
        (1.2345678901234568e20, "123456789012345680000"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e300, "1.5e+300"),
        (0.1 + 0.2, "0.30000000000000004"),
    ],
)
def test_number_to_string_layout(n, expected):
    assert number_to_string(n) == expected


def test_to_string_prefers_to_string_hook():
    obj = HostObject(value_of=lambda: 1, to_string=lambda: "point")
    assert to_string(obj) == "point"
    assert to_number(obj) == 1.0


def test_to_string_function():
    assert to_string(HostFunction("draw", lambda: None)) == "function draw() { [native code] }"


def test_to_string_propagates_hook_errors():
    with pytest.raises(HostError, match="boom"):
        to_string(HostObject(to_string=_boom))
