import pytest
from hostargs.hostargs_printer import Printer
from hostargs.hostargs_values import UNDEFINED, NativeDescriptor, HostFunction, HostObject


@pytest.fixture
def printer():
    return Printer()


@pytest.mark.parametrize(
    "value,expected",
    [
        (UNDEFINED, "undefined"),
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (2.5, "2.5"),
        (float("nan"), "NaN"),
        (10**400, "Infinity"),
        (1e-7, "1e-7"),
        ("hi", "'hi'"),
        ("it's", "'it\\'s'"),
        ([1, "a"], "[1, 'a']"),
        ({"k": None}, "{k: null}"),
        (HostObject(), "[object Object]"),
        (HostObject(descriptor=NativeDescriptor("Point")), "[object Native<Point>]"),
        (HostFunction("draw", lambda: None), "function draw"),
    ],
)
def test_pformat(printer, value, expected):
    assert printer.pformat(value) == expected


def test_pformat_python_callable(printer):
    def on_click():
        pass
    assert printer.pformat(on_click) == "function on_click"


def test_long_strings_are_shortened():
    out = Printer(max_length=10).pformat("abcdefghijklmnop")
    assert out == "'abcdefg...'"
