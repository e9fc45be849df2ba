"""
Defines the host value model consumed by the argument pipeline.

Call values arrive from the script engine as plain Python objects plus a
handful of host-specific types. This module classifies them into a closed set
of kinds and implements the engine's standard conversions (to-number,
to-boolean, to-string) as explicit functions.
"""

import math
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional

from hostargs.hostargs_errors import HostError


# =================================================================
# Host-specific value types
# =================================================================

class _Undefined:
    """The host's `undefined`. Also what an exhausted iterator yields."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "undefined"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class NativeDescriptor:
    """An opaque type token attached to objects that wrap a native pointer.

    Descriptors compare by identity: two descriptors with the same name are
    still different types.
    """
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

    def __repr__(self) -> str:
        return f"<NativeDescriptor {self.name!r} at {id(self):#x}>"


class HostFunction:
    """A callable script value backed by a Python function."""
    def __init__(self, name: str, fn: Callable[..., Any]):
        self.name = name
        self.fn = fn

    def __call__(self, *args, **kwargs):
        return self.fn(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<HostFunction {self.name}>"


class HostObject:
    """A script object.

    `native` and `descriptor` model a native pointer attached by the embedding
    when the object was created. `value_of` and `to_string` are the object's
    conversion hooks; either may raise HostError, which is how a conversion
    "throws" in the host.
    """
    def __init__(self,
                 properties: Optional[Dict[str, Any]] = None,
                 *,
                 native: Any = None,
                 descriptor: Optional[NativeDescriptor] = None,
                 value_of: Optional[Callable[[], Any]] = None,
                 to_string: Optional[Callable[[], Any]] = None):
        self.properties: Dict[str, Any] = dict(properties or {})
        self.native = native
        self.descriptor = descriptor
        self.value_of = value_of
        self.to_string = to_string

    @property
    def has_native(self) -> bool:
        return self.descriptor is not None

    def __getitem__(self, key):
        return self.properties.get(key, UNDEFINED)

    def __setitem__(self, key, value):
        self.properties[key] = value

    def __repr__(self) -> str:
        if self.descriptor is not None:
            return f"<HostObject native={self.descriptor.name!r}>"
        keys = ', '.join(self.properties.keys())
        return f"<HostObject properties=[{keys}]>"


# =================================================================
# Classification
# =================================================================

class ValueKind(Enum):
    UNDEFINED = "undefined"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    FUNCTION = "function"
    OBJECT = "object"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    # bool is a subclass of int, so check it before numbers
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, HostObject):
        return ValueKind.OBJECT
    if isinstance(value, HostFunction) or callable(value):
        return ValueKind.FUNCTION
    return ValueKind.OTHER


def type_name(value: Any) -> str:
    """The name a script author would use for the value's type."""
    if value is None:
        return "null"
    return kind_of(value).value


def is_callable(value: Any) -> bool:
    return kind_of(value) is ValueKind.FUNCTION


# =================================================================
# Standard conversions
# =================================================================

_DECIMAL = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_RADIX = {
    '0x': (16, re.compile(r'[0-9a-fA-F]+')),
    '0o': (8, re.compile(r'[0-7]+')),
    '0b': (2, re.compile(r'[01]+')),
}


def to_primitive(value: Any, hint: str = "number") -> Any:
    """Reduce an object to a primitive using its conversion hooks.

    With hint 'number' value_of is tried first, with 'string' to_string is.
    Raises HostError when a hook raises or every hook yields an object.
    """
    if not isinstance(value, HostObject):
        return value
    hooks = [value.value_of, value.to_string]
    if hint == "string":
        hooks.reverse()
    for hook in hooks:
        if hook is None:
            continue
        result = hook()
        if not isinstance(result, HostObject):
            return result
    if value.value_of is None and value.to_string is None:
        return "[object Object]"
    raise HostError("Cannot convert object to primitive value", kind="type")


def as_float(value: Any) -> float:
    """Read a host number as a float. Ints beyond float range become +/-Infinity."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_boolean(value: Any) -> bool:
    match kind_of(value):
        case ValueKind.UNDEFINED:
            return False
        case ValueKind.BOOLEAN:
            return value
        case ValueKind.NUMBER:
            n = as_float(value)
            return not (n == 0 or math.isnan(n))
        case ValueKind.STRING:
            return len(value) > 0
        case ValueKind.FUNCTION | ValueKind.OBJECT:
            return True
        case _:
            return value is not None


def _string_to_number(text: str) -> float:
    s = text.strip()
    if not s:
        return 0.0
    if s in ("Infinity", "+Infinity"):
        return math.inf
    if s == "-Infinity":
        return -math.inf
    prefix = s[:2].lower()
    if prefix in _RADIX:
        radix, digits = _RADIX[prefix]
        if not digits.fullmatch(s[2:]):
            return math.nan
        return as_float(int(s[2:], radix))
    if _DECIMAL.fullmatch(s):
        return float(s)
    return math.nan


def to_number(value: Any) -> float:
    match kind_of(value):
        case ValueKind.UNDEFINED:
            return math.nan
        case ValueKind.BOOLEAN:
            return 1.0 if value else 0.0
        case ValueKind.NUMBER:
            return as_float(value)
        case ValueKind.STRING:
            return _string_to_number(value)
        case ValueKind.OBJECT:
            return to_number(to_primitive(value, "number"))
        case _:
            return 0.0 if value is None else math.nan


def number_to_string(n: float) -> str:
    """Shortest round-trip digits laid out the way the host prints numbers."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n == 0:
        return "0"
    sign = "-" if n < 0 else ""
    mantissa, _, exp = repr(abs(n)).partition("e")
    int_part, _, frac = mantissa.partition(".")
    combined = int_part + frac
    digits = combined.lstrip("0")
    # Decimal point position relative to the first significant digit.
    point = len(int_part) - (len(combined) - len(digits)) + int(exp or 0)
    digits = digits.rstrip("0")
    k = len(digits)
    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        e = point - 1
        exponent = f"e{'+' if e >= 0 else '-'}{abs(e)}"
        text = (digits if k == 1 else digits[0] + "." + digits[1:]) + exponent
    return sign + text


def to_string(value: Any) -> str:
    match kind_of(value):
        case ValueKind.UNDEFINED:
            return "undefined"
        case ValueKind.BOOLEAN:
            return "true" if value else "false"
        case ValueKind.NUMBER:
            return number_to_string(as_float(value))
        case ValueKind.STRING:
            return value
        case ValueKind.FUNCTION:
            name = getattr(value, "name", None) or getattr(value, "__name__", "")
            return f"function {name}() {{ [native code] }}"
        case ValueKind.OBJECT:
            return to_string(to_primitive(value, "string"))
        case _:
            return "null" if value is None else str(value)


__all__ = [
    "UNDEFINED",
    "NativeDescriptor",
    "HostFunction",
    "HostObject",
    "ValueKind",
    "kind_of",
    "type_name",
    "is_callable",
    "to_primitive",
    "to_boolean",
    "as_float",
    "to_number",
    "number_to_string",
    "to_string",
]
