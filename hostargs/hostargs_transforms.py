"""
The built-in transforms and the factories that pair them with a config.

Every built-in pops exactly one value. UNDEFINED (including a read past the
end of the call values) succeeds without a write for optional steps and fails
with MissingArgument for required ones. Anything else is checked against the
expected kind, or converted with the host's standard rules when the step
coerces.
"""

from typing import Any, Callable, Optional

from hostargs.hostargs_errors import (
    HostError, MissingArgument, TypeMismatch, CoercionFailure,
    NativeTypeMismatch, CapacityExceeded, argument_error
)
from hostargs.hostargs_iterator import ValueIterator
from hostargs.hostargs_printer import Printer
from hostargs.hostargs_steps import (
    OK, Commit, Reject, Outcome, Slot, Step, Transform,
    NumberConfig, BooleanConfig, StringConfig, FunctionConfig,
    NativeConfig, IgnoreConfig, CustomConfig
)
from hostargs.hostargs_values import (
    UNDEFINED, HostObject, NativeDescriptor, ValueKind,
    as_float, kind_of, type_name, to_number, to_boolean, to_string
)

_printer = Printer()


def describe(value: Any) -> str:
    """e.g. "string 'notabool'" for use in error messages."""
    if value is None or value is UNDEFINED:
        return _printer.pformat(value)
    return f"{type_name(value)} {_printer.pformat(value)}"


def _missing(position: int, expected: str) -> Reject:
    return Reject(argument_error(MissingArgument, position, expected=expected))


def _mismatch(position: int, expected: str, value: Any) -> Reject:
    return Reject(argument_error(TypeMismatch, position, expected=expected, actual=describe(value)))


def _convert(position: int, expected: str, value: Any, conversion: Callable[[Any], Any]) -> Outcome:
    try:
        return Commit(conversion(value))
    except HostError as e:
        return Reject(argument_error(CoercionFailure, position, expected=expected,
                                     actual=describe(value), reason=e))


# =================================================================
# Built-in transforms
# =================================================================

def transform_number(it: ValueIterator, step: Step) -> Outcome:
    cfg: NumberConfig = step.config
    position = it.index
    value = it.pop()
    if value is UNDEFINED:
        return OK if cfg.optional else _missing(position, "number")
    if cfg.coerce:
        return _convert(position, "number", value, to_number)
    if kind_of(value) is not ValueKind.NUMBER:
        return _mismatch(position, "number", value)
    return Commit(as_float(value))


def transform_boolean(it: ValueIterator, step: Step) -> Outcome:
    cfg: BooleanConfig = step.config
    position = it.index
    value = it.pop()
    if value is UNDEFINED:
        return OK if cfg.optional else _missing(position, "boolean")
    if cfg.coerce:
        return _convert(position, "boolean", value, to_boolean)
    if kind_of(value) is not ValueKind.BOOLEAN:
        return _mismatch(position, "boolean", value)
    return Commit(value)


def transform_string(it: ValueIterator, step: Step) -> Outcome:
    cfg: StringConfig = step.config
    position = it.index
    value = it.pop()
    if value is UNDEFINED:
        return OK if cfg.optional else _missing(position, "string")
    if cfg.coerce:
        outcome = _convert(position, "string", value, to_string)
        if isinstance(outcome, Reject):
            return outcome
        text = outcome.value
    elif kind_of(value) is not ValueKind.STRING:
        return _mismatch(position, "string", value)
    else:
        text = value

    encoded = text.encode("utf-8")
    if len(encoded) > cfg.capacity:
        if not cfg.truncate:
            return Reject(argument_error(CapacityExceeded, position,
                                         size=len(encoded), capacity=cfg.capacity))
        # Drops a trailing partial character, never splits one.
        text = encoded[:cfg.capacity].decode("utf-8", errors="ignore")
    return Commit(str(text))


def transform_function(it: ValueIterator, step: Step) -> Outcome:
    cfg: FunctionConfig = step.config
    position = it.index
    value = it.pop()
    if value is UNDEFINED:
        return OK if cfg.optional else _missing(position, "function")
    if kind_of(value) is not ValueKind.FUNCTION:
        return _mismatch(position, "function", value)
    return Commit(value)


def transform_native(it: ValueIterator, step: Step) -> Outcome:
    cfg: NativeConfig = step.config
    position = it.index
    value = it.pop()
    if value is UNDEFINED:
        return OK if cfg.optional else _missing(position, cfg.descriptor.name)
    if not isinstance(value, HostObject) or value.descriptor is not cfg.descriptor:
        return Reject(argument_error(NativeTypeMismatch, position,
                                     expected=cfg.descriptor.name, actual=describe(value)))
    return Commit(value.native)


def transform_ignore(it: ValueIterator, step: Step) -> Outcome:
    it.pop()
    return OK


# =================================================================
# Step factories
# =================================================================

def number(dest: Slot, *, coerce: bool = False, optional: bool = False) -> Step:
    return Step(transform_number, dest, NumberConfig(coerce=coerce, optional=optional))


def boolean(dest: Slot, *, coerce: bool = False, optional: bool = False) -> Step:
    return Step(transform_boolean, dest, BooleanConfig(coerce=coerce, optional=optional))


def string(dest: Slot, capacity: int, *, coerce: bool = False, optional: bool = False,
           truncate: bool = False) -> Step:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValueError(f"string capacity must be a positive integer, not {capacity!r}")
    config = StringConfig(capacity=capacity, coerce=coerce, optional=optional, truncate=truncate)
    return Step(transform_string, dest, config)


def function(dest: Slot, *, optional: bool = False) -> Step:
    return Step(transform_function, dest, FunctionConfig(optional=optional))


def native(dest: Slot, descriptor: NativeDescriptor, *, optional: bool = False) -> Step:
    if not isinstance(descriptor, NativeDescriptor):
        raise TypeError(f"native expects a NativeDescriptor, not {type(descriptor).__name__}")
    return Step(transform_native, dest, NativeConfig(descriptor=descriptor, optional=optional))


def ignore() -> Step:
    return Step(transform_ignore, None, IgnoreConfig())


def custom(transform: Transform, dest: Optional[Slot] = None, data: Any = None) -> Step:
    """A user transform. It may pop any number of values and reads `data` from step.config."""
    if not callable(transform):
        raise TypeError("custom expects a callable transform")
    return Step(transform, dest, CustomConfig(data=data))


__all__ = [
    "describe",
    "transform_number",
    "transform_boolean",
    "transform_string",
    "transform_function",
    "transform_native",
    "transform_ignore",
    "number",
    "boolean",
    "string",
    "function",
    "native",
    "ignore",
    "custom",
]
