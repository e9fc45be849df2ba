from hostargs.hostargs_values import (
    UNDEFINED, NativeDescriptor, HostFunction, HostObject, ValueKind,
    kind_of, type_name, to_boolean, to_number, to_string
)
from hostargs.hostargs_errors import (
    HostError, ArgumentError, MissingArgument, TypeMismatch, CoercionFailure,
    NativeTypeMismatch, CapacityExceeded
)
from hostargs.hostargs_iterator import ValueIterator
from hostargs.hostargs_steps import NOTHING, OK, Commit, Reject, Slot, BoundSlot, Step
from hostargs.hostargs_transforms import number, boolean, string, function, native, ignore, custom
from hostargs.hostargs_runner import TransformResult, run_steps, transform_args, transform_this_and_args
from hostargs.hostargs_config import Settings, configure, get_settings, load_settings, load_steps, reset_settings
from hostargs.hostargs_host import HostBinding, Signature, native_handler, invoke

__all__ = [
    "UNDEFINED", "NativeDescriptor", "HostFunction", "HostObject", "ValueKind",
    "kind_of", "type_name", "to_boolean", "to_number", "to_string",
    "HostError", "ArgumentError", "MissingArgument", "TypeMismatch", "CoercionFailure",
    "NativeTypeMismatch", "CapacityExceeded",
    "ValueIterator",
    "NOTHING", "OK", "Commit", "Reject", "Slot", "BoundSlot", "Step",
    "number", "boolean", "string", "function", "native", "ignore", "custom",
    "TransformResult", "run_steps", "transform_args", "transform_this_and_args",
    "Settings", "configure", "get_settings", "load_settings", "load_steps", "reset_settings",
    "HostBinding", "Signature", "native_handler", "invoke",
]
