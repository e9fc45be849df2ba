"""
A printer that renders host values the way a script author would write them.
Used for the offending value in error messages.
"""
import collections.abc

from hostargs.hostargs_values import (
    UNDEFINED, HostFunction, HostObject, as_float, number_to_string
)


class Printer:
    """Formats host values into short, script-flavoured strings."""

    def __init__(self, max_length=40):
        self._max_length = max_length
        self._handlers = self._create_handlers()

    def pformat(self, obj):
        """Public entry point to format a value."""
        handler = self._get_handler(obj)
        return handler(obj)

    def _get_handler(self, obj):
        # Fast path for singletons
        if obj is UNDEFINED: return self._pformat_undefined
        if obj is None: return self._pformat_null

        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        if isinstance(obj, str): return self._pformat_str
        if isinstance(obj, HostObject): return self._pformat_object
        if isinstance(obj, collections.abc.Mapping): return self._pformat_dict
        if isinstance(obj, (list, tuple)): return self._pformat_list
        if callable(obj): return self._pformat_callable
        return lambda o: repr(o)

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            bool: self._pformat_bool,
            int: self._pformat_number,
            float: self._pformat_number,
            HostFunction: self._pformat_host_function,
            HostObject: self._pformat_object,
        }

    def _pformat_undefined(self, obj):
        return 'undefined'

    def _pformat_null(self, obj):
        return 'null'

    def _pformat_str(self, obj):
        text = obj.replace("\\", "\\\\").replace("'", "\\'")
        if len(text) > self._max_length:
            text = text[:self._max_length - 3] + "..."
        return f"'{text}'"

    def _pformat_bool(self, obj):
        return 'true' if obj else 'false'

    def _pformat_number(self, obj):
        return number_to_string(as_float(obj))

    def _pformat_host_function(self, obj):
        return f"function {obj.name}"

    def _pformat_callable(self, obj):
        name = getattr(obj, '__name__', None)
        return f"function {name}" if name else "function"

    def _pformat_object(self, obj):
        if obj.descriptor is not None:
            return f"[object Native<{obj.descriptor.name}>]"
        return "[object Object]"

    def _pformat_list(self, obj):
        return "[" + ", ".join(self.pformat(item) for item in obj) + "]"

    def _pformat_dict(self, obj):
        items = [f"{k}: {self.pformat(v)}" for k, v in obj.items()]
        return "{" + ", ".join(items) + "}"
