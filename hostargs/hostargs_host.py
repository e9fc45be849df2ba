"""
Binding native handlers to the script engine.

A handler declares its arguments once as a Signature. When the engine calls
it, the signature runs the pipeline over the call values and the handler
receives the converted values as keyword arguments. Pipeline errors are
raised unchanged so the engine can throw them at the script call site.
"""
import inspect
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from hostargs.hostargs_config import _dbg, load_steps, normalize_entry
from hostargs.hostargs_errors import HostError
from hostargs.hostargs_runner import TransformResult, transform_args, transform_this_and_args
from hostargs.hostargs_steps import BoundSlot, Step
from hostargs.hostargs_values import UNDEFINED


class Signature:
    """A reusable argument declaration for a native handler.

    `entries` is a step table (see hostargs_config.load_steps). Each entry
    with a 'dest' becomes a keyword argument of the handler; optional entries
    may carry a 'default'.
    """
    def __init__(self, entries: Sequence[Any], *, this: bool = False,
                 descriptors: Optional[Mapping[str, Any]] = None):
        self.entries: List[Dict[str, Any]] = [normalize_entry(e, i) for i, e in enumerate(entries)]
        self.this = this
        self.descriptors = dict(descriptors or {})
        # Built once, so a bad table fails at declaration time. Each call
        # re-points the destinations at a fresh namespace.
        self._steps: List[Step] = load_steps(self.entries, {}, self.descriptors)

    @property
    def names(self) -> List[str]:
        return [e["dest"] for e in self.entries if e.get("dest")]

    def defaults(self) -> Dict[str, Any]:
        return {e["dest"]: e.get("default") for e in self.entries if e.get("dest")}

    def run(self, args: Sequence[Any], this_value: Any = UNDEFINED) -> tuple[Dict[str, Any], TransformResult]:
        namespace = self.defaults()
        steps = [replace(s, dest=BoundSlot(namespace, s.dest.name)) if s.dest is not None else s
                 for s in self._steps]
        if self.this:
            result = transform_this_and_args(this_value, args, steps)
        else:
            result = transform_args(args, steps)
        return namespace, result

    def bind(self, args: Sequence[Any], this_value: Any = UNDEFINED) -> Dict[str, Any]:
        """Convert the call values, raising the first HostError."""
        namespace, result = self.run(args, this_value)
        result.raise_for_error()
        return namespace

    def __repr__(self) -> str:
        kinds = ", ".join(e["kind"] for e in self.entries)
        return f"<Signature this={self.this} [{kinds}]>"


def native_handler(signature: Signature | Sequence[Any]):
    """A decorator marking a function as a native handler with the given signature."""
    if not isinstance(signature, Signature):
        signature = Signature(signature)

    def decorator(func):
        func._native_signature = signature
        return func
    return decorator


def signature_of(func: Callable) -> Optional[Signature]:
    return getattr(func, "_native_signature", None)


def invoke(handler: Callable, args: Sequence[Any], this_value: Any = UNDEFINED):
    """Call a native handler with raw call values.

    Returns whatever the handler returns, so a coroutine handler yields an
    awaitable.
    """
    signature = signature_of(handler)
    if signature is None:
        raise TypeError(f"{getattr(handler, '__name__', handler)!r} is not a native handler")
    _dbg("invoke", getattr(handler, "__name__", handler), "argc", len(args))
    values = signature.bind(args, this_value)
    return handler(**values)


class HostBinding:
    """Base class for Python objects whose native handlers the engine can call."""

    def natives(self) -> Dict[str, Callable]:
        """Native handlers by script name (kebab-case)."""
        out = {}
        for name, member in inspect.getmembers(type(self)):
            if name.startswith('_') or signature_of(member) is None:
                continue
            out[name.replace('_', '-')] = getattr(self, name)
        return out

    def call(self, name: str, *args: Any, this_value: Any = UNDEFINED):
        handler = self.natives().get(name)
        if handler is None:
            raise HostError(f"{name} is not a function", kind="reference")
        return invoke(handler, args, this_value)


__all__ = [
    "Signature",
    "native_handler",
    "signature_of",
    "invoke",
    "HostBinding",
]
