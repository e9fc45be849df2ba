"""
Script-visible errors raised or returned by argument transforms.
"""

from typing import Any, Optional

import pystache


class HostError(Exception):
    """An error the host surfaces to the script as a thrown exception."""
    kind = "error"

    def __init__(self, message: str, *, kind: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.position = position

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind!r}, position={self.position!r})"


class ArgumentError(HostError):
    """Base class for failures reported by the built-in transforms."""
    kind = "argument"


class MissingArgument(ArgumentError):
    kind = "missing"


class TypeMismatch(ArgumentError):
    kind = "type_mismatch"


class CoercionFailure(ArgumentError):
    kind = "coercion"

    def __init__(self, message: str, *, reason: HostError, position: Optional[int] = None):
        super().__init__(message, position=position)
        self.reason = reason
        self.__cause__ = reason


class NativeTypeMismatch(ArgumentError):
    kind = "native_type"


class CapacityExceeded(ArgumentError):
    kind = "capacity"


def render_message(kind: str, **context: Any) -> str:
    """Render the configured message template for an error kind."""
    # NOTE: imported lazily; hostargs_config pulls in the transforms for step tables.
    from hostargs.hostargs_config import get_settings
    template = get_settings().messages[kind]
    renderer = pystache.Renderer(escape=lambda u: u)
    return renderer.render(template, {k: str(v) for k, v in context.items()})


def argument_error(cls, position: int, **context: Any) -> ArgumentError:
    """Build a built-in transform error with its rendered, position-naming message."""
    message = render_message(cls.kind, position=position, **context)
    if cls is CoercionFailure:
        return cls(message, reason=context["reason"], position=position)
    return cls(message, position=position)


__all__ = [
    "HostError",
    "ArgumentError",
    "MissingArgument",
    "TypeMismatch",
    "CoercionFailure",
    "NativeTypeMismatch",
    "CapacityExceeded",
    "render_message",
    "argument_error",
]
