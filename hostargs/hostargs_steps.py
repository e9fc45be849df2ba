"""
Transform steps: a transform, a destination and a typed configuration.

A transform never writes its destination itself. It returns an Outcome and
the Step commits the value, so a rejected outcome cannot touch the
destination.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from hostargs.hostargs_errors import HostError
from hostargs.hostargs_iterator import ValueIterator
from hostargs.hostargs_values import NativeDescriptor


class _Nothing:
    """Marks a successful outcome that writes nothing."""
    def __repr__(self):
        return "NOTHING"


NOTHING = _Nothing()


# =================================================================
# Outcomes
# =================================================================

@dataclass(frozen=True)
class Commit:
    value: Any = NOTHING

    @property
    def writes(self) -> bool:
        return self.value is not NOTHING


@dataclass(frozen=True)
class Reject:
    error: HostError


Outcome = Union[Commit, Reject]

OK = Commit()


# =================================================================
# Destinations
# =================================================================

class Slot:
    """A standalone writable cell owned by the caller."""
    def __init__(self, value: Any = None):
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"Slot({self.value!r})"


class BoundSlot(Slot):
    """Writes through to a mapping key or an object attribute."""
    def __init__(self, target: Any, name: str):
        self.target = target
        self.name = name

    @property
    def value(self) -> Any:
        return self.get()

    def get(self) -> Any:
        if isinstance(self.target, MutableMapping):
            return self.target.get(self.name)
        return getattr(self.target, self.name, None)

    def set(self, value: Any):
        if isinstance(self.target, MutableMapping):
            self.target[self.name] = value
        else:
            setattr(self.target, self.name, value)

    def __repr__(self) -> str:
        return f"BoundSlot({type(self.target).__name__}, {self.name!r})"


# =================================================================
# Configurations, one per built-in kind
# =================================================================

@dataclass(frozen=True)
class NumberConfig:
    coerce: bool = False
    optional: bool = False


@dataclass(frozen=True)
class BooleanConfig:
    coerce: bool = False
    optional: bool = False


@dataclass(frozen=True)
class StringConfig:
    # Maximum UTF-8 encoded size in bytes.
    capacity: int
    coerce: bool = False
    optional: bool = False
    truncate: bool = False


@dataclass(frozen=True)
class FunctionConfig:
    optional: bool = False


@dataclass(frozen=True)
class NativeConfig:
    descriptor: NativeDescriptor
    optional: bool = False


@dataclass(frozen=True)
class IgnoreConfig:
    pass


@dataclass(frozen=True)
class CustomConfig:
    data: Any = None


StepConfig = Union[NumberConfig, BooleanConfig, StringConfig, FunctionConfig,
                   NativeConfig, IgnoreConfig, CustomConfig]

Transform = Callable[[ValueIterator, 'Step'], Outcome]


@dataclass(frozen=True)
class Step:
    transform: Transform
    dest: Optional[Slot] = None
    config: Any = None

    @property
    def name(self) -> str:
        return getattr(self.transform, "__name__", type(self.transform).__name__)

    def run(self, it: ValueIterator) -> Outcome:
        """Run the transform and commit its value into the destination."""
        try:
            outcome = self.transform(it, self)
        except HostError as e:
            return Reject(e)
        match outcome:
            case Reject():
                return outcome
            case Commit(value=value):
                if value is not NOTHING and self.dest is not None:
                    self.dest.set(value)
                return outcome
            case _:
                raise TypeError(
                    f"transform {self.name} returned {type(outcome).__name__}, expected Commit or Reject"
                )


__all__ = [
    "NOTHING",
    "Commit",
    "Reject",
    "Outcome",
    "OK",
    "Slot",
    "BoundSlot",
    "NumberConfig",
    "BooleanConfig",
    "StringConfig",
    "FunctionConfig",
    "NativeConfig",
    "IgnoreConfig",
    "CustomConfig",
    "StepConfig",
    "Transform",
    "Step",
]
