from typing import Any, Sequence

from hostargs.hostargs_values import UNDEFINED


class ValueIterator:
    """A forward-only cursor over the values of one native call.

    Reading past the end is not an error: pop and peek yield UNDEFINED,
    which the built-in transforms treat as a missing argument. The index
    keeps counting pops even after the sequence is exhausted.
    """
    __slots__ = ("_values", "_index")

    def __init__(self, values: Sequence[Any]):
        # Borrowed; the caller owns the sequence for the duration of the call.
        self._values = values
        self._index = 0

    def pop(self) -> Any:
        value = self.peek()
        self._index += 1
        return value

    def peek(self) -> Any:
        if self._index < len(self._values):
            return self._values[self._index]
        return UNDEFINED

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return len(self._values)

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._values)

    @property
    def remaining(self) -> int:
        return max(len(self._values) - self._index, 0)

    def __repr__(self) -> str:
        return f"<ValueIterator index={self._index} length={len(self._values)}>"
