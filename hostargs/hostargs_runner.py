"""
Runs a sequence of steps over the values of one native call.

Steps run strictly in order against a single shared iterator. The first
rejected step ends the run; steps that already ran keep their written
destinations, there is no rollback.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, Sequence

from hostargs.hostargs_config import _dbg
from hostargs.hostargs_errors import HostError
from hostargs.hostargs_iterator import ValueIterator
from hostargs.hostargs_steps import Reject, Step


@dataclass
class TransformResult:
    """The structured result of one pipeline run."""
    status: Literal['success', 'error']
    error: Optional[HostError] = None
    failed_step: Optional[int] = None
    consumed: int = 0

    @property
    def ok(self) -> bool:
        return self.status == 'success'

    def raise_for_error(self):
        if self.error is not None:
            raise self.error


def run_steps(it: ValueIterator, steps: Iterable[Step]) -> TransformResult:
    for i, step in enumerate(steps):
        _dbg("step", i, step.name, "index", it.index)
        outcome = step.run(it)
        if isinstance(outcome, Reject):
            _dbg("failed", i, step.name, type(outcome.error).__name__, outcome.error.message)
            return TransformResult('error', error=outcome.error, failed_step=i, consumed=it.index)
    _dbg("succeeded", "consumed", it.index, "of", it.length)
    return TransformResult('success', consumed=it.index)


def transform_args(args: Sequence[Any], steps: Iterable[Step]) -> TransformResult:
    """Run steps over the positional arguments alone."""
    return run_steps(ValueIterator(args), steps)


def transform_this_and_args(this_value: Any, args: Sequence[Any], steps: Iterable[Step]) -> TransformResult:
    """Run steps over `this` followed by the positional arguments."""
    return run_steps(ValueIterator([this_value, *args]), steps)


__all__ = [
    "TransformResult",
    "run_steps",
    "transform_args",
    "transform_this_and_args",
]
