"""The run context shared by every suite of one harness invocation."""
from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, List, Mapping, Optional

from .output.channels import OutputSink

if TYPE_CHECKING:
    from .engine.tally import SuiteResult


@dataclass
class RunContext:
    """Fixture map, output sink and collected results for one run."""

    fixtures: Mapping[str, Any] = field(default_factory=dict)
    sink: OutputSink = field(default_factory=OutputSink)
    results: List[SuiteResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.fixtures, MappingProxyType):
            self.fixtures = MappingProxyType(dict(self.fixtures))

    def publish(self, result: SuiteResult) -> None:
        self.results.append(result)


_CONTEXT: Optional[RunContext] = None


def get_context() -> RunContext:
    """Return the active run context, creating an empty one on first use."""

    global _CONTEXT
    if _CONTEXT is None:
        _CONTEXT = RunContext()
    return _CONTEXT


@contextlib.contextmanager
def use_context(context: RunContext) -> Iterator[RunContext]:
    """Make ``context`` the active run context for the duration of the block."""

    global _CONTEXT
    previous = _CONTEXT
    _CONTEXT = context
    try:
        yield context
    finally:
        _CONTEXT = previous


__all__ = ["RunContext", "get_context", "use_context"]
