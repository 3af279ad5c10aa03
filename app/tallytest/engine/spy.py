"""Call-recording wrappers ("spies")."""
from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple


@dataclass
class SpyReport:
    """Calls recorded for one watched callable, in call order."""

    name: str
    call_count: int = 0
    args: List[Tuple[int, Tuple[Any, ...]]] = field(default_factory=list)
    kwargs: List[Tuple[int, Dict[str, Any]]] = field(default_factory=list)
    returned: List[Tuple[int, Any]] = field(default_factory=list)

    def record(self, args: Tuple[Any, ...], kwargs: Dict[str, Any], returned: Any) -> None:
        index = self.call_count
        self.args.append((index, args))
        self.kwargs.append((index, kwargs))
        self.returned.append((index, returned))
        self.call_count += 1


class Spy:
    """Creates watched wrappers and keeps one report per wrapper.

    When ``context`` is given, every watched callable receives it as its
    first positional argument, the way a bound method receives ``self``.
    It is not part of the recorded arguments.
    """

    def __init__(self, context: Any = None) -> None:
        self.context = context
        self._reports: Dict[int, SpyReport] = {}
        self._handles: List[Callable[..., Any]] = []

    def _target(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        if self.context is None:
            return fn
        return functools.partial(fn, self.context)

    def watch(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Return a handle that behaves like ``fn`` and records its calls.

        Calls that raise are not recorded; the exception propagates as is.
        """

        if not callable(fn):
            raise TypeError(f"Cannot watch non-callable {fn!r}")
        report = SpyReport(name=getattr(fn, "__name__", "") or "")
        target = self._target(fn)

        if inspect.iscoroutinefunction(fn):

            async def handle(*args: Any, **kwargs: Any) -> Any:
                returned = await target(*args, **kwargs)
                report.record(args, kwargs, returned)
                return returned

        else:

            def handle(*args: Any, **kwargs: Any) -> Any:
                returned = target(*args, **kwargs)
                report.record(args, kwargs, returned)
                return returned

        handle.__name__ = report.name or "watched"
        handle.report = report  # type: ignore[attr-defined]
        self._reports[id(handle)] = report
        self._handles.append(handle)
        return handle

    def get_report(self, handle: Callable[..., Any]) -> SpyReport:
        try:
            return self._reports[id(handle)]
        except KeyError:
            raise KeyError(f"{handle!r} was not created by this spy") from None

    def get_reports(self) -> List[SpyReport]:
        return [self._reports[id(handle)] for handle in self._handles]

    def __len__(self) -> int:
        return len(self._handles)


__all__ = ["Spy", "SpyReport"]
