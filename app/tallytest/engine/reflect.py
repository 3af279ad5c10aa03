"""Parameter reflection used to decide which fixtures a callable receives."""
from __future__ import annotations

import inspect
from typing import Any, Callable, List

MANIFEST_ATTR = "__tallytest_fixtures__"

_NAMED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def uses(*names: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare the fixture keys of a callable explicitly.

    The manifest takes precedence over the callable's signature, so the
    parameters can be named freely::

        @uses("db", "clock")
        def check_expiry(connection, now):
            ...
    """

    for name in names:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Fixture names must be non-empty strings, got {name!r}")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, MANIFEST_ATTR, tuple(names))
        return func

    return decorator


def parameter_names(fn: Any) -> List[str]:
    """Return the declared parameter names of ``fn`` in declaration order.

    ``*args``/``**kwargs`` are skipped and bound methods do not report
    ``self``. Anything that cannot be inspected yields an empty list.
    """

    manifest = getattr(fn, MANIFEST_ATTR, None)
    if manifest is not None:
        return list(manifest)

    if not callable(fn):
        return []
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return []
    return [param.name for param in signature.parameters.values() if param.kind in _NAMED_KINDS]


def keyword_only_names(fn: Any) -> List[str]:
    """Names among :func:`parameter_names` that must be passed by keyword."""

    if getattr(fn, MANIFEST_ATTR, None) is not None or not callable(fn):
        return []
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return []
    return [
        param.name
        for param in signature.parameters.values()
        if param.kind is inspect.Parameter.KEYWORD_ONLY
    ]


__all__ = ["keyword_only_names", "parameter_names", "uses"]
