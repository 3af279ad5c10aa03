"""Fixture registry and parameter-name based injection."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Tuple

from .reflect import keyword_only_names, parameter_names

LOGGER = logging.getLogger(__name__)


class MissingFixtureError(KeyError):
    """Raised when a callable asks for a fixture that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"{self.name} does not exist as a fixture!"


class FixtureRegistry:
    """Merges fixture sources into one name-to-value mapping.

    Later sources win on name collisions; each overwrite is logged.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._fixtures: Dict[str, Any] = {}
        if initial:
            self.merge("<initial>", initial)

    def merge(self, source: str, fixtures: Mapping[str, Any]) -> None:
        for name, value in fixtures.items():
            if not isinstance(name, str):
                raise TypeError(f"Fixture names must be strings, got {name!r} from {source}")
            if name in self._fixtures:
                LOGGER.warning("event=fixture_overwrite name=%s source=%s", name, source)
            self._fixtures[name] = value
        LOGGER.debug("event=merge_fixtures source=%s count=%d", source, len(fixtures))

    def names(self) -> List[str]:
        return list(self._fixtures)

    def as_mapping(self) -> Mapping[str, Any]:
        return MappingProxyType(self._fixtures)

    def __contains__(self, name: object) -> bool:
        return name in self._fixtures

    def __len__(self) -> int:
        return len(self._fixtures)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fixtures)


def check_fixtures(fn: Callable[..., Any], fixtures: Mapping[str, Any]) -> None:
    """Fail fast when ``fn`` declares a fixture missing from ``fixtures``."""

    for name in parameter_names(fn):
        if name not in fixtures:
            raise MissingFixtureError(name)


def resolve_args(fn: Callable[..., Any], fixtures: Mapping[str, Any]) -> List[Any]:
    """Map the declared parameter names of ``fn`` through ``fixtures``."""

    args = []
    for name in parameter_names(fn):
        if name not in fixtures:
            raise MissingFixtureError(name)
        args.append(fixtures[name])
    return args


def bind_fixtures(fn: Callable[..., Any], fixtures: Mapping[str, Any]) -> Tuple[List[Any], Dict[str, Any]]:
    """Split the resolved fixtures of ``fn`` into positional and keyword arguments."""

    values = resolve_args(fn, fixtures)
    keyword_only = set(keyword_only_names(fn))
    args: List[Any] = []
    kwargs: Dict[str, Any] = {}
    for name, value in zip(parameter_names(fn), values):
        if name in keyword_only:
            kwargs[name] = value
        else:
            args.append(value)
    return args, kwargs


def call_with_fixtures(fn: Callable[..., Any], fixtures: Mapping[str, Any]) -> Any:
    args, kwargs = bind_fixtures(fn, fixtures)
    return fn(*args, **kwargs)


def fixture_provider(fn: Callable[..., Any], fixtures: Mapping[str, Any]) -> Callable[..., Any]:
    """Wrap ``fn`` so its last parameter always receives the whole fixture map.

    The leading parameters are filled positionally from the caller's
    arguments; missing ones become ``None`` and extra ones are dropped.
    """

    params = parameter_names(fn)
    if not params:
        raise ValueError(
            f"fixture provider target {getattr(fn, '__name__', fn)!r} needs a parameter for the fixture map"
        )
    leading = len(params) - 1
    view = fixtures if isinstance(fixtures, MappingProxyType) else MappingProxyType(dict(fixtures))

    def provider(*args: Any) -> Any:
        filled = [args[i] if i < len(args) else None for i in range(leading)]
        filled.append(view)
        return fn(*filled)

    provider.__name__ = getattr(fn, "__name__", "provider")
    provider.__doc__ = getattr(fn, "__doc__", None)
    return provider


__all__ = [
    "FixtureRegistry",
    "MissingFixtureError",
    "bind_fixtures",
    "call_with_fixtures",
    "check_fixtures",
    "fixture_provider",
    "resolve_args",
]
