"""Assertion methods that record outcomes instead of raising.

Every method evaluates its predicate and reports the outcome to its
reporter (normally the running suite). A failure increments the failed
assertions counter and writes a message to the ``assert`` channel; the
test keeps running.
"""
from __future__ import annotations

import json
import warnings
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Protocol


class _Undefined:
    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()
"""Marker for an absent value, distinct from ``None``."""


class AssertionReporter(Protocol):
    def handle_assertion_pass(self) -> None:
        ...

    def handle_assertion_fail(self, error: str, message: Optional[str] = None) -> None:
        ...


def _is_structure(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _normalize(value: Any) -> Any:
    """Sort mapping keys at every level; sequences keep their order.

    Integral floats become ints so ``[1]`` and ``[1.0]`` serialize alike.
    """

    if isinstance(value, Mapping):
        return {str(key): _normalize(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def canonical_form(value: Any) -> str:
    """Serialize a mapping or sequence into the string compared by ``equal``."""

    return json.dumps(_normalize(value), default=repr)


def strictly_equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return bool(actual == expected)


def structurally_equal(actual: Any, expected: Any) -> bool:
    actual_structured = _is_structure(actual)
    expected_structured = _is_structure(expected)
    if actual_structured and expected_structured:
        return canonical_form(actual) == canonical_form(expected)
    if actual_structured or expected_structured:
        return False
    return strictly_equal(actual, expected)


def _display(value: Any) -> str:
    return canonical_form(value) if _is_structure(value) else str(value)


def _is_index(value: Any, key: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and isinstance(key, int)
        and not isinstance(key, bool)
        and 0 <= key < len(value)
    )


def _own_keys(value: Any) -> list:
    """Mapping keys, sequence indices, or instance attributes of plain objects."""

    if isinstance(value, Mapping):
        return list(value)
    if isinstance(value, (list, tuple)):
        return list(range(len(value)))
    return list(getattr(value, "__dict__", {}))


def _has_own(value: Any, key: Any) -> bool:
    if isinstance(value, Mapping):
        return key in value
    if isinstance(value, (list, tuple)):
        return _is_index(value, key)
    return key in getattr(value, "__dict__", {})


def _get_own(value: Any, key: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    if isinstance(value, (list, tuple)):
        return value[key] if _is_index(value, key) else UNDEFINED
    return getattr(value, "__dict__", {}).get(key, UNDEFINED)


class Assert:
    """The assertion set handed to suite bodies as ``api.assert_``."""

    def __init__(self, reporter: AssertionReporter) -> None:
        self._reporter = reporter

    def _record(self, passed: bool, error: str, message: Optional[str] = None) -> None:
        if passed:
            self._reporter.handle_assertion_pass()
        else:
            self._reporter.handle_assertion_fail(error, message)

    def equal(self, actual: Any, expected: Any) -> None:
        self._record(
            structurally_equal(actual, expected),
            f'Expected "{_display(expected)}" but instead got "{_display(actual)}"',
        )

    def not_equal(self, actual: Any, expected: Any) -> None:
        self._record(
            not structurally_equal(actual, expected),
            f'Expected "{_display(expected)}" to not equal "{_display(actual)}"',
        )

    def has_keys(self, actual: Any, expected_keys: Iterable[Any]) -> None:
        missing = [key for key in expected_keys if not _has_own(actual, key)]
        self._record(
            not missing,
            f'Missing expected property: "{missing[0]}"' if missing else "",
            "\nAssertion Fail, Object missing key",
        )

    def has_values(self, actual: Any, expected: Any) -> None:
        warnings.warn(
            "assert_.has_values is deprecated. Try using assert_.equal to check object equality",
            DeprecationWarning,
            stacklevel=2,
        )
        self._record(*self._check_values(actual, expected), "\nAssertion Fail, Object properties not equal")

    @staticmethod
    def _check_values(actual: Any, expected: Any) -> tuple[bool, str]:
        actual_len = len(_own_keys(actual))
        expected_len = len(_own_keys(expected))
        if actual_len < expected_len:
            return False, f"Missing {expected_len - actual_len} properties"
        if actual_len != 0 and expected_len == 0:
            return False, "Expected an empty object"
        for key in _own_keys(expected):
            actual_value = _get_own(actual, key)
            expected_value = _get_own(expected, key)
            if actual_value is UNDEFINED or not strictly_equal(actual_value, expected_value):
                return False, f'"{actual_value}" does not equal "{expected_value}"'
        return True, ""

    def is_not_undefined(self, value: Any) -> None:
        self._record(value is not UNDEFINED, f'"{value}" does not exist.')

    def is_undefined(self, value: Any) -> None:
        self._record(value is UNDEFINED, f"Value does exist: {value}")


__all__ = ["Assert", "UNDEFINED", "canonical_form", "structurally_equal"]
