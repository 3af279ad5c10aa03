"""Test execution and fixture-injection engine."""

from .assertions import UNDEFINED, Assert
from .fixtures import FixtureRegistry, MissingFixtureError, fixture_provider, resolve_args
from .reflect import parameter_names, uses
from .spy import Spy, SpyReport
from .suite import AsyncSuiteRunner, SuiteApi, SuiteRunner, SuiteState, UnawaitedTestError
from .tally import ASSERTIONS, FAILED, PASSED, TESTS, SuiteResult, Tally

__all__ = [
    "ASSERTIONS",
    "Assert",
    "AsyncSuiteRunner",
    "FAILED",
    "FixtureRegistry",
    "MissingFixtureError",
    "PASSED",
    "Spy",
    "SpyReport",
    "SuiteApi",
    "SuiteResult",
    "SuiteRunner",
    "SuiteState",
    "TESTS",
    "Tally",
    "UNDEFINED",
    "UnawaitedTestError",
    "fixture_provider",
    "parameter_names",
    "resolve_args",
    "uses",
]
