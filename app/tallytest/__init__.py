"""A small unit-testing harness with fixture injection by parameter name.

Test files (``*.test.py``) run their suites when imported::

    from tallytest import SuiteRunner

    def body(api):
        @api.test("greets by name")
        def greets(greeter):
            api.assert_.equal(greeter("Ada"), "Hello, Ada")

    SuiteRunner().run("greeter", body)

``greeter`` is looked up in the fixtures exported by ``*.fixtures.py`` files.
"""

from .context import RunContext, get_context, use_context
from .engine import (
    UNDEFINED,
    AsyncSuiteRunner,
    FixtureRegistry,
    MissingFixtureError,
    Spy,
    SpyReport,
    SuiteApi,
    SuiteResult,
    SuiteRunner,
    SuiteState,
    Tally,
    UnawaitedTestError,
    parameter_names,
    resolve_args,
    uses,
)
from .output.channels import OutputSink

__version__ = "0.3.0"

__all__ = [
    "AsyncSuiteRunner",
    "FixtureRegistry",
    "MissingFixtureError",
    "OutputSink",
    "RunContext",
    "Spy",
    "SpyReport",
    "SuiteApi",
    "SuiteResult",
    "SuiteRunner",
    "SuiteState",
    "Tally",
    "UNDEFINED",
    "UnawaitedTestError",
    "get_context",
    "parameter_names",
    "resolve_args",
    "use_context",
    "uses",
]
