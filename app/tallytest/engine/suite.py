"""Suite runners: test lifecycle, fixture injection and verdicts.

A test file creates a runner and calls :meth:`SuiteRunner.run` with a
description and a suite body. The body receives a :class:`SuiteApi` and
uses it to register ``before_each`` hooks and to run tests, one after the
other, in call order::

    def body(api):
        @api.before_each
        def reset(cart):
            cart.clear()

        @api.test("adds an item")
        def adds_item(cart):
            cart.add("apple")
            api.assert_.equal(cart.items, ["apple"])

    SuiteRunner().run("shopping cart", body)

A test's parameters are looked up by name in the run's fixture map. A test
FAILS when at least one assertion failed while it ran. Assertion failures
never abort a test; any exception does, and propagates out of the runner.
"""
from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, List, Mapping, Optional, Tuple

from ..context import RunContext, get_context
from ..output.channels import OutputSink
from .assertions import Assert
from .fixtures import call_with_fixtures, check_fixtures, fixture_provider
from .spy import Spy
from .tally import ASSERTIONS, FAILED, PASSED, TESTS, Counts, SuiteResult, Tally

LOGGER = logging.getLogger(__name__)


class UnawaitedTestError(RuntimeError):
    """Raised when a suite body finishes without awaiting some of its tests."""

    def __init__(self, names: List[str]) -> None:
        listed = ", ".join(f'"{name}"' for name in names)
        super().__init__(f"Tests never awaited: {listed}; await every api.test(...) call")
        self.names = names


class SuiteState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SuiteApi:
    """The authoring API handed to a suite body."""

    test: Callable[..., Any]
    before_each: Callable[[Any], Any]
    assert_: Assert
    create_spy: Callable[..., Spy]
    fixture_provider: Callable[[Callable[..., Any]], Callable[..., Any]]
    wait_for: Optional[Callable[..., Awaitable[Any]]] = None


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class SuiteRunner:
    """Runs one synchronous suite and keeps its tallies."""

    def __init__(self, context: Optional[RunContext] = None) -> None:
        self.context = context if context is not None else get_context()
        self.description: Optional[str] = None
        self.state = SuiteState.UNINITIALIZED
        self.initialize_test_data()

    @property
    def fixtures(self) -> Mapping[str, Any]:
        return self.context.fixtures

    @property
    def sink(self) -> OutputSink:
        return self.context.sink

    def initialize_test_data(self) -> None:
        self.tallies = Tally()
        self.before_each_callbacks: List[Callable[..., Any]] = []

    def get_results(self) -> SuiteResult:
        return self._snapshot()

    def _snapshot(self) -> SuiteResult:
        return SuiteResult(description=self.description or "", tallies=self.tallies.copy())

    def get_test_methods(self) -> SuiteApi:
        return SuiteApi(
            test=self.test,
            before_each=self.before_each,
            assert_=Assert(self),
            create_spy=self.create_spy,
            fixture_provider=self.fixture_provider,
        )

    def _start(self, description: str) -> None:
        self.description = description
        self.initialize_test_data()
        self.state = SuiteState.RUNNING
        self.sink.test(f"\nRunning tests for {description} \n")

    def _complete(self) -> None:
        self.state = SuiteState.COMPLETE
        result = self._snapshot()
        self.context.publish(result)
        LOGGER.debug(
            "event=suite_complete description=%s tests_passed=%d tests_failed=%d",
            result.description,
            result.tallies.tests.passed,
            result.tallies.tests.failed,
        )

    def _reject_coroutine(self, fn: Callable[..., Any], role: str) -> None:
        if inspect.iscoroutinefunction(fn):
            raise TypeError(
                f"{role} {getattr(fn, '__name__', fn)!r} is a coroutine function; use AsyncSuiteRunner"
            )

    def run(self, description: str, body: Callable[[SuiteApi], Any]) -> None:
        self._reject_coroutine(body, "suite body")
        self._start(description)
        body(self.get_test_methods())
        self._complete()

    def test(self, name: str, fn: Optional[Callable[..., Any]] = None) -> Any:
        """Run ``fn`` as the test ``name`` and return its verdict.

        Without ``fn`` this returns a decorator that runs the decorated
        function right away and hands it back unchanged.
        """

        if fn is None:

            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                self.test(name, func)
                return func

            return decorator

        self._reject_coroutine(fn, "test")
        self.sink.test(f'Test: "{name}"')
        self.execute_before_each_callbacks()
        prev_failed = self.get_tally(ASSERTIONS).failed
        call_with_fixtures(fn, self.fixtures)
        return self._conclude(name, prev_failed)

    def _conclude(self, name: str, prev_failed: int) -> str:
        verdict = FAILED if prev_failed < self.get_tally(ASSERTIONS).failed else PASSED
        self.increment_tests_tally(verdict)
        if verdict == FAILED:
            self.alert_test_failure(name)
        return verdict

    def execute_before_each_callbacks(self) -> None:
        for callback in list(self.before_each_callbacks):
            call_with_fixtures(callback, self.fixtures)

    def alert_test_failure(self, name: str) -> None:
        self.sink.test(f'\nALERT: "{name}" TEST HAS FAILED! SEE ABOVE ERROR FOR DETAILS\n')

    def before_each(self, fn: Any) -> Any:
        if not callable(fn):
            LOGGER.warning("event=before_each status=ignored reason=not_callable value=%r", fn)
            return fn
        self._reject_coroutine(fn, "before_each hook")
        check_fixtures(fn, self.fixtures)
        self.before_each_callbacks.append(fn)
        return fn

    def fixture_provider(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        return fixture_provider(fn, self.fixtures)

    def create_spy(self, context: Any = None) -> Spy:
        return Spy(context)

    def increment_tally(self, tally: str, verdict: str) -> None:
        self.tallies.increment(tally, verdict)

    def increment_tests_tally(self, verdict: str) -> None:
        self.increment_tally(TESTS, verdict)

    def increment_assertions_tally(self, verdict: str) -> None:
        self.increment_tally(ASSERTIONS, verdict)

    def get_tally(self, tally: str) -> Counts:
        return self.tallies.get(tally)

    def handle_assertion_pass(self) -> None:
        self.increment_assertions_tally(PASSED)

    def handle_assertion_fail(self, error: str, message: Optional[str] = None) -> None:
        self.sink.assertion(message or "\nAssertion Fail")
        self.sink.assertion(error)
        self.increment_assertions_tally(FAILED)


class AsyncSuiteRunner(SuiteRunner):
    """Suite runner whose body, hooks and tests may be coroutine functions.

    ``run`` and ``test`` must be awaited. Hooks finish before the test body
    starts and tests never interleave, as long as each ``test`` call is
    awaited before the next one is made.
    """

    def __init__(self, context: Optional[RunContext] = None) -> None:
        super().__init__(context)
        self._completed = asyncio.Event()

    def _reject_coroutine(self, fn: Callable[..., Any], role: str) -> None:
        return None

    def get_test_methods(self) -> SuiteApi:
        return SuiteApi(
            test=self.test,
            before_each=self.before_each,
            assert_=Assert(self),
            create_spy=self.create_spy,
            fixture_provider=self.fixture_provider,
            wait_for=self.wait_for,
        )

    def initialize_test_data(self) -> None:
        super().initialize_test_data()
        self._scheduled: List[Tuple[str, Coroutine[Any, Any, str]]] = []

    async def run(self, description: str, body: Callable[[SuiteApi], Any]) -> None:  # type: ignore[override]
        self._completed.clear()
        self._start(description)
        await _maybe_await(body(self.get_test_methods()))
        self._check_awaited()
        self._complete()
        self._completed.set()

    def _check_awaited(self) -> None:
        dropped = []
        for name, coroutine in self._scheduled:
            if inspect.getcoroutinestate(coroutine) == inspect.CORO_CREATED:
                coroutine.close()
                dropped.append(name)
        self._scheduled = []
        if dropped:
            raise UnawaitedTestError(dropped)

    def test(self, name: str, fn: Callable[..., Any]) -> Coroutine[Any, Any, str]:  # type: ignore[override]
        """Return the coroutine running test ``name``; the suite body must await it."""

        coroutine = self._run_test(name, fn)
        self._scheduled.append((name, coroutine))
        return coroutine

    async def _run_test(self, name: str, fn: Callable[..., Any]) -> str:
        self.sink.test(f'Test: "{name}"')
        await self.execute_before_each_callbacks()
        prev_failed = self.get_tally(ASSERTIONS).failed
        await _maybe_await(call_with_fixtures(fn, self.fixtures))
        return self._conclude(name, prev_failed)

    async def execute_before_each_callbacks(self) -> None:  # type: ignore[override]
        for callback in list(self.before_each_callbacks):
            await _maybe_await(call_with_fixtures(callback, self.fixtures))

    async def wait_for(self, executor: Callable[[Callable[..., None], Callable[[Any], None]], Any]) -> Any:
        """Await a callback-style ``executor(resolve, reject)``.

        The first call to ``resolve`` or ``reject`` settles the wait; later
        calls are ignored.
        """

        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def resolve(value: Any = None) -> None:
            if not future.done():
                future.set_result(value)

        def reject(error: Any) -> None:
            if future.done():
                return
            if not isinstance(error, BaseException):
                error = RuntimeError(str(error))
            future.set_exception(error)

        started = executor(resolve, reject)
        if inspect.isawaitable(started):
            await started
        return await future

    async def get_results(self) -> SuiteResult:  # type: ignore[override]
        await self._completed.wait()
        return self._snapshot()


__all__ = ["AsyncSuiteRunner", "SuiteApi", "SuiteRunner", "SuiteState", "UnawaitedTestError"]
