"""Shared pytest fixtures for the test suite."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

import pytest

from tallytest.config import get_config
from tallytest.context import RunContext
from tallytest.engine.suite import SuiteRunner
from tallytest.output.channels import CHANNEL_LOGGER, OutputSink


class Counter:
    def __init__(self, count: int = 0) -> None:
        self.count = count

    def increment(self) -> int:
        self.count += 1
        return self.count

    def reset(self) -> None:
        self.count = 0


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "TALLYTEST_ROOT",
        "TALLYTEST_TEST_SUFFIX",
        "TALLYTEST_FIXTURE_SUFFIX",
        "TALLYTEST_SKIP_DIRS",
        "TALLYTEST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def fixture_values() -> Dict[str, Any]:
    """Return the fixture map injected into suites under test."""

    return {"a": 1, "b": 2, "counter": Counter(), "greeting": "hello"}


@pytest.fixture
def context(fixture_values: Dict[str, Any]) -> RunContext:
    return RunContext(fixtures=fixture_values, sink=OutputSink())


@pytest.fixture
def runner(context: RunContext) -> SuiteRunner:
    return SuiteRunner(context)


@pytest.fixture
def channel_output(caplog: pytest.LogCaptureFixture) -> Callable[[str], List[str]]:
    """Return a reader for the messages written to one output channel."""

    caplog.set_level(logging.INFO, logger=CHANNEL_LOGGER)

    def read(channel: str) -> List[str]:
        name = f"{CHANNEL_LOGGER}.{channel}"
        return [record.getMessage() for record in caplog.records if record.name == name]

    return read


@pytest.fixture
def write_file(tmp_path):
    """Write ``content`` to ``tmp_path / relative`` and return the path."""

    def write(relative: str, content: str):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
