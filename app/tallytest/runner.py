"""Harness driver: discovery, fixture loading, suite execution and reporting.

Test files run as a side effect of being imported. Each one is imported
with the run context installed, so every suite it runs publishes its result
into the same context. An exception escaping a test file stops that file
only; it is reported on the ``error`` channel and the run carries on.
"""

from __future__ import annotations

import contextlib
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import HarnessConfig
from .context import RunContext, use_context
from .discovery import filter_test_files, find_matching_files, import_module_from_path, load_fixture_map
from .engine.tally import SuiteResult
from .output.channels import OutputSink
from .output.report import log_test_results

LOGGER = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """What a harness run produced."""

    results: List[SuiteResult] = field(default_factory=list)
    errored: List[Path] = field(default_factory=list)

    @property
    def tests_passed(self) -> int:
        return sum(result.tallies.tests.passed for result in self.results)

    @property
    def tests_failed(self) -> int:
        return sum(result.tallies.tests.failed for result in self.results)

    @property
    def success(self) -> bool:
        return self.tests_failed == 0 and not self.errored

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


@contextlib.contextmanager
def _importable_root(root: Path) -> Iterator[None]:
    entry = str(root.resolve())
    added = entry not in sys.path
    if added:
        sys.path.insert(0, entry)
    try:
        yield
    finally:
        if added and entry in sys.path:
            sys.path.remove(entry)


def run_test_files(paths: Sequence[Path], context: RunContext) -> List[Path]:
    """Import each test file with ``context`` active; return the files that raised."""

    errored: List[Path] = []
    with use_context(context):
        for path in paths:
            start = time.perf_counter()
            try:
                with context.sink.muted_streams():
                    import_module_from_path(path, prefix="suite")
            except Exception:
                errored.append(path)
                context.sink.error(f"\nERROR: {path} stopped before finishing", exc_info=True)
                LOGGER.warning("event=test_file status=error path=%s", path)
                continue
            duration = time.perf_counter() - start
            LOGGER.debug("event=test_file status=ok path=%s duration=%.3f", path, duration)
    return errored


def run(config: HarnessConfig, names: Sequence[str] = (), muted: Iterable[str] = ()) -> RunOutcome:
    """Run every selected test file below ``config.root`` and print the report."""

    sink = OutputSink(muted)
    with _importable_root(config.root):
        fixture_files = find_matching_files(config.root, config.fixture_suffix, config.skip_dirs)
        registry = load_fixture_map(fixture_files)
        context = RunContext(fixtures=registry.as_mapping(), sink=sink)

        test_files = find_matching_files(config.root, config.test_suffix, config.skip_dirs)
        test_files = filter_test_files(test_files, names, config.test_suffix)
        if names and not test_files:
            LOGGER.warning("event=filter_tests status=no_match names=%s", ",".join(names))
        LOGGER.info("event=discover_tests status=ok count=%d", len(test_files))

        errored = run_test_files(test_files, context)

    log_test_results(context.results, sink)
    outcome = RunOutcome(results=list(context.results), errored=errored)
    LOGGER.info(
        "event=run status=%s suites=%d passed=%d failed=%d errored=%d",
        "ok" if outcome.success else "failed",
        len(outcome.results),
        outcome.tests_passed,
        outcome.tests_failed,
        len(outcome.errored),
    )
    return outcome


__all__ = ["RunOutcome", "run", "run_test_files"]
