"""Summary report for a list of suite results."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..engine.tally import SuiteResult
from .channels import OutputSink

BANNER = "=~" * 15 + "= TEST RESULTS " + "=~" * 15
RULE = "=~" * 39 + "="

COLUMNS = ["description", "tests_passed", "tests_failed", "assertions_passed", "assertions_failed"]


def results_frame(results: Sequence[SuiteResult]) -> pd.DataFrame:
    """Tabulate ``results`` with one row per suite."""

    rows = [
        {
            "description": result.description,
            "tests_passed": result.tallies.tests.passed,
            "tests_failed": result.tallies.tests.failed,
            "assertions_passed": result.tallies.assertions.passed,
            "assertions_failed": result.tallies.assertions.failed,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def _format_suite_block(row: pd.Series) -> str:
    finished = int(row["tests_passed"]) + int(row["tests_failed"])
    lines = [
        f"===== {row['description']} =====",
        "",
        f"{finished} TESTS FINISHED",
        "",
        "*",
        f"* {int(row['assertions_passed'])} Assertions Passed",
        f"* {int(row['assertions_failed'])} Assertions Failed",
        "*",
        f"* {int(row['tests_passed'])} Tests Passed",
        f"* {int(row['tests_failed'])} Tests Failed",
        "*",
    ]
    return "\n".join(lines)


def format_report(results: Sequence[SuiteResult]) -> List[str]:
    """Return the report as a list of blocks, banner and total line included."""

    frame = results_frame(results)
    blocks = [f"\n\n{BANNER}"]
    for _, row in frame.iterrows():
        blocks.append(f"\n{_format_suite_block(row)}\n")

    passed = int(frame["tests_passed"].sum()) if not frame.empty else 0
    failed = int(frame["tests_failed"].sum()) if not frame.empty else 0
    blocks.append(f"\nTOTAL: Passed: {passed}, Failed: {failed}")
    blocks.append(f"\n{RULE}\n\n")
    return blocks


def log_test_results(results: Sequence[SuiteResult], sink: OutputSink) -> None:
    for block in format_report(results):
        sink.result(block)


__all__ = ["format_report", "log_test_results", "results_frame"]
