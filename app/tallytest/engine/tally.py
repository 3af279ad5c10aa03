"""Pass/fail counters for tests and assertions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

PASSED = "passed"
FAILED = "failed"
TESTS = "tests"
ASSERTIONS = "assertions"

VERDICTS = (PASSED, FAILED)
TALLY_KINDS = (TESTS, ASSERTIONS)


@dataclass
class Counts:
    passed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def increment(self, verdict: str) -> None:
        if verdict == PASSED:
            self.passed += 1
        elif verdict == FAILED:
            self.failed += 1
        else:
            raise ValueError(f"Unknown verdict '{verdict}'")

    def as_dict(self) -> Dict[str, int]:
        return {PASSED: self.passed, FAILED: self.failed}


@dataclass
class Tally:
    """Counters for one suite run, separately for tests and for assertions."""

    tests: Counts = field(default_factory=Counts)
    assertions: Counts = field(default_factory=Counts)

    def get(self, kind: str) -> Counts:
        if kind not in TALLY_KINDS:
            raise KeyError(f"Unknown tally '{kind}'")
        return getattr(self, kind)

    def increment(self, kind: str, verdict: str) -> None:
        self.get(kind).increment(verdict)

    def copy(self) -> "Tally":
        return Tally(
            tests=Counts(self.tests.passed, self.tests.failed),
            assertions=Counts(self.assertions.passed, self.assertions.failed),
        )

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {TESTS: self.tests.as_dict(), ASSERTIONS: self.assertions.as_dict()}


@dataclass(frozen=True)
class SuiteResult:
    """Snapshot of a completed suite."""

    description: str
    tallies: Tally

    def as_dict(self) -> Dict[str, object]:
        return {"description": self.description, "tallies": self.tallies.as_dict()}


__all__ = [
    "ASSERTIONS",
    "Counts",
    "FAILED",
    "PASSED",
    "SuiteResult",
    "TESTS",
    "Tally",
]
