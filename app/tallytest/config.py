"""Harness configuration helpers."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_TEST_SUFFIX = ".test.py"
DEFAULT_FIXTURE_SUFFIX = ".fixtures.py"
DEFAULT_SKIP_DIRS = ".git,__pycache__,.venv,venv,node_modules,build,dist"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigurationError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Environment variable '{name}' has invalid value {value!r}: {reason}")
        self.name = name
        self.value = value


def _get_env(name: str, *, default: Optional[str] = None) -> Optional[str]:
    """Return the stripped value of ``name``, or ``default`` when unset or blank."""

    value = (os.environ.get(name) or "").strip()
    return value or default


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class HarnessConfig:
    """Dataclass representing configuration for one harness invocation."""

    root: Path
    test_suffix: str
    fixture_suffix: str
    skip_dirs: Tuple[str, ...]
    log_level: str

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


@lru_cache(maxsize=1)
def get_config() -> HarnessConfig:
    """Load and memoize the harness configuration."""

    log_level = (_get_env("TALLYTEST_LOG_LEVEL", default="WARNING") or "WARNING").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(
            "TALLYTEST_LOG_LEVEL", log_level, f"expected one of {', '.join(_LOG_LEVELS)}"
        )

    test_suffix = _get_env("TALLYTEST_TEST_SUFFIX", default=DEFAULT_TEST_SUFFIX) or DEFAULT_TEST_SUFFIX
    fixture_suffix = (
        _get_env("TALLYTEST_FIXTURE_SUFFIX", default=DEFAULT_FIXTURE_SUFFIX) or DEFAULT_FIXTURE_SUFFIX
    )
    for name, suffix in (("TALLYTEST_TEST_SUFFIX", test_suffix), ("TALLYTEST_FIXTURE_SUFFIX", fixture_suffix)):
        if not suffix.endswith(".py"):
            raise ConfigurationError(name, suffix, "suffix must end with '.py'")
    if test_suffix == fixture_suffix:
        raise ConfigurationError("TALLYTEST_FIXTURE_SUFFIX", fixture_suffix, "must differ from the test suffix")

    return HarnessConfig(
        root=Path(_get_env("TALLYTEST_ROOT", default=".") or "."),
        test_suffix=test_suffix,
        fixture_suffix=fixture_suffix,
        skip_dirs=_split_csv(_get_env("TALLYTEST_SKIP_DIRS", default=DEFAULT_SKIP_DIRS) or ""),
        log_level=log_level,
    )


__all__ = ["HarnessConfig", "get_config", "ConfigurationError"]
