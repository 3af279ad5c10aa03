"""Import fixture and test files by path."""
from __future__ import annotations

import importlib.util
import logging
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Sequence

from ..engine.fixtures import FixtureRegistry

LOGGER = logging.getLogger(__name__)

FIXTURES_ATTR = "FIXTURES"


def _module_name(prefix: str, path: Path) -> str:
    stem = re.sub(r"\W", "_", "_".join(path.resolve().with_suffix("").parts[-3:]))
    return f"tallytest_{prefix}_{stem}"


def import_module_from_path(path: Path, prefix: str = "module") -> ModuleType:
    """Execute ``path`` as a fresh module, even if it was imported before."""

    module_name = _module_name(prefix, path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def exported_fixtures(module: ModuleType) -> Dict[str, Any]:
    """Return the fixtures a fixture module exposes.

    ``FIXTURES`` wins when defined, then ``__all__``, then every public
    top-level name that is not a module.
    """

    declared = getattr(module, FIXTURES_ATTR, None)
    if declared is not None:
        if not isinstance(declared, Mapping):
            raise TypeError(f"{module.__file__}: {FIXTURES_ATTR} must be a mapping")
        return dict(declared)

    exported = getattr(module, "__all__", None)
    if exported is not None:
        return {name: getattr(module, name) for name in exported}

    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_") and not isinstance(value, ModuleType)
    }


def load_fixture_map(paths: Sequence[Path]) -> FixtureRegistry:
    """Merge the fixtures of every file in ``paths``, later files winning."""

    registry = FixtureRegistry()
    for path in paths:
        module = import_module_from_path(path, prefix="fixtures")
        registry.merge(str(path), exported_fixtures(module))
    LOGGER.info("event=load_fixtures status=ok files=%d count=%d", len(paths), len(registry))
    return registry


__all__ = ["exported_fixtures", "import_module_from_path", "load_fixture_map"]
