"""Locate fixture and test files below a root directory."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Sequence

LOGGER = logging.getLogger(__name__)


def find_matching_files(root: Path, suffix: str, skip_dirs: Iterable[str] = ()) -> List[Path]:
    """Walk ``root`` and return every file whose name ends with ``suffix``.

    Directories named in ``skip_dirs`` are not descended into. The result is
    sorted so that load order does not depend on the file system.
    """

    skips = set(skip_dirs)
    matches: List[Path] = []
    for current, dirs, files in os.walk(root):
        dirs[:] = [name for name in dirs if name not in skips]
        for filename in files:
            if filename.endswith(suffix) and len(filename) > len(suffix):
                matches.append(Path(current) / filename)
    matches.sort()
    LOGGER.debug("event=find_files root=%s suffix=%s count=%d", root, suffix, len(matches))
    return matches


def _base_name(path: Path) -> str:
    name = path.name
    return name[: -len(".py")] if name.endswith(".py") else name


def filter_test_files(paths: Sequence[Path], names: Sequence[str], test_suffix: str = ".test.py") -> List[Path]:
    """Keep the files whose base name equals ``<name>.test`` for any of ``names``.

    Matching is exact and case-insensitive. No names keeps every file.
    """

    if not names:
        return list(paths)
    marker = test_suffix[: -len(".py")] if test_suffix.endswith(".py") else test_suffix
    wanted = {f"{name}{marker}".lower() for name in names}
    return [path for path in paths if _base_name(path).lower() in wanted]


__all__ = ["filter_test_files", "find_matching_files"]
