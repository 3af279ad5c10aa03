"""Finding and importing fixture and test files."""

from .finder import filter_test_files, find_matching_files
from .loader import exported_fixtures, import_module_from_path, load_fixture_map

__all__ = [
    "exported_fixtures",
    "filter_test_files",
    "find_matching_files",
    "import_module_from_path",
    "load_fixture_map",
]
