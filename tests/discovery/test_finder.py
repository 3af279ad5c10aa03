from pathlib import Path

from tallytest.discovery.finder import filter_test_files, find_matching_files


def test_find_matching_files_walks_subdirectories_sorted(write_file, tmp_path):
    write_file("b/cart.test.py", "")
    write_file("a/clock.test.py", "")
    write_file("a/clock.fixtures.py", "")
    write_file("notes.txt", "")

    found = find_matching_files(tmp_path, ".test.py")

    assert [path.relative_to(tmp_path).as_posix() for path in found] == ["a/clock.test.py", "b/cart.test.py"]


def test_find_matching_files_prunes_skipped_directories(write_file, tmp_path):
    write_file("src/cart.test.py", "")
    write_file("node_modules/pkg/vendor.test.py", "")
    write_file("src/.venv/lib/site.test.py", "")

    found = find_matching_files(tmp_path, ".test.py", skip_dirs=["node_modules", ".venv"])

    assert [path.name for path in found] == ["cart.test.py"]


def test_bare_suffix_is_not_a_match(write_file, tmp_path):
    write_file(".test.py", "")

    assert find_matching_files(tmp_path, ".test.py") == []


def test_filter_without_names_keeps_everything():
    paths = [Path("x/cart.test.py"), Path("y/clock.test.py")]

    assert filter_test_files(paths, []) == paths


def test_filter_matches_base_name_exactly_ignoring_case():
    paths = [
        Path("x/Cart.test.py"),
        Path("x/cartography.test.py"),
        Path("y/clock.test.py"),
        Path("z/cart.fixtures.py"),
    ]

    assert filter_test_files(paths, ["cart"]) == [Path("x/Cart.test.py")]
    assert filter_test_files(paths, ["CLOCK", "cart"]) == [Path("x/Cart.test.py"), Path("y/clock.test.py")]
    assert filter_test_files(paths, ["missing"]) == []


def test_filter_follows_custom_suffix():
    paths = [Path("cart_spec.py"), Path("cart.test.py")]

    assert filter_test_files(paths, ["cart"], test_suffix="_spec.py") == [Path("cart_spec.py")]
