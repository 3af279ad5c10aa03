import logging
from pathlib import Path

import pytest

from tallytest.config import ConfigurationError, get_config


def test_defaults():
    config = get_config()

    assert config.root == Path(".")
    assert config.test_suffix == ".test.py"
    assert config.fixture_suffix == ".fixtures.py"
    assert "node_modules" in config.skip_dirs
    assert config.log_level_value == logging.WARNING


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TALLYTEST_ROOT", str(tmp_path))
    monkeypatch.setenv("TALLYTEST_TEST_SUFFIX", "_check.py")
    monkeypatch.setenv("TALLYTEST_FIXTURE_SUFFIX", "_data.py")
    monkeypatch.setenv("TALLYTEST_SKIP_DIRS", " vendor , ,build ")
    monkeypatch.setenv("TALLYTEST_LOG_LEVEL", "debug")

    config = get_config()

    assert config.root == tmp_path
    assert config.test_suffix == "_check.py"
    assert config.fixture_suffix == "_data.py"
    assert config.skip_dirs == ("vendor", "build")
    assert config.log_level == "DEBUG"


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("TALLYTEST_TEST_SUFFIX", "   ")

    assert get_config().test_suffix == ".test.py"


def test_config_is_memoized(monkeypatch):
    first = get_config()
    monkeypatch.setenv("TALLYTEST_LOG_LEVEL", "ERROR")

    assert get_config() is first


@pytest.mark.parametrize(
    "name, value",
    [
        ("TALLYTEST_LOG_LEVEL", "CHATTY"),
        ("TALLYTEST_TEST_SUFFIX", ".test.js"),
        ("TALLYTEST_FIXTURE_SUFFIX", ".test.py"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError) as excinfo:
        get_config()

    assert excinfo.value.name == name
    assert excinfo.value.value == value
