"""Tests for settings file discovery."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pipegrep.paths import CONFIG_ENV_VAR, CONFIG_FILE_NAMES, ensure_dir_exists, find_config_file


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of discovery."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def test_find_config_file_searches_upwards(tmp_path: Path) -> None:
    """Verify the settings file is found from a nested directory."""
    config_file = tmp_path / CONFIG_FILE_NAMES[0]
    config_file.touch()
    nested = tmp_path / "level1" / "level2"
    nested.mkdir(parents=True)

    assert find_config_file(nested) == config_file


def test_find_config_file_accepts_yml(tmp_path: Path) -> None:
    """Verify the alternative .yml name is recognised."""
    config_file = tmp_path / CONFIG_FILE_NAMES[1]
    config_file.touch()

    with patch("pathlib.Path.cwd", return_value=tmp_path):
        assert find_config_file() == config_file


def test_find_config_file_nearest_wins(tmp_path: Path) -> None:
    """Verify a file closer to the start directory takes precedence."""
    (tmp_path / CONFIG_FILE_NAMES[0]).touch()
    nested = tmp_path / "project"
    nested.mkdir()
    closer = nested / CONFIG_FILE_NAMES[0]
    closer.touch()

    assert find_config_file(nested) == closer


def test_find_config_file_env_var_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify the environment variable overrides discovery."""
    (tmp_path / CONFIG_FILE_NAMES[0]).touch()
    explicit = tmp_path / "elsewhere.yaml"
    explicit.touch()
    monkeypatch.setenv(CONFIG_ENV_VAR, str(explicit))

    assert find_config_file(tmp_path) == explicit


def test_find_config_file_env_var_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify a dangling environment variable raises FileNotFoundError."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yaml"))

    with pytest.raises(FileNotFoundError, match=CONFIG_ENV_VAR):
        find_config_file(tmp_path)


def test_ensure_dir_exists(tmp_path: Path) -> None:
    """Verify that a directory is created if it does not exist."""
    dir_path = tmp_path / "new_dir" / "sub_dir"
    assert not dir_path.exists()

    ensure_dir_exists(dir_path)
    assert dir_path.is_dir()

    ensure_dir_exists(dir_path)
