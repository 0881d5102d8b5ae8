"""Discovery of the PipeGrep settings file."""
# src/pipegrep/paths.py

import os
from pathlib import Path
from typing import Final

CONFIG_FILE_NAMES: Final[list[str]] = [".pipegrep.yaml", ".pipegrep.yml"]
CONFIG_ENV_VAR: Final[str] = "PIPEGREP_CONFIG"


def find_config_file(start_path: Path | None = None) -> Path | None:
    """
    Locate the settings file for the current invocation.

    The `PIPEGREP_CONFIG` environment variable wins when set. Otherwise the
    search walks upwards from `start_path` (or the CWD) and returns the first
    `.pipegrep.yaml` or `.pipegrep.yml` found.

    Args:
        start_path: The path to start searching from. Defaults to CWD.

    Returns:
        The settings file path, or None if there is none.

    Raises:
        FileNotFoundError: If the environment variable names a missing file.

    """
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        env_path = Path(env_value).expanduser()
        if not env_path.is_file():
            msg = f"{CONFIG_ENV_VAR} points to a missing file: {env_path}"
            raise FileNotFoundError(msg)
        return env_path

    current_dir = (start_path or Path.cwd()).resolve()
    for parent in [current_dir, *current_dir.parents]:
        for config_file in CONFIG_FILE_NAMES:
            candidate = parent / config_file
            if candidate.is_file():
                return candidate
    return None


def ensure_dir_exists(path: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
