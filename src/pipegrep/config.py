"""Handles the parsing and validation of the PipeGrep engine settings."""

import codecs
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class EngineSettings(BaseModel):
    """Settings shared by every engine call."""

    encoding: str = "utf-8"
    pattern_cache_size: int = Field(default=256, ge=0)
    warn_ignored_arguments: bool = True

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        """Reject codec names Python does not know about."""
        try:
            return codecs.lookup(value).name
        except LookupError as e:
            msg = f"Unknown encoding: {value}"
            raise ValueError(msg) from e


_settings = EngineSettings()


def get_settings() -> EngineSettings:
    """Return the active engine settings."""
    return _settings


def configure(settings: EngineSettings | None = None, **overrides: Any) -> EngineSettings:  # noqa: ANN401
    """
    Replace the active engine settings.

    Args:
        settings: A complete settings object. Defaults to the current settings.
        **overrides: Individual fields to change on top of `settings`.

    Returns:
        The settings now in effect.

    Raises:
        ValueError: If an override does not validate.

    """
    global _settings  # noqa: PLW0603
    # Imported here because patterns reads the settings at import time.
    from . import patterns

    base = settings or _settings
    try:
        new_settings = EngineSettings(**{**base.model_dump(), **overrides})
    except ValidationError as e:
        msg = f"Invalid engine settings: {e}"
        raise ValueError(msg) from e

    if new_settings.pattern_cache_size != _settings.pattern_cache_size:
        patterns.reset_cache(new_settings.pattern_cache_size)
    _settings = new_settings
    logger.debug("Engine settings updated: %s", _settings.model_dump())
    return _settings


def load_settings(config_path: str | Path) -> EngineSettings:
    """
    Load, parse, and validate a YAML settings file.

    The file may hold the settings at the top level or under an `engine` key.

    Args:
        config_path: The path to the YAML file.

    Returns:
        An EngineSettings object representing the validated settings.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the settings are invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Error parsing YAML config file: {e}"
        raise yaml.YAMLError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Config file must be a YAML mapping (dictionary)."
        raise ValueError(msg)

    engine_data = data.get("engine", data)
    if not isinstance(engine_data, dict):
        msg = "The 'engine' section must be a mapping."
        raise ValueError(msg)

    try:
        settings = EngineSettings(**engine_data)
    except ValidationError as e:
        msg = f"Invalid or missing configuration: {e}"
        raise ValueError(msg) from e
    logger.debug("Loaded engine settings from %s", path)
    return settings
