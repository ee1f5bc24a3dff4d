"""Loader for settings files overriding the built-in defaults."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from azurestack_teamcity.settings import Settings

log = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised when a settings file cannot be used."""


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file.

    Keys absent from the file keep their default values.

    Args:
        path: Path to the settings file

    Returns:
        Validated settings

    Raises:
        FileNotFoundError: If the file doesn't exist
        SettingsError: If the file is empty, not valid YAML or fails validation

    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SettingsError(f"Unreadable settings file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise SettingsError(f"Empty settings file: {path}")

    if not isinstance(data, dict):
        raise SettingsError(f"Invalid settings schema in {path}: expected a mapping")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings schema in {path}: {e}") from e

    log.info("Loaded settings from %s", path)
    return settings
