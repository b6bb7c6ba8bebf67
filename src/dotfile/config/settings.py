"""Process-wide settings for dotfile."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotfile.core.logging import get_logger

logger = get_logger(__name__)

SETTINGS_FILENAME = "config.yaml"


class Settings(BaseModel):
    """Settings read from ``config.yaml`` in the configuration directory."""

    model_config = ConfigDict(populate_by_name=True)

    default_package_manager: str = Field("", alias="default-package-manager")


def load_settings(root: Path) -> Settings:
    """Load settings from ``root``, then apply environment overrides.

    A missing settings file gives the defaults.

    Args:
        root: Configuration directory

    Returns:
        Loaded settings

    Raises:
        ValueError: If the settings file is invalid
    """
    path = Path(root) / SETTINGS_FILENAME
    settings = _load_from_file(path) if path.exists() else Settings()

    default = os.getenv("DOTFILE_DEFAULT_PACKAGE_MANAGER", "")
    if default:
        settings.default_package_manager = default

    return settings


def _load_from_file(path: Path) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Path to settings file

    Returns:
        Parsed settings

    Raises:
        ValueError: If file is invalid YAML or doesn't match schema
    """
    logger.debug("Loading settings file", path=str(path))

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        # Treat empty files as empty settings
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("Settings file must contain a YAML mapping")

        return Settings.model_validate(data)

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in settings file: {e}") from e
    except ValidationError as e:
        raise ValueError(f"Failed to parse settings: {e}") from e
