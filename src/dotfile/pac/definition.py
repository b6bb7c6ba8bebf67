"""Parsing package manager definition files.

A definition file is YAML:

    name: pacman
    install_command:
      command: sudo
      args: ["pacman", "-S", "--needed"]
    list_command:
      command: pacman
      args: ["-Qqen"]
"""

from collections import Counter
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dotfile.core.errors import (
    DuplicateManagerNameError,
    FileUnreadableError,
    InvalidDefinitionFormatError,
)
from dotfile.core.logging import get_logger
from dotfile.pac.models import PackageManagerConfig, PackageManagersConfig
from dotfile.pac.package_manager import PackageManager
from dotfile.system.worker import Worker

logger = get_logger(__name__)


def load_package_manager(path: Path, system: Worker | None = None) -> PackageManager:
    """Build a PackageManager from a definition file.

    Args:
        path: Path to the definition file
        system: Worker used to execute the manager's commands

    Returns:
        PackageManager instance

    Raises:
        FileUnreadableError: If the file cannot be read
        InvalidDefinitionFormatError: If the file is not a valid definition
    """
    path = Path(path)
    data = _read_yaml(path)

    if not isinstance(data, dict):
        raise InvalidDefinitionFormatError("file must contain a YAML mapping", path)

    config = _validate(PackageManagerConfig, data, path)

    logger.debug("Loaded package manager", name=config.name, path=str(path))

    return PackageManager.from_config(config, system)


def package_managers_from_file(
    path: Path, system: Worker | None = None
) -> list[PackageManager]:
    """Build several PackageManagers from one definition file.

    The file holds either a ``package_managers`` list or a bare top-level
    list of definitions. The whole file is rejected if two entries share
    a name.

    Args:
        path: Path to the definition file
        system: Worker used to execute the managers' commands

    Returns:
        PackageManagers in file order

    Raises:
        FileUnreadableError: If the file cannot be read
        InvalidDefinitionFormatError: If the file is not a valid definition
        DuplicateManagerNameError: If two entries share a name
    """
    path = Path(path)
    data = _read_yaml(path)

    if isinstance(data, list):
        data = {"package_managers": data}
    if not isinstance(data, dict):
        raise InvalidDefinitionFormatError("file must contain a YAML mapping or list", path)

    config = _validate(PackageManagersConfig, data, path)

    counts = Counter(manager.name for manager in config.package_managers)
    duplicates = [name for name, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateManagerNameError(duplicates, path)

    return [PackageManager.from_config(manager, system) for manager in config.package_managers]


def _read_yaml(path: Path) -> Any:
    """Read and parse a YAML file.

    Raises:
        FileUnreadableError: If the file cannot be read
        InvalidDefinitionFormatError: If the file is empty or not valid YAML
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise FileUnreadableError(path, str(e)) from e
    except yaml.YAMLError as e:
        raise InvalidDefinitionFormatError(f"invalid YAML: {e}", path) from e

    if data is None:
        raise InvalidDefinitionFormatError("file is empty", path)

    return data


def _validate(model: Any, data: dict[str, Any], path: Path) -> Any:
    """Validate ``data`` against a pydantic model.

    Raises:
        InvalidDefinitionFormatError: If validation fails
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidDefinitionFormatError(str(e), path) from e
