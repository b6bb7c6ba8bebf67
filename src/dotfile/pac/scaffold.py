"""Scaffolding for new package system folders."""

from pathlib import Path
from string import Template

from dotfile.core.errors import InvalidPackageSystemNameError, PackageSystemExistsError
from dotfile.core.logging import get_logger
from dotfile.pac.package_system import (
    EXCLUDED_PACKAGES_FILENAME,
    PACKAGE_MANAGER_FILENAME,
    PACKAGES_FILENAME,
)

logger = get_logger(__name__)

PACKAGE_MANAGER_TEMPLATE = Template(
    """\
# Package manager definition for $name.
name: "$name"

# Run with the names of the packages to install appended.
install_command:
  command: ""
  args: []

# Must print the installed packages separated by whitespace.
list_command:
  command: ""
  args: []
"""
)


def new_package_system(parent: Path, name: str) -> Path:
    """Create a new package system folder under ``parent``.

    The folder gets empty package list files and a package manager file
    that still needs its commands filled in.

    Args:
        parent: Folder holding the package systems
        name: Name of the new package system

    Returns:
        Path to the new package system folder

    Raises:
        InvalidPackageSystemNameError: If ``name`` is not a single folder name
        PackageSystemExistsError: If the folder already exists
        OSError: If the folder or its files cannot be created
    """
    if name in {"", ".", ".."} or Path(name).name != name:
        raise InvalidPackageSystemNameError(name)

    parent = Path(parent)
    parent.mkdir(parents=True, exist_ok=True)
    folder = parent / name

    try:
        folder.mkdir()
    except FileExistsError as e:
        raise PackageSystemExistsError(folder) from e

    (folder / PACKAGES_FILENAME).touch()
    (folder / EXCLUDED_PACKAGES_FILENAME).touch()
    (folder / PACKAGE_MANAGER_FILENAME).write_text(
        PACKAGE_MANAGER_TEMPLATE.substitute(name=name), encoding="utf-8"
    )

    logger.info("Created package system", name=name, path=str(folder))

    return folder
