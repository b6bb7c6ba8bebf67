"""Discovering package systems from a configuration folder."""

from pathlib import Path

from dotfile.core.errors import FileUnreadableError, UnknownPackageSystemError
from dotfile.core.logging import get_logger
from dotfile.pac.package_system import PackageSystem
from dotfile.system.worker import Worker

logger = get_logger(__name__)


def package_systems_from_folder(
    root: Path, system: Worker | None = None
) -> dict[str, PackageSystem]:
    """Load a PackageSystem from every subfolder of ``root``.

    Files directly inside ``root`` are skipped. Loading stops at the first
    subfolder that fails; no partial result is returned.

    Args:
        root: Folder holding one subfolder per package system
        system: Worker used to execute the managers' commands

    Returns:
        Mapping of package system name to PackageSystem

    Raises:
        FileUnreadableError: If ``root`` cannot be listed
        NoPackageManagerFileError: If a subfolder has no definition file
        NameMismatchError: If a definition's name differs from its folder
        InvalidDefinitionFormatError: If a definition file is malformed
    """
    root = Path(root)
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise FileUnreadableError(root, e.strerror or str(e)) from e

    package_systems: dict[str, PackageSystem] = {}
    for entry in entries:
        if not entry.is_dir():
            continue
        package_system = PackageSystem.from_folder(entry, system)
        package_systems[package_system.name] = package_system

    logger.debug("Loaded package systems", root=str(root), names=sorted(package_systems))

    return package_systems


def select_package_system(
    package_systems: dict[str, PackageSystem], name: str = "", default: str = ""
) -> PackageSystem:
    """Pick one package system by name.

    Falls back to ``default`` and then to the only configured system.

    Args:
        package_systems: Loaded package systems
        name: Explicitly requested name
        default: Configured default name

    Returns:
        The selected PackageSystem

    Raises:
        UnknownPackageSystemError: If no system matches or none can be chosen
    """
    wanted = name or default
    if wanted:
        try:
            return package_systems[wanted]
        except KeyError:
            raise UnknownPackageSystemError(wanted, package_systems) from None

    if len(package_systems) == 1:
        return next(iter(package_systems.values()))

    raise UnknownPackageSystemError("", package_systems)
