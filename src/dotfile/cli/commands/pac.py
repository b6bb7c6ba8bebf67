"""Package tracking command implementations."""

from pathlib import Path

from dotfile.config.paths import config_root, pac_root
from dotfile.config.settings import load_settings
from dotfile.core.logging import get_logger
from dotfile.pac.loader import package_systems_from_folder, select_package_system
from dotfile.pac.package_system import PackageSystem
from dotfile.pac.scaffold import new_package_system
from dotfile.system.runner import System

logger = get_logger(__name__)

OPERATIONS = ("install", "upload", "sync")


def load_package_systems(root: Path, trace: bool = False) -> dict[str, PackageSystem]:
    """Load every package system under the configuration directory.

    Args:
        root: Configuration directory
        trace: Print each command and its output

    Returns:
        Mapping of package system name to PackageSystem; empty if the
        package systems folder does not exist yet
    """
    folder = pac_root(root)
    if not folder.is_dir():
        logger.debug("No package systems folder", path=str(folder))
        return {}
    return package_systems_from_folder(folder, System(trace=trace))


def run_operation(
    operation: str,
    name: str = "",
    all_systems: bool = False,
    trace: bool = False,
    root: Path | None = None,
) -> list[str]:
    """Run install, upload or sync on one or all package systems.

    Systems are processed one after another, in name order, stopping at
    the first failure.

    Args:
        operation: One of "install", "upload" or "sync"
        name: Package system to use; the default when empty
        all_systems: Run on every package system instead
        trace: Print each command and its output
        root: Configuration directory; resolved when omitted

    Returns:
        Names of the package systems the operation ran on

    Raises:
        ValueError: If the operation is unknown
        DotfileError: If loading or the operation fails
    """
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown operation: {operation}")

    root = root if root is not None else config_root()
    package_systems = load_package_systems(root, trace)

    if all_systems:
        targets = [package_systems[key] for key in sorted(package_systems)]
    else:
        settings = load_settings(root)
        targets = [
            select_package_system(package_systems, name, settings.default_package_manager)
        ]

    for package_system in targets:
        logger.info(f"Running {operation}", system=package_system.name)
        getattr(package_system, operation)()

    return [package_system.name for package_system in targets]


def run_exclude(
    packages: list[str],
    reinclude: bool = False,
    name: str = "",
    trace: bool = False,
    root: Path | None = None,
) -> str:
    """Exclude packages from, or reinclude them into, upload.

    Args:
        packages: Package names
        reinclude: Reinclude instead of exclude
        name: Package system to use; the default when empty
        trace: Print each command and its output
        root: Configuration directory; resolved when omitted

    Returns:
        Name of the package system that was changed
    """
    root = root if root is not None else config_root()
    package_systems = load_package_systems(root, trace)
    settings = load_settings(root)
    package_system = select_package_system(
        package_systems, name, settings.default_package_manager
    )

    if reinclude:
        package_system.reinclude(packages)
    else:
        package_system.exclude(packages)

    return package_system.name


def run_new(name: str, root: Path | None = None) -> Path:
    """Scaffold a new package system.

    Args:
        name: Name of the new package system
        root: Configuration directory; resolved when omitted

    Returns:
        Path to the new package system folder
    """
    root = root if root is not None else config_root()
    return new_package_system(pac_root(root), name)
