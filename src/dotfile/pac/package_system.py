"""Package system: a package manager bound to its package list files."""

from collections.abc import Iterable
from pathlib import Path

from dotfile.core.errors import (
    ExcludedFileUnreadableError,
    NameMismatchError,
    NoPackageManagerFileError,
    PackagesFileUnreadableError,
)
from dotfile.core.logging import get_logger
from dotfile.pac.definition import load_package_manager
from dotfile.pac.files import read_package_set, write_package_set
from dotfile.pac.package_manager import PackageManager
from dotfile.system.worker import Worker

logger = get_logger(__name__)

PACKAGE_MANAGER_FILENAME = "package_manager.yaml"
LEGACY_PACKAGE_MANAGER_FILENAME = "package_manager.toml"
PACKAGES_FILENAME = "installed_packages.txt"
EXCLUDED_PACKAGES_FILENAME = "excluded_packages.txt"


class PackageSystem:
    """A PackageManager plus the folder that stores its package lists.

    The folder holds:

    - ``package_manager.yaml``: the package manager definition
    - ``installed_packages.txt``: the packages that should be installed
    - ``excluded_packages.txt``: packages never written by ``upload()``

    The list files are only read when an operation needs them, so a
    missing list file is not an error until then.
    """

    def __init__(
        self,
        name: str,
        package_manager: PackageManager,
        packages_file: Path,
        excluded_packages_file: Path,
    ) -> None:
        """Initialize the PackageSystem.

        Args:
            name: Name of the package system
            package_manager: Package manager used to install and list
            packages_file: Path to the desired-packages file
            excluded_packages_file: Path to the excluded-packages file
        """
        self.name = name
        self.package_manager = package_manager
        self.packages_file = Path(packages_file)
        self.excluded_packages_file = Path(excluded_packages_file)

    @classmethod
    def build(cls, package_manager: PackageManager, folder: Path) -> "PackageSystem":
        """Build a PackageSystem whose list files live in ``folder``.

        Args:
            package_manager: Package manager used to install and list
            folder: Package system folder

        Returns:
            PackageSystem named after the package manager
        """
        folder = Path(folder)
        return cls(
            name=package_manager.name,
            package_manager=package_manager,
            packages_file=folder / PACKAGES_FILENAME,
            excluded_packages_file=folder / EXCLUDED_PACKAGES_FILENAME,
        )

    @classmethod
    def from_folder(cls, folder: Path, system: Worker | None = None) -> "PackageSystem":
        """Build a PackageSystem from a folder alone.

        The folder's name is the package system's name; the definition
        file must declare the same name.

        Args:
            folder: Package system folder
            system: Worker used to execute the manager's commands

        Returns:
            PackageSystem instance

        Raises:
            NoPackageManagerFileError: If the folder has no definition file
            NameMismatchError: If the declared name differs from the folder name
            FileUnreadableError: If the definition file cannot be read
            InvalidDefinitionFormatError: If the definition file is malformed
        """
        folder = Path(folder)
        definition_file = folder / PACKAGE_MANAGER_FILENAME
        if not definition_file.is_file():
            hint = ""
            if (folder / LEGACY_PACKAGE_MANAGER_FILENAME).is_file():
                hint = (
                    f"found {LEGACY_PACKAGE_MANAGER_FILENAME}; "
                    f"rewrite it as YAML in {PACKAGE_MANAGER_FILENAME}"
                )
            raise NoPackageManagerFileError(folder, hint)

        package_manager = load_package_manager(definition_file, system)
        if package_manager.name != folder.name:
            raise NameMismatchError(folder.name, package_manager.name, definition_file)

        return cls.build(package_manager, folder)

    def install(self) -> "PackageSystem":
        """Install every package listed in the packages file.

        Returns:
            This PackageSystem

        Raises:
            PackagesFileUnreadableError: If the packages file cannot be read
            CommandFailedToRunError: If the install command cannot be spawned
            CommandReturnedError: If the install command exits non-zero
        """
        packages = self._read(self.packages_file, PackagesFileUnreadableError)
        if not packages:
            logger.info("No packages to install", system=self.name)
            return self

        logger.debug("Installing packages", system=self.name, count=len(packages))
        self.package_manager.install(sorted(packages))

        return self

    def upload(self) -> "PackageSystem":
        """Write the installed packages, minus excluded ones, to the packages file.

        Returns:
            This PackageSystem

        Raises:
            CommandFailedToRunError: If the list command cannot be spawned
            InvalidOutputEncodingError: If the list output is not valid text
            ExcludedFileUnreadableError: If the excluded file cannot be read
            FileCreateFailedError: If the packages file cannot be replaced
            WriteFailedError: If writing the packages file fails
        """
        installed = self.package_manager.list_packages()
        excluded = self._read(self.excluded_packages_file, ExcludedFileUnreadableError)

        to_write = installed - excluded
        write_package_set(self.packages_file, to_write)

        logger.info(
            "Uploaded packages",
            system=self.name,
            count=len(to_write),
            excluded=len(installed & excluded),
        )

        return self

    def sync(self) -> "PackageSystem":
        """Run ``install()`` then ``upload()``.

        An install failure stops before the upload. A failed upload does not
        undo the install.

        Returns:
            This PackageSystem
        """
        return self.install().upload()

    def exclude(self, packages: Iterable[str]) -> "PackageSystem":
        """Add ``packages`` to the excluded packages file.

        Packages that are not currently installed are still excluded, with
        a warning.

        Args:
            packages: Package names to exclude

        Returns:
            This PackageSystem

        Raises:
            ExcludedFileUnreadableError: If the excluded file exists but cannot be read
            CommandFailedToRunError: If the list command cannot be spawned
            InvalidOutputEncodingError: If the list output is not valid text
            FileCreateFailedError: If the excluded file cannot be replaced
            WriteFailedError: If writing the excluded file fails
        """
        packages = set(packages)
        installed = self.package_manager.list_packages()
        excluded = self._read_excluded_or_empty()

        not_installed = packages - installed
        if not_installed:
            logger.warning(
                "Excluding packages that are not installed",
                system=self.name,
                packages=not_installed,
            )

        write_package_set(self.excluded_packages_file, excluded | packages)
        logger.info("Excluded packages", system=self.name, count=len(packages - excluded))

        return self

    def reinclude(self, packages: Iterable[str]) -> "PackageSystem":
        """Remove ``packages`` from the excluded packages file.

        Packages that were never excluded are reported with a warning.

        Args:
            packages: Package names to reinclude

        Returns:
            This PackageSystem

        Raises:
            ExcludedFileUnreadableError: If the excluded file exists but cannot be read
            FileCreateFailedError: If the excluded file cannot be replaced
            WriteFailedError: If writing the excluded file fails
        """
        packages = set(packages)
        excluded = self._read_excluded_or_empty()

        never_excluded = packages - excluded
        if never_excluded:
            logger.warning(
                "Reincluding packages that were not excluded",
                system=self.name,
                packages=never_excluded,
            )

        write_package_set(self.excluded_packages_file, excluded - packages)
        logger.info("Reincluded packages", system=self.name, count=len(packages & excluded))

        return self

    def _read_excluded_or_empty(self) -> set[str]:
        """Read the excluded file, treating a missing file as empty."""
        if not self.excluded_packages_file.exists():
            return set()
        return self._read(self.excluded_packages_file, ExcludedFileUnreadableError)

    @staticmethod
    def _read(path: Path, error: type[Exception]) -> set[str]:
        """Read a package list, converting failures into ``error``."""
        try:
            return read_package_set(path)
        except (OSError, UnicodeDecodeError) as e:
            raise error(path, str(e)) from e

    def __repr__(self) -> str:
        return f"PackageSystem(name={self.name!r}, folder={str(self.packages_file.parent)!r})"
