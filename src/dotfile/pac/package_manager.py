"""Package manager: the install and list commands for one packaging tool."""

from collections.abc import Iterable

from dotfile.core.errors import InvalidOutputEncodingError
from dotfile.core.logging import get_logger
from dotfile.pac.models import PackageManagerConfig
from dotfile.system.command import Command
from dotfile.system.runner import System
from dotfile.system.worker import Worker

logger = get_logger(__name__)


class PackageManager:
    """A system package manager described purely by configuration.

    The install command receives the package names as trailing arguments
    and runs attached to the terminal. The list command must print the
    installed package names separated by whitespace.
    """

    def __init__(
        self,
        name: str,
        install_command: Command,
        list_command: Command,
        system: Worker | None = None,
    ) -> None:
        """Initialize the PackageManager.

        Args:
            name: Name of the package manager (e.g. 'pacman')
            install_command: Command used to install packages
            list_command: Command used to list installed packages
            system: Worker used to execute commands
        """
        self.name = name
        self.install_command = install_command
        self.list_command = list_command
        self.system = system if system is not None else System()

    @classmethod
    def from_config(
        cls, config: PackageManagerConfig, system: Worker | None = None
    ) -> "PackageManager":
        """Build a PackageManager from a validated definition.

        Args:
            config: Parsed package manager definition
            system: Worker used to execute commands

        Returns:
            PackageManager instance
        """
        return cls(
            name=config.name,
            install_command=config.install_command.to_command(),
            list_command=config.list_command.to_command(),
            system=system,
        )

    def install(self, packages: Iterable[str]) -> None:
        """Install ``packages`` with the install command.

        Args:
            packages: Package names, appended to the install command

        Raises:
            CommandFailedToRunError: If the install command cannot be spawned
            CommandReturnedError: If the install command exits non-zero
        """
        packages = list(packages)
        cmd = self.install_command.with_args(packages)
        self.system.run_interactive(cmd)

        logger.info("Installed packages", manager=self.name, count=len(packages))

    def list_packages(self) -> set[str]:
        """List the installed packages reported by the list command.

        Returns:
            Set of installed package names

        Raises:
            CommandFailedToRunError: If the list command cannot be spawned
            InvalidOutputEncodingError: If the output is not valid UTF-8
        """
        output = self.system.run(self.list_command)

        try:
            text = output.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidOutputEncodingError(self.list_command.command_string) from e

        return set(text.split())

    def check_for_packages(self, candidates: Iterable[str]) -> bool:
        """Check whether every package in ``candidates`` is installed.

        Args:
            candidates: Package names to look for

        Returns:
            True if all candidates are installed

        Raises:
            CommandFailedToRunError: If the list command cannot be spawned
            InvalidOutputEncodingError: If the output is not valid UTF-8
        """
        return set(candidates) <= self.list_packages()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageManager):
            return NotImplemented
        return (
            self.name == other.name
            and self.install_command == other.install_command
            and self.list_command == other.list_command
        )

    def __repr__(self) -> str:
        return (
            f"PackageManager(name={self.name!r}, "
            f"install_command={self.install_command.command_string!r}, "
            f"list_command={self.list_command.command_string!r})"
        )
