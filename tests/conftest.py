"""Shared fixtures for dotfile tests."""

from pathlib import Path

import pytest

from dotfile.core.errors import CommandFailedToRunError, CommandReturnedError
from dotfile.system.command import Command

PACMAN_DEFINITION = """\
name: pacman
install_command:
  command: sudo
  args: ["pacman", "-S", "--needed", "--noconfirm"]
list_command:
  command: pacman
  args: ["-Qqen"]
"""

YAY_DEFINITION = """\
name: yay
install_command:
  command: yay
  args: ["-S", "--needed", "--noconfirm"]
list_command:
  command: pacman
  args: ["-Qqem"]
"""


class FakeSystem:
    """Worker that records commands instead of running them.

    Attributes:
        output: Bytes returned by ``run``
        returncode: Exit status simulated by ``run_interactive``
        spawn_error: If set, every command fails to spawn
        calls: Recorded (kind, command) pairs
    """

    def __init__(self, output: bytes = b"", returncode: int = 0) -> None:
        self.output = output
        self.returncode = returncode
        self.spawn_error = False
        self.calls: list[tuple[str, Command]] = []

    def set_installed(self, *packages: str) -> None:
        self.output = "\n".join(packages).encode("utf-8")

    def run(self, cmd: Command) -> bytes:
        self.calls.append(("run", cmd))
        if self.spawn_error:
            raise CommandFailedToRunError(cmd.command_string, "No such file or directory")
        return self.output

    def run_interactive(self, cmd: Command) -> None:
        self.calls.append(("interactive", cmd))
        if self.spawn_error:
            raise CommandFailedToRunError(cmd.command_string, "No such file or directory")
        if self.returncode != 0:
            raise CommandReturnedError(cmd.command_string, self.returncode)

    @property
    def interactive_commands(self) -> list[Command]:
        return [cmd for kind, cmd in self.calls if kind == "interactive"]


@pytest.fixture
def fake_system() -> FakeSystem:
    """Provide a FakeSystem with nothing installed."""
    return FakeSystem()


def make_package_system_folder(
    parent: Path,
    name: str,
    definition: str,
    packages: str | None = "",
    excluded: str | None = "",
) -> Path:
    """Create a package system folder on disk.

    Passing None for ``packages`` or ``excluded`` leaves that file out.
    """
    folder = parent / name
    folder.mkdir(parents=True)
    (folder / "package_manager.yaml").write_text(definition)
    if packages is not None:
        (folder / "installed_packages.txt").write_text(packages)
    if excluded is not None:
        (folder / "excluded_packages.txt").write_text(excluded)
    return folder


@pytest.fixture
def make_folder():
    """Provide the package system folder factory."""
    return make_package_system_folder


@pytest.fixture
def pacman_definition() -> str:
    """Provide a valid pacman definition file."""
    return PACMAN_DEFINITION


@pytest.fixture
def yay_definition() -> str:
    """Provide a valid yay definition file."""
    return YAY_DEFINITION
