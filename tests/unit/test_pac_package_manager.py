"""Unit tests for PackageManager."""

import pytest

from dotfile.core.errors import (
    CommandFailedToRunError,
    CommandReturnedError,
    InvalidOutputEncodingError,
)
from dotfile.pac.models import CommandConfig, PackageManagerConfig
from dotfile.pac.package_manager import PackageManager
from dotfile.system.command import Command
from dotfile.system.runner import System


@pytest.fixture
def pacman(fake_system) -> PackageManager:
    """Create a pacman PackageManager backed by a fake system."""
    return PackageManager(
        name="pacman",
        install_command=Command("sudo", ["pacman", "-S", "--needed"]),
        list_command=Command("pacman", ["-Qqen"]),
        system=fake_system,
    )


class TestPackageManagerInit:
    """Tests for building a PackageManager."""

    def test_defaults_to_real_system(self) -> None:
        """Test that a System is used when no worker is given."""
        manager = PackageManager("apt", Command("apt-get", ["install"]), Command("apt-mark"))
        assert isinstance(manager.system, System)

    def test_from_config(self, fake_system) -> None:
        """Test building from a validated definition."""
        config = PackageManagerConfig(
            name="pacman",
            install_command=CommandConfig(command="sudo", args=["pacman", "-S", "--needed"]),
            list_command=CommandConfig(command="pacman", args=["-Qqen"]),
        )
        manager = PackageManager.from_config(config, fake_system)

        assert manager.name == "pacman"
        assert manager.install_command == Command("sudo", ["pacman", "-S", "--needed"])
        assert manager.list_command == Command("pacman", ["-Qqen"])
        assert manager.system is fake_system

    def test_equality(self, fake_system) -> None:
        """Test that managers with the same commands are equal."""
        first = PackageManager("yay", Command("yay", ["-S"]), Command("pacman", ["-Qqm"]))
        second = PackageManager(
            "yay", Command("yay", ["-S"]), Command("pacman", ["-Qqm"]), fake_system
        )
        third = PackageManager("yay", Command("yay", ["-S"]), Command("pacman", ["-Qq"]))
        assert first == second
        assert first != third

    def test_repr(self, pacman: PackageManager) -> None:
        """Test that repr shows the commands."""
        assert "sudo pacman -S --needed" in repr(pacman)


class TestInstall:
    """Tests for PackageManager.install."""

    def test_appends_packages(self, pacman: PackageManager, fake_system) -> None:
        """Test that package names are appended to the install command."""
        pacman.install(["nano"])
        assert fake_system.interactive_commands == [
            Command("sudo", ["pacman", "-S", "--needed", "nano"])
        ]

    def test_multiple_installs_do_not_accumulate(self, pacman: PackageManager, fake_system) -> None:
        """Test that each install starts from the configured arguments."""
        pacman.install(["nano"])
        pacman.install(["vim", "git"])
        assert fake_system.interactive_commands[1].full_command == [
            "sudo", "pacman", "-S", "--needed", "vim", "git"
        ]

    def test_nonzero_exit(self, pacman: PackageManager, fake_system) -> None:
        """Test that a failing install raises CommandReturnedError."""
        fake_system.returncode = 1
        with pytest.raises(CommandReturnedError):
            pacman.install(["nano"])

    def test_spawn_failure(self, pacman: PackageManager, fake_system) -> None:
        """Test that an unspawnable install raises CommandFailedToRunError."""
        fake_system.spawn_error = True
        with pytest.raises(CommandFailedToRunError):
            pacman.install(["nano"])


class TestListPackages:
    """Tests for PackageManager.list_packages."""

    def test_splits_on_any_whitespace(self, pacman: PackageManager, fake_system) -> None:
        """Test that spaces, tabs and newlines all separate names."""
        fake_system.output = b"nano vim\tgit\n\ncurl\r\n"
        assert pacman.list_packages() == {"nano", "vim", "git", "curl"}

    def test_runs_list_command(self, pacman: PackageManager, fake_system) -> None:
        """Test that the list command is run without extra arguments."""
        pacman.list_packages()
        assert fake_system.calls == [("run", Command("pacman", ["-Qqen"]))]

    def test_empty_output(self, pacman: PackageManager, fake_system) -> None:
        """Test that no output means no packages."""
        assert pacman.list_packages() == set()

    def test_invalid_encoding(self, pacman: PackageManager, fake_system) -> None:
        """Test that non-UTF-8 output raises InvalidOutputEncodingError."""
        fake_system.output = b"nano \xff\xfe"
        with pytest.raises(InvalidOutputEncodingError) as exc_info:
            pacman.list_packages()
        assert exc_info.value.command == "pacman -Qqen"

    def test_spawn_failure(self, pacman: PackageManager, fake_system) -> None:
        """Test that an unspawnable list raises CommandFailedToRunError."""
        fake_system.spawn_error = True
        with pytest.raises(CommandFailedToRunError):
            pacman.list_packages()


class TestCheckForPackages:
    """Tests for PackageManager.check_for_packages."""

    def test_all_installed(self, pacman: PackageManager, fake_system) -> None:
        """Test that True is returned when every candidate is installed."""
        fake_system.set_installed("nano", "trash-cli", "git")
        assert pacman.check_for_packages(["nano", "trash-cli"]) is True

    def test_some_missing(self, pacman: PackageManager, fake_system) -> None:
        """Test that False is returned when any candidate is missing."""
        fake_system.set_installed("nano")
        assert pacman.check_for_packages(["nano", "trash-cli"]) is False

    def test_exact_match_only(self, pacman: PackageManager, fake_system) -> None:
        """Test that a name is not matched by a longer installed name."""
        fake_system.set_installed("nano-syntax-highlighting")
        assert pacman.check_for_packages(["nano"]) is False

    def test_propagates_errors(self, pacman: PackageManager, fake_system) -> None:
        """Test that list errors are propagated unchanged."""
        fake_system.output = b"\xff"
        with pytest.raises(InvalidOutputEncodingError):
            pacman.check_for_packages(["nano"])
