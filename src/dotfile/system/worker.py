"""Worker protocol for running package manager commands."""

from typing import Protocol, runtime_checkable

from dotfile.system.command import Command


@runtime_checkable
class Worker(Protocol):
    """Protocol for something that can execute commands.

    This allows the real subprocess-backed System to be swapped for a fake
    in tests.
    """

    def run(self, cmd: Command) -> bytes:
        """Execute a command and capture its standard output.

        Args:
            cmd: Command to execute

        Returns:
            Captured standard output as bytes

        Raises:
            CommandFailedToRunError: If the command cannot be spawned
        """
        ...

    def run_interactive(self, cmd: Command) -> None:
        """Execute a command attached to the caller's terminal.

        Args:
            cmd: Command to execute

        Raises:
            CommandFailedToRunError: If the command cannot be spawned
            CommandReturnedError: If the command exits with a non-zero status
        """
        ...
