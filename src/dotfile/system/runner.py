"""System command runner implementation."""

import subprocess

from dotfile.core.errors import CommandFailedToRunError, CommandReturnedError
from dotfile.core.logging import get_logger
from dotfile.system.command import Command

logger = get_logger(__name__)


class System:
    """Worker that executes commands on the local machine.

    Every call is synchronous: it blocks until the subprocess exits. There
    is no timeout and no retry.
    """

    def __init__(self, trace: bool = False) -> None:
        """Initialize the System.

        Args:
            trace: Print each command and its captured output
        """
        self._trace = trace

    def run(self, cmd: Command) -> bytes:
        """Execute a command and return its standard output.

        The exit status is logged but not checked: list commands such as
        ``pacman -Qqm`` exit non-zero when they have nothing to report.

        Args:
            cmd: Command to execute

        Returns:
            Captured standard output as bytes

        Raises:
            CommandFailedToRunError: If the command cannot be spawned
        """
        command_string = cmd.command_string
        logger.debug("Starting command", command=command_string)

        try:
            process = subprocess.run(
                cmd.full_command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise CommandFailedToRunError(command_string, e.strerror or str(e)) from e

        if self._trace:
            self._print_trace(command_string, process.stdout.decode("utf-8", errors="replace"))

        logger.debug("Finished command", command=command_string, returncode=process.returncode)

        return process.stdout

    def run_interactive(self, cmd: Command) -> None:
        """Execute a command that inherits stdin, stdout and stderr.

        Used for installs, which may prompt for a password or confirmation.

        Args:
            cmd: Command to execute

        Raises:
            CommandFailedToRunError: If the command cannot be spawned
            CommandReturnedError: If the command exits with a non-zero status
        """
        command_string = cmd.command_string
        logger.debug("Starting interactive command", command=command_string)

        if self._trace:
            self._print_trace(command_string, "")

        try:
            process = subprocess.run(cmd.full_command, check=False)
        except OSError as e:
            raise CommandFailedToRunError(command_string, e.strerror or str(e)) from e

        if process.returncode != 0:
            raise CommandReturnedError(command_string, process.returncode)

        logger.debug("Finished interactive command", command=command_string)

    def _print_trace(self, command: str, output: str) -> None:
        """Print trace output for a command.

        Args:
            command: The command that was executed
            output: The captured output, if any
        """
        print(f"\n\033[1;32;4mCommand:\033[0m \033[1m{command}\033[0m")
        if output:
            print(f"\033[1;32mOutput:\033[0m\n{output}")
