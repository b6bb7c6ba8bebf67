"""Command records for subprocess execution."""

import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Command:
    """A program plus its static arguments.

    Attributes:
        executable: The program to run (looked up on PATH)
        args: Arguments always passed to the program
    """

    executable: str
    args: list[str] = field(default_factory=list)

    def with_args(self, extra: Iterable[str]) -> "Command":
        """Return a copy with ``extra`` appended as trailing arguments.

        Args:
            extra: Dynamic arguments, e.g. package names

        Returns:
            New Command; this one is left untouched
        """
        return Command(executable=self.executable, args=[*self.args, *extra])

    @property
    def full_command(self) -> list[str]:
        """The argv list handed to the subprocess."""
        return [self.executable, *self.args]

    @property
    def command_string(self) -> str:
        """Shell-escaped form of the command, for messages and logs."""
        return shlex.join(self.full_command)
