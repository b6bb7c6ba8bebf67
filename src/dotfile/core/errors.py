"""Errors raised by dotfile.

Every error is terminal for the operation that raised it. The CLI prints
``str(error)`` and exits non-zero; callers that need more can inspect the
attributes each subclass carries.
"""

from collections.abc import Iterable
from pathlib import Path


class DotfileError(Exception):
    """Base class for all dotfile errors."""


class FileUnreadableError(DotfileError):
    """A package list or definition file is missing or cannot be read.

    Attributes:
        path: The file that could not be read
    """

    what = "file"

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to read {self.what}: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PackagesFileUnreadableError(FileUnreadableError):
    """The desired-packages file cannot be read."""

    what = "packages file"


class ExcludedFileUnreadableError(FileUnreadableError):
    """The excluded-packages file cannot be read."""

    what = "excluded packages file"


class InvalidDefinitionFormatError(DotfileError):
    """A package manager definition file is malformed.

    Attributes:
        path: The definition file, if the definition came from disk
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"Invalid package manager file {path}: {message}"
        super().__init__(message)


class DuplicateManagerNameError(DotfileError):
    """A multi-entry definition file declares the same name more than once.

    Attributes:
        names: The duplicated names, sorted
    """

    def __init__(self, names: Iterable[str], path: Path | None = None) -> None:
        self.names = sorted(set(names))
        self.path = path
        message = f"Duplicate package manager names: {', '.join(self.names)}"
        if path is not None:
            message = f"{message} (in {path})"
        super().__init__(message)


class NameMismatchError(DotfileError):
    """A definition's ``name`` does not match the folder it lives in.

    Attributes:
        folder_name: The name derived from the folder
        declared_name: The name declared in the definition file
    """

    def __init__(self, folder_name: str, declared_name: str, path: Path) -> None:
        self.folder_name = folder_name
        self.declared_name = declared_name
        self.path = path
        super().__init__(
            f"Package manager file {path} declares name '{declared_name}' "
            f"but its folder is named '{folder_name}'"
        )


class NoPackageManagerFileError(DotfileError):
    """A package system folder has no definition file.

    Attributes:
        folder: The folder that was searched
    """

    def __init__(self, folder: Path, hint: str = "") -> None:
        self.folder = Path(folder)
        message = f"No package manager file found in {self.folder}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class CommandFailedToRunError(DotfileError):
    """A subprocess could not be spawned.

    Attributes:
        command: The shell-escaped command line
    """

    def __init__(self, command: str, reason: str = "") -> None:
        self.command = command
        message = f"Could not run command: {command}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CommandReturnedError(DotfileError):
    """A subprocess ran but exited with a non-zero status.

    Attributes:
        command: The shell-escaped command line
        returncode: Exit code from the command
    """

    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command failed with exit code {returncode}: {command}")


class InvalidOutputEncodingError(DotfileError):
    """Captured command output is not valid UTF-8 text.

    Attributes:
        command: The shell-escaped command line
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Command returned output that is not valid text: {command}")


class FileCreateFailedError(DotfileError):
    """The desired-packages file cannot be created or replaced.

    Attributes:
        path: The file that could not be created
    """

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to create or truncate packages file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class WriteFailedError(DotfileError):
    """Writing the desired-packages file failed partway.

    Attributes:
        path: The file that could not be written
    """

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to write to packages file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownPackageSystemError(DotfileError):
    """A requested package system is not configured.

    Attributes:
        name: The requested name, empty when none could be chosen
        available: Names of the configured package systems
    """

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = sorted(available)
        choices = ", ".join(self.available) or "none"
        if name:
            message = f"Unknown package system '{name}'. Available: {choices}"
        else:
            message = f"No package system specified; use --name. Available: {choices}"
        super().__init__(message)


class PackageSystemExistsError(DotfileError):
    """Scaffolding refused to overwrite an existing package system folder.

    Attributes:
        folder: The folder that already exists
    """

    def __init__(self, folder: Path) -> None:
        self.folder = Path(folder)
        super().__init__(f"Package system folder already exists: {self.folder}")


class InvalidPackageSystemNameError(DotfileError):
    """A package system name cannot be used as a single folder name.

    Attributes:
        name: The rejected name
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid package system name {name!r}: must be a single folder name")
