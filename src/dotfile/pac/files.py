"""Reading and writing package list files.

A package list is plain text with one package name per line. Blank lines
are ignored on read and the list is treated as a set.
"""

import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

from dotfile.core.errors import FileCreateFailedError, WriteFailedError


def read_package_set(path: Path) -> set[str]:
    """Read a package list file into a set of names.

    Args:
        path: File to read

    Returns:
        Set of package names, without blank lines

    Raises:
        OSError: If the file cannot be opened
        UnicodeDecodeError: If the file is not UTF-8 text
    """
    with Path(path).open("r", encoding="utf-8") as f:
        return {line.strip() for line in f if line.strip()}


def write_package_set(path: Path, packages: Iterable[str]) -> None:
    """Replace a package list file with ``packages``, one per line, sorted.

    The list is written to a temporary file next to the real file which
    then replaces it, so a failure never leaves a truncated list behind.
    A symlinked list file is followed and its target is replaced; the
    replaced file keeps its permission bits.

    Args:
        path: File to write
        packages: Package names to write

    Raises:
        FileCreateFailedError: If the temporary file cannot be created
            or cannot replace ``path``
        WriteFailedError: If writing the temporary file fails
    """
    path = Path(path)
    target = path.resolve()

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", text=True
        )
    except OSError as e:
        raise FileCreateFailedError(path, e.strerror or str(e)) from e

    try:
        try:
            f = os.fdopen(fd, "w", encoding="utf-8")
        except OSError as e:
            os.close(fd)
            raise WriteFailedError(path, e.strerror or str(e)) from e

        try:
            with f:
                for package in sorted(set(packages)):
                    f.write(f"{package}\n")
        except OSError as e:
            raise WriteFailedError(path, e.strerror or str(e)) from e

        try:
            _copy_mode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as e:
            raise FileCreateFailedError(path, e.strerror or str(e)) from e
    except (FileCreateFailedError, WriteFailedError):
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _copy_mode(target: Path, tmp_name: str) -> None:
    """Give the temporary file the mode ``target`` has or would be created with."""
    if target.exists():
        shutil.copymode(target, tmp_name)
        return

    umask = os.umask(0)
    os.umask(umask)
    os.chmod(tmp_name, 0o666 & ~umask)
