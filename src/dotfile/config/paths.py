"""Locating the dotfile configuration directory."""

import os
from pathlib import Path

APP_NAME = "dotfile"
PAC_DIRNAME = "pac"


def config_root() -> Path:
    """Get the dotfile configuration directory.

    ``DOTFILE_CONFIG_DIR`` wins if set, then ``$XDG_CONFIG_HOME/dotfile``,
    then ``~/.config/dotfile``.

    Returns:
        Path to the configuration directory (not necessarily existing)
    """
    override = os.getenv("DOTFILE_CONFIG_DIR")
    if override:
        return Path(override).expanduser()

    xdg_config_home = os.getenv("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home).expanduser() / APP_NAME

    return Path.home() / ".config" / APP_NAME


def pac_root(root: Path) -> Path:
    """Get the folder holding the package systems."""
    return Path(root) / PAC_DIRNAME
