"""Definition file models for package managers using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field

from dotfile.system.command import Command


class CommandConfig(BaseModel):
    """A command as declared in a package manager file."""

    model_config = ConfigDict(extra="forbid")

    command: str = Field(min_length=1)
    args: list[str] = Field(default_factory=list)

    def to_command(self) -> Command:
        """Convert to a runnable Command."""
        return Command(executable=self.command, args=list(self.args))


class PackageManagerConfig(BaseModel):
    """A single package manager definition."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    install_command: CommandConfig
    list_command: CommandConfig


class PackageManagersConfig(BaseModel):
    """A file holding several package manager definitions."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    package_managers: list[PackageManagerConfig] = Field(
        default_factory=list, alias="package-managers"
    )
