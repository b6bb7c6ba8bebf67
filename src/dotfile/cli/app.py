"""Main CLI application for dotfile."""

from typing import Annotated, NoReturn

import typer

from dotfile.cli.commands.pac import (
    load_package_systems,
    run_exclude,
    run_new,
    run_operation,
)
from dotfile.config.paths import config_root
from dotfile.core.errors import DotfileError
from dotfile.core.logging import setup_logging

app = typer.Typer(
    name="dotfile",
    help="Track and replay system configuration",
    no_args_is_help=True,
)

pac_app = typer.Typer(
    help="Manage system packages",
    no_args_is_help=True,
)
app.add_typer(pac_app, name="pac")

NameOption = Annotated[
    str,
    typer.Option(
        "--name",
        "-n",
        help="Package system to use. If not specified, the default is used",
    ),
]
AllOption = Annotated[
    bool,
    typer.Option("--all", "-a", help="Run on every package system"),
]
PackagesArgument = Annotated[
    list[str],
    typer.Argument(help="Package names", show_default=False),
]


def _fail(error: Exception) -> NoReturn:
    """Print an error and exit non-zero."""
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1) from error


def _trace(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("trace"))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    trace: Annotated[
        bool, typer.Option("--trace", help="Print every command and its output")
    ] = False,
) -> None:
    """dotfile - declarative system configuration."""
    setup_logging(verbose=verbose, trace=trace)
    ctx.obj = {"trace": trace}


@app.command("dir")
def show_dir() -> None:
    """Print the location of the configuration directory."""
    typer.echo(str(config_root()))


def _operation(ctx: typer.Context, operation: str, name: str, all_systems: bool) -> None:
    if name and all_systems:
        _fail(ValueError("--name and --all cannot be used together"))
    try:
        run_operation(operation, name=name, all_systems=all_systems, trace=_trace(ctx))
    except (DotfileError, ValueError) as e:
        _fail(e)


@pac_app.command()
def install(ctx: typer.Context, name: NameOption = "", all_systems: AllOption = False) -> None:
    """Install packages from a package list."""
    _operation(ctx, "install", name, all_systems)


@pac_app.command()
def upload(ctx: typer.Context, name: NameOption = "", all_systems: AllOption = False) -> None:
    """Save the installed packages to the package list."""
    _operation(ctx, "upload", name, all_systems)


@pac_app.command()
def sync(ctx: typer.Context, name: NameOption = "", all_systems: AllOption = False) -> None:
    """Install, then upload."""
    _operation(ctx, "sync", name, all_systems)


@pac_app.command()
def exclude(ctx: typer.Context, packages: PackagesArgument, name: NameOption = "") -> None:
    """Exclude packages from upload."""
    try:
        run_exclude(packages, name=name, trace=_trace(ctx))
    except (DotfileError, ValueError) as e:
        _fail(e)


@pac_app.command()
def reinclude(ctx: typer.Context, packages: PackagesArgument, name: NameOption = "") -> None:
    """Reinclude previously excluded packages."""
    try:
        run_exclude(packages, reinclude=True, name=name, trace=_trace(ctx))
    except (DotfileError, ValueError) as e:
        _fail(e)


@pac_app.command("new")
def new(name: Annotated[str, typer.Argument(help="Name of the package system")]) -> None:
    """Create a new package system to fill in."""
    try:
        folder = run_new(name)
    except (DotfileError, OSError) as e:
        _fail(e)
    typer.echo(str(folder))


@pac_app.command("list")
def list_systems(ctx: typer.Context) -> None:
    """List the configured package systems."""
    try:
        package_systems = load_package_systems(config_root(), _trace(ctx))
    except DotfileError as e:
        _fail(e)
    for name in sorted(package_systems):
        typer.echo(name)


if __name__ == "__main__":
    app()
