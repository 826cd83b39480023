"""
psswrdmngr Command Line Interface - Main entry point.
"""
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Optional

import typer
from rich import print

from cli.commands import status
from cli.prompts import TerminalPrompter
from core.encryption.key_manager import KeyManager
from core.exceptions import EntryNotFoundError, VaultError
from core.utils import console
from core.vault.request import Request
from core.vault.resolver import CommandResolver
from core.vault.service import VaultService

app = typer.Typer(
    name="psswrdmngr",
    help="Store and manage encrypted passwords on your device.",
    no_args_is_help=False,
)

app.add_typer(status.app, name="status", help="Show key and vault file locations")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    add: bool = typer.Option(False, "--add", "-a", help="Add password"),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove password"),
    get: bool = typer.Option(
        False, "--get", "-g", help="Retrieve password for application (default option)"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", metavar="APPLICATION NAME", help="Name of application"
    ),
    username: Optional[str] = typer.Option(
        None, "--username", "-u", metavar="USERNAME", help="Username for application"
    ),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", metavar="PASSWORD", help="Password to be entered"
    ),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", metavar="FILE", help="Select location of password on disk"
    ),
):
    """
    🔐 psswrdmngr - Encrypted credentials on your device

    Missing values are asked for interactively. Run without any option to
    pick the action from a menu.
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        request = Request.from_flags(
            add=add,
            remove=remove,
            get=get,
            name=name,
            username=username,
            password=password,
            file=file,
        )
        request = CommandResolver(TerminalPrompter()).resolve(request)

        cipher = KeyManager().cipher()
        lines = VaultService(cipher).execute(request)
    except EntryNotFoundError as e:
        console.error(str(e))
        raise typer.Exit(code=1)
    except VaultError as e:
        console.error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=1)

    for line in lines:
        typer.echo(line)


@app.command("version")
def version():
    """
    Show psswrdmngr version information.
    """
    try:
        current = package_version("psswrdmngr")
    except PackageNotFoundError:
        current = "development"

    print(f"[blue]🔐 psswrdmngr[/blue] version [green]{current}[/green]")


if __name__ == "__main__":
    app()
