import typer
from pathlib import Path
from rich import print
from typing import Optional

from core.config import Config
from core.exceptions import VaultError
from core.utils import console

app = typer.Typer()


@app.callback(invoke_without_command=True)
def status(
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Vault file to inspect instead of the default"
    ),
):
    """
    Show where the key and the vault live and whether they exist.
    """
    try:
        key_path = Config.key_path()
        vault_path = Config.vault_path(file)
    except VaultError as e:
        console.error(str(e))
        raise typer.Exit(code=1)

    print("[blue]psswrdmngr Status[/blue]")
    _report("Encryption key", key_path, "Will be generated on first use.")
    _report("Vault file", vault_path, "Will be created on first use.")


def _report(label: str, path: Path, hint: str) -> None:
    if path.exists():
        print(f"[green]{label}:[/green] Found at {path}")
    else:
        print(f"[yellow]{label}:[/yellow] Not found at {path}. {hint}")
