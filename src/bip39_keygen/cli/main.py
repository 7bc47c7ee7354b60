"""Top-level ``bip39-keygen`` command."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from bip39_keygen.cli.ssh import ssh
from bip39_keygen.version import version_string

app: TyperType = typer.Typer(
    name="bip39-keygen",
    help="Deterministically derive keys from a BIP39 mnemonic.",
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(version_string())
        raise typer.Exit()


VersionFlag = Annotated[
    bool,
    typer.Option(
        "--version",
        "-V",
        callback=_print_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
]


def main(version: VersionFlag = False) -> None:
    """Deterministically derive keys from a BIP39 mnemonic."""


app.callback()(main)
app.command("ssh")(ssh)
