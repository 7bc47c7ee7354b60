"""CLI command for generating an SSH key pair from a BIP39 mnemonic."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")

from rich.console import Console

from bip39_keygen.core.config import default_comment, default_output_dir
from bip39_keygen.core.errors import KeygenError
from bip39_keygen.core.keygen import generate_ssh_key
from bip39_keygen.core.keys import generate_mnemonic, parse_mnemonic
from bip39_keygen.core.schemas import KeyType, SshKeyRequest

console = Console(highlight=False)


KeyTypeOption = Annotated[
    KeyType,
    typer.Option(
        "--key-type",
        "-t",
        envvar="KEY_TYPE",
        case_sensitive=False,
        help="Specify the type of key you want to generate.",
    ),
]
NoPassphraseFlag = Annotated[
    bool,
    typer.Option(
        "--no-passphrase",
        "-N",
        envvar="NO_PASSPHRASE",
        help="Specify an empty passphrase.",
    ),
]
PassphraseOption = Annotated[
    str,
    typer.Option(
        "--passphrase",
        "-p",
        envvar="PASSPHRASE",
        help="Specify the passphrase, if empty it will be prompted.",
    ),
]
OutputDirOption = Annotated[
    Path | None,
    typer.Option(
        "--output-dir",
        "-o",
        envvar="OUTPUT_DIR",
        help="Directory in which to save the key (default: ~/.ssh).",
    ),
]
OutputNameOption = Annotated[
    str,
    typer.Option(
        "--output-name",
        "-f",
        envvar="OUTPUT_NAME",
        help="File name in which to save the key (default: id_<key type>).",
    ),
]
MnemonicOption = Annotated[
    str,
    typer.Option(
        "--mnemonic",
        "-m",
        envvar="MNEMONIC",
        help="The 12 words mnemonic, split by spaces. Generated if not given.",
    ),
]
CommentOption = Annotated[
    str | None,
    typer.Option(
        "--comment",
        "-C",
        envvar="COMMENT",
        help="Comment for the key (default: user@hostname).",
    ),
]


def ssh(
    key_type: KeyTypeOption,
    no_passphrase: NoPassphraseFlag = False,
    passphrase: PassphraseOption = "",
    output_dir: OutputDirOption = None,
    output_name: OutputNameOption = "",
    mnemonic: MnemonicOption = "",
    comment: CommentOption = None,
) -> None:
    """Generates an SSH key pair."""

    try:
        phrase = parse_mnemonic(mnemonic) if mnemonic else prompt_generate_mnemonic()
        if no_passphrase:
            secret = prompt_passphrase("")
        else:
            secret = prompt_passphrase(passphrase or None)
        request = SshKeyRequest(
            key_type=key_type,
            output_dir=output_dir if output_dir is not None else default_output_dir(),
            output_name=output_name,
            comment=comment if comment is not None else default_comment(),
        )
        result = generate_ssh_key(
            request,
            phrase,
            secret,
            confirm_overwrite=prompt_overwrite_path,
        )
    except (KeygenError, OSError, ValueError) as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    for line in (
        f"Your public key has been saved in {result.public_key_path}",
        f"Your private key has been saved in {result.private_key_path}",
        f"The key fingerprint is: {result.fingerprint}",
    ):
        console.print(line, soft_wrap=True)


def prompt_passphrase(passphrase: str | None) -> str:
    """Return ``passphrase``, prompting with hidden input when it is None."""

    if passphrase is not None:
        return passphrase
    return typer.prompt(
        "Enter passphrase (empty for no passphrase)",
        default="",
        hide_input=True,
        show_default=False,
    )


def prompt_overwrite_path(path: Path) -> bool:
    return typer.confirm(f"{path} already exists, overwrite?", default=False)


def prompt_generate_mnemonic() -> str:
    """Generate mnemonics until the user accepts one."""

    console.print("No mnemonic provided, generating one for you")
    while True:
        phrase = generate_mnemonic(12)
        console.print("Your 12 words mnemonic is:")
        console.print(f"  [bold]{phrase}[/bold]", soft_wrap=True)
        console.print("Please write it down and store it in a safe place")
        regenerate = typer.confirm(
            "Do you want to regenerate a new mnemonic?", default=False
        )
        if not regenerate:
            return phrase
