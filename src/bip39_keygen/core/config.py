"""Defaults and environment lookups for key generation."""

from __future__ import annotations

import getpass
import os
import socket
from pathlib import Path

__all__ = ["default_comment", "default_output_dir", "resolve_backup_root"]


def default_output_dir() -> Path:
    """Return ``~/.ssh``, or the current directory if there is no home."""

    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return Path()
    if not str(home):
        return Path()
    return home / ".ssh"


def default_comment() -> str:
    """Return ``user@hostname`` for the public key comment."""

    try:
        user = getpass.getuser()
    except (OSError, KeyError):
        user = "user"
    try:
        host = socket.gethostname() or "localhost"
    except OSError:
        host = "localhost"
    return f"{user}@{host}"


def resolve_backup_root(backup_root: str | Path | None = None) -> Path | None:
    """Resolve where transaction backup stores are created.

    Args:
        backup_root: Optional explicit directory.

    Returns:
        The explicit directory, else ``BIP39_KEYGEN_BACKUP_DIR``, else ``None``
        for the system temporary directory.
    """

    chosen: str | Path | None = backup_root
    env_root = os.getenv("BIP39_KEYGEN_BACKUP_DIR")
    if chosen is None and env_root:
        chosen = env_root
    if chosen is None:
        return None
    return Path(chosen).expanduser()
