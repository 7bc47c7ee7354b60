"""CLI entrypoints for bip39-keygen."""

from bip39_keygen.cli.main import app

__all__ = ["app"]
