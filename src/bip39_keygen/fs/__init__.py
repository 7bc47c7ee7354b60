"""Reversible filesystem operations.

This module provides an undo log of filesystem mutations with automatic
rollback, used to write a key pair as a single unit.
"""

from bip39_keygen.fs.backup import BackupStore
from bip39_keygen.fs.operations import (
    CreateDir,
    CreateFile,
    Operation,
    RemoveDir,
    RemoveFile,
)
from bip39_keygen.fs.paths import normalize_path
from bip39_keygen.fs.transaction import Transaction, abort_on_rollback_failure

__all__ = [
    "BackupStore",
    "CreateDir",
    "CreateFile",
    "Operation",
    "RemoveDir",
    "RemoveFile",
    "Transaction",
    "abort_on_rollback_failure",
    "normalize_path",
]
