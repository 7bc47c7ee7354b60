"""Undo records for the filesystem transaction log.

Each record names the paths a single mutation touched and knows how to
reverse it. Records never hold file content: displaced content lives in the
transaction's backup store until the record is undone or discarded.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from bip39_keygen.fs.paths import move_path
from bip39_keygen.utils.debug import debug


@dataclass(frozen=True, slots=True)
class CreateDir:
    """A directory created by the transaction."""

    path: Path

    def undo(self) -> None:
        os.rmdir(self.path)
        debug(f"Removed directory: {self.path}")

    def describe(self) -> str:
        return f"[CREATE_DIR] {self.path}"


@dataclass(frozen=True, slots=True)
class CreateFile:
    """A file created (or recreated after a backup) by the transaction."""

    path: Path

    def undo(self) -> None:
        os.unlink(self.path)
        debug(f"Removed file: {self.path}")

    def describe(self) -> str:
        return f"[CREATE_FILE] {self.path}"


@dataclass(frozen=True, slots=True)
class RemoveFile:
    """A file or symlink moved into the backup store."""

    removed: Path
    backup: Path

    def undo(self) -> None:
        move_path(self.backup, self.removed)
        debug(f"Restored file: {self.backup} -> {self.removed}")

    def describe(self) -> str:
        return f"[REMOVE_FILE] {self.removed} (backup: {self.backup})"


@dataclass(frozen=True, slots=True)
class RemoveDir:
    """A directory subtree moved into the backup store."""

    removed: Path
    backup: Path

    def undo(self) -> None:
        move_path(self.backup, self.removed)
        debug(f"Restored directory: {self.backup} -> {self.removed}")

    def describe(self) -> str:
        return f"[REMOVE_DIR] {self.removed} (backup: {self.backup})"


Operation = CreateDir | CreateFile | RemoveFile | RemoveDir
