"""Reversible filesystem transactions.

A :class:`Transaction` performs filesystem mutations immediately and records
an undo entry for each one. Unless :meth:`Transaction.commit` is called, the
mutations are replayed backwards when the transaction is closed, so an
exception anywhere inside ``with Transaction() as tx:`` restores every path
it touched::

    with Transaction() as tx:
        tx.write_file(public_path, public_key)
        tx.write_file(private_path, private_key, mode=0o600)
        tx.commit()
"""

import os
import warnings
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from bip39_keygen.core.errors import NotADirectory, NotAFileOrSymlink, RollbackFailed
from bip39_keygen.fs.backup import BackupStore
from bip39_keygen.fs.operations import (
    CreateDir,
    CreateFile,
    Operation,
    RemoveDir,
    RemoveFile,
)
from bip39_keygen.fs.paths import move_path, normalize_path
from bip39_keygen.utils.debug import debug

FaultHandler = Callable[[RollbackFailed], None]

PathArg = str | os.PathLike[str]


def abort_on_rollback_failure(error: RollbackFailed) -> None:
    """Default fault handler: log the failure and abort the process.

    A rollback that fails while a transaction is being closed cannot be
    reported to the code that opened it, and the filesystem no longer matches
    what any caller believes happened.
    """
    structlog.get_logger().critical(
        "transaction.rollback_failed",
        operation=error.operation.describe(),
        version=error.version,
        error=str(error.cause),
    )
    os.abort()


class Transaction:
    """An ordered, undoable log of filesystem mutations.

    The transaction starts open. ``commit()`` moves it to the committed state,
    which is terminal: closing a committed transaction keeps every change,
    closing an open one rolls everything back. The backup store is removed on
    close in both cases. A transaction garbage-collected without being closed
    emits a ``ResourceWarning`` and is closed then.
    """

    def __init__(
        self,
        backup_store: BackupStore | None = None,
        *,
        fault_handler: FaultHandler | None = None,
    ) -> None:
        """Initialize a transaction.

        Args:
            backup_store: Store for displaced files. A fresh one in the system
                temporary directory is created when omitted. The transaction
                takes ownership and removes it on close.
            fault_handler: Called with the error if rollback fails while the
                transaction is being closed. Defaults to
                :func:`abort_on_rollback_failure`.
        """
        self._backup_store = backup_store if backup_store is not None else BackupStore()
        self._fault_handler = fault_handler or abort_on_rollback_failure
        self._operations: list[Operation] = []
        self._committed = False
        self._closed = False

    @property
    def version(self) -> int:
        """Number of logged operations; the checkpoint for ``rollback_to``."""
        return len(self._operations)

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    @property
    def backup_dir(self) -> Path:
        return self._backup_store.path

    def commit(self) -> None:
        """Make all logged changes permanent. Idempotent."""
        if not self._committed:
            debug(f"Committed transaction at version {self.version}")
        self._committed = True

    def rollback_to(self, version: int) -> None:
        """Undo logged operations, newest first, until ``version`` is reached.

        Does nothing once the transaction is committed.

        Args:
            version: Checkpoint previously read from :attr:`version`

        Raises:
            ValueError: If ``version`` is negative
            RollbackFailed: If an undo step fails. The failed operation stays
                on the log and the transaction must not be used further.
        """
        if version < 0:
            raise ValueError(f"version must be non-negative, got {version}")
        if self._committed:
            return

        while self._operations and self.version > version:
            op = self._operations[-1]
            try:
                op.undo()
            except OSError as e:
                raise RollbackFailed(op, self.version, e) from e
            self._operations.pop()

    def create_dir(self, path: PathArg) -> None:
        """Create a single directory; its parent must already exist.

        Raises:
            FileExistsError: If ``path`` already exists
            FileNotFoundError: If the parent directory is missing
        """
        self._ensure_open()
        path = normalize_path(path)
        os.mkdir(path)
        self._record(CreateDir(path))
        debug(f"Created directory: {path}")

    def create_dir_all(self, path: PathArg) -> None:
        """Create ``path`` and every missing ancestor, shallowest first.

        Each created directory is logged separately, so a failure partway
        leaves exactly the directories created so far on the log. Does
        nothing if ``path`` already exists.
        """
        self._ensure_open()
        path = normalize_path(path)

        missing: list[Path] = []
        current = path
        while not os.path.lexists(current):
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent

        for directory in reversed(missing):
            self.create_dir(directory)

    def create_file(self, path: PathArg, *, mode: int = 0o666) -> None:
        """Create an empty file, backing up any file already at ``path``."""
        self.write_file(path, b"", mode=mode)

    def write_file(
        self, path: PathArg, contents: bytes | str, *, mode: int = 0o666
    ) -> None:
        """Write ``contents`` to a new file at ``path``.

        Missing parent directories are created first. An existing file or
        symlink at ``path`` is moved to the backup store (logged as its own
        step) and a new file is created in its place, so the original is
        restored on rollback. If the new content cannot be written, every
        step of this call is undone before the error is raised.

        Args:
            path: File to write
            contents: File content; ``str`` is encoded as UTF-8
            mode: Permission bits for the new file (subject to umask)

        Raises:
            NotAFileOrSymlink: If ``path`` exists but is a directory
            OSError: If a directory, the backup or the file cannot be created
        """
        self._ensure_open()
        path = normalize_path(path)
        data = contents.encode("utf-8") if isinstance(contents, str) else contents

        checkpoint = self.version
        self.create_dir_all(path.parent)

        flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
        while True:
            try:
                fd = os.open(path, flags, mode)
                break
            except FileExistsError:
                self.remove_file(path)

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        except OSError:
            # The new file was never logged
            try:
                os.unlink(path)
            except OSError as cleanup_error:
                debug(f"Failed to remove partial file {path}: {cleanup_error}")
            self.rollback_to(checkpoint)
            raise

        self._record(CreateFile(path))
        debug(f"Wrote file: {path} ({len(data)} bytes)")

    def remove_file(self, path: PathArg) -> None:
        """Move a file or symlink into the backup store.

        Raises:
            NotAFileOrSymlink: If ``path`` is missing or is a directory
        """
        self._ensure_open()
        path = normalize_path(path)
        if not path.is_file() and not path.is_symlink():
            raise NotAFileOrSymlink(path)

        backup = self.backup_path(path)
        move_path(path, backup)
        self._record(RemoveFile(removed=path, backup=backup))
        debug(f"Backed up file: {path} -> {backup}")

    def remove_dir(self, path: PathArg) -> None:
        """Move a directory, with its whole subtree, into the backup store.

        Raises:
            NotADirectory: If ``path`` is missing or is not a directory
        """
        self._ensure_open()
        path = normalize_path(path)
        if not path.is_dir():
            raise NotADirectory(path)

        backup = self.backup_path(path)
        move_path(path, backup)
        self._record(RemoveDir(removed=path, backup=backup))
        debug(f"Backed up directory: {path} -> {backup}")

    def backup_path(self, path: PathArg) -> Path:
        """Return the backup location ``path`` would be moved to right now."""
        return self._backup_store.path_for(normalize_path(path), self.version)

    def close(self) -> None:
        """Roll back unless committed, then remove the backup store.

        Rollback failures go to the fault handler instead of being raised.
        Calling ``close()`` more than once has no further effect.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if not self._committed:
                try:
                    self.rollback_to(0)
                except RollbackFailed as e:
                    self._fault_handler(e)
                else:
                    debug("Rolled back transaction")
        finally:
            self._backup_store.cleanup()

    def _record(self, op: Operation) -> None:
        self._operations.append(op)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("transaction is closed")

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __del__(self) -> None:
        # An unclosed transaction is rolled back before its backup store goes away
        if getattr(self, "_closed", True):
            return
        warnings.warn(f"unclosed transaction {self!r}", ResourceWarning, source=self)
        self.close()

    def __repr__(self) -> str:
        return (
            f"Transaction(version={self.version}, "
            f"committed={self._committed}, "
            f"closed={self._closed})"
        )
