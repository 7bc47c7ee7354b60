"""Custom exceptions for bip39-keygen.

Filesystem failures are surfaced as the ``OSError`` raised by the failing
call. Everything defined here covers the conditions that are not plain
filesystem errors: path-type preconditions, failed rollbacks and rejected
user input.
"""

from pathlib import Path
from typing import Any


class KeygenError(Exception):
    """Base exception for all bip39-keygen errors.

    All custom exceptions inherit from this base class so callers (the CLI in
    particular) can report them uniformly.
    """

    pass


class PreconditionViolation(KeygenError):
    """Raised when a path does not have the type an operation requires.

    Detected before any mutation is attempted, so the filesystem is left
    untouched.

    Attributes:
        path: The offending path
        expected: Human-readable description of the required path type
    """

    def __init__(self, path: Path, expected: str) -> None:
        self.path = path
        self.expected = expected
        super().__init__(f"{path} not {expected}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self.path)!r})"


class NotAFileOrSymlink(PreconditionViolation):
    """Raised by ``remove_file`` when the path is not a file or symlink."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "a file or symlink")


class NotADirectory(PreconditionViolation):
    """Raised by ``remove_dir`` when the path is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "a directory")


class RollbackFailed(KeygenError):
    """Raised when the inverse of a logged operation fails.

    The transaction that raised it is left partially rolled back and must not
    be used again.

    Attributes:
        operation: The operation whose inverse failed
        version: Transaction version at the time of the failure
        cause: The underlying filesystem error
    """

    def __init__(self, operation: Any, version: int, cause: OSError) -> None:
        self.operation = operation
        self.version = version
        self.cause = cause
        super().__init__(
            f"failed to rollback {operation.describe()} at version {version}: {cause}"
        )

    def __repr__(self) -> str:
        return (
            f"RollbackFailed(operation={self.operation!r}, "
            f"version={self.version}, "
            f"cause={self.cause!r})"
        )


class InvalidMnemonic(KeygenError):
    """Raised when a mnemonic phrase is not a valid English BIP39 phrase.

    Attributes:
        reason: Why the phrase was rejected
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid mnemonic: {reason}")


class OverwriteDeclined(KeygenError):
    """Raised when the user refuses to overwrite an existing key file.

    Attributes:
        path: The existing file that would have been overwritten
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Aborted: {path} already exists")
