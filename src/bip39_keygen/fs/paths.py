"""Path utilities for transactional filesystem operations.

This module provides path normalization, backup naming and a rename helper
that tolerates the backup store living on a different filesystem.
"""

import errno
import os
import shutil
from pathlib import Path

from bip39_keygen.utils.debug import debug

#: Literal marker inserted between a file name and the version counter
BACKUP_MARKER = ".backup."


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Normalize a path for consistent handling.

    Relative paths are anchored at the current working directory so the
    operation log stays valid if the directory changes before rollback.
    Symlinks are deliberately not resolved: removing a symlink must move the
    link itself, not its target.

    Args:
        path: Path to normalize

    Returns:
        Absolute, lexically normalized path
    """
    return Path(os.path.abspath(os.fspath(path)))


def backup_name(path: Path, version: int) -> str:
    """Build the file name under which ``path`` is parked in a backup store.

    Args:
        path: Path being backed up
        version: Transaction version at the time of the backup

    Returns:
        ``<file name>.backup.<version>``

    Raises:
        ValueError: If the path has no file name component (e.g. ``/``)
    """
    if not path.name:
        raise ValueError(f"{path} should have a file name")
    return f"{path.name}{BACKUP_MARKER}{version}"


def move_path(src: Path, dst: Path) -> None:
    """Rename ``src`` to ``dst``, falling back to a copy across devices.

    A plain rename is atomic and is always tried first. When the two paths
    are on different filesystems (EXDEV) the entry is moved with
    ``shutil.move``, which copies files, directory trees and symlinks before
    removing the source.

    Args:
        src: Existing file, symlink or directory
        dst: Destination path, which must not exist

    Raises:
        OSError: If neither rename nor copy succeeds
    """
    try:
        os.rename(src, dst)
        debug(f"Renamed: {src} -> {dst}")
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        try:
            shutil.move(str(src), str(dst))
        except OSError:
            # Drop a partial file copy only while the source is still intact
            if os.path.lexists(src) and not dst.is_dir():
                dst.unlink(missing_ok=True)
            raise
        debug(f"Cross-device move: {src} -> {dst}")
