"""Private backup area owned by a single transaction."""

import os
import tempfile
from pathlib import Path

from bip39_keygen.fs.paths import backup_name
from bip39_keygen.utils.debug import debug

BACKUP_PREFIX = "bip39-keygen"


class BackupStore:
    """A uniquely named temporary directory for displaced files.

    The directory is created eagerly on construction and removed, with
    everything still inside it, by ``cleanup()``. Its internal layout is not
    a stable format.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None) -> None:
        """Create the backup directory.

        Args:
            root: Parent directory for the store (defaults to the system
                temporary directory). Placing it on the same filesystem as the
                files being replaced keeps every backup a plain rename.
        """
        self._tmp = tempfile.TemporaryDirectory(prefix=BACKUP_PREFIX, dir=root)
        self.path = Path(self._tmp.name)
        self._closed = False
        debug(f"Created backup store: {self.path}")

    @property
    def closed(self) -> bool:
        return self._closed

    def path_for(self, path: Path, version: int) -> Path:
        """Return the location where ``path`` is parked at ``version``."""
        return self.path / backup_name(path, version)

    def cleanup(self) -> None:
        """Remove the store and any backups left in it. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._tmp.cleanup()
        debug(f"Removed backup store: {self.path}")

    def __enter__(self) -> "BackupStore":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"BackupStore(path={str(self.path)!r}, closed={self._closed})"
