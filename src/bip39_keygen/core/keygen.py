"""Key-generation workflow: derive a key pair and write it as one unit.

The public and private key files are written inside a single
:class:`~bip39_keygen.fs.transaction.Transaction`. If anything fails before
the commit, both files, any key they replaced and any directory created for
them are restored to their state before the run.
"""

import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import structlog

from bip39_keygen.core.config import resolve_backup_root
from bip39_keygen.core.errors import OverwriteDeclined
from bip39_keygen.core.keys import (
    derive_ed25519_keypair,
    derive_seed,
    encode_openssh,
    fingerprint,
)
from bip39_keygen.core.schemas import KeyArtifact, KeygenResult, SshKeyRequest
from bip39_keygen.fs.backup import BackupStore
from bip39_keygen.fs.transaction import FaultHandler, Transaction
from bip39_keygen.utils.debug import debug

ConfirmOverwrite = Callable[[Path], bool]

PUBLIC_KEY_MODE = 0o644
PRIVATE_KEY_MODE = 0o600


def build_artifacts(
    request: SshKeyRequest, phrase: str, passphrase: str = ""
) -> tuple[KeyArtifact, KeyArtifact]:
    """Derive the key pair for ``phrase`` and describe the files to write.

    Args:
        request: Validated key options
        phrase: Valid BIP39 mnemonic
        passphrase: BIP39 passphrase mixed into the seed

    Returns:
        ``(public, private)`` artifacts, in the order they are written
    """
    seed = derive_seed(phrase, passphrase)
    private_key = derive_ed25519_keypair(seed)
    public_bytes, private_bytes = encode_openssh(private_key, request.comment)

    public = KeyArtifact(
        role="public",
        path=request.public_key_path,
        content=public_bytes,
        mode=PUBLIC_KEY_MODE,
    )
    private = KeyArtifact(
        role="private",
        path=request.private_key_path,
        content=private_bytes,
        mode=PRIVATE_KEY_MODE,
    )
    return public, private


def write_key_pair(
    artifacts: Sequence[KeyArtifact],
    *,
    confirm_overwrite: ConfirmOverwrite | None = None,
    backup_root: str | Path | None = None,
    logger: Any = None,
    fault_handler: FaultHandler | None = None,
) -> None:
    """Write all artifacts in one transaction, or none of them.

    Every existing target is confirmed before anything is written, so a
    declined overwrite leaves the disk untouched.

    Args:
        artifacts: Files to write, in order
        confirm_overwrite: Asked once per existing target; returning False
            aborts. When omitted, existing files are never overwritten.
        backup_root: Directory for the transaction's backup store
        logger: Optional structlog logger instance
        fault_handler: Passed to the transaction; see
            :func:`~bip39_keygen.fs.transaction.abort_on_rollback_failure`

    Raises:
        OverwriteDeclined: If an existing target may not be replaced
        OSError: If any filesystem step fails (all changes are undone)
    """
    log = logger or structlog.get_logger()

    for artifact in artifacts:
        if not os.path.lexists(artifact.path):
            continue
        if confirm_overwrite is None or not confirm_overwrite(artifact.path):
            log.info(
                "keygen.aborted",
                reason="overwrite_declined",
                path=str(artifact.path),
            )
            raise OverwriteDeclined(artifact.path)

    store = BackupStore(resolve_backup_root(backup_root))
    debug("Writing key pair", files=len(artifacts), backup_dir=store.path)
    try:
        with Transaction(store, fault_handler=fault_handler) as tx:
            for artifact in artifacts:
                tx.write_file(artifact.path, artifact.content, mode=artifact.mode)
                log.info(
                    "keygen.write",
                    role=artifact.role,
                    path=str(artifact.path),
                    version=tx.version,
                )
            tx.commit()
            debug("Key pair written", version=tx.version)
    except Exception as exc:
        log.warning("keygen.aborted", reason="write_failed", error=str(exc))
        raise

    log.info("keygen.committed", files=len(artifacts))


def generate_ssh_key(
    request: SshKeyRequest,
    phrase: str,
    passphrase: str = "",
    *,
    confirm_overwrite: ConfirmOverwrite | None = None,
    backup_root: str | Path | None = None,
    logger: Any = None,
) -> KeygenResult:
    """Derive an SSH key pair from a mnemonic and write both key files.

    Args:
        request: Validated key options
        phrase: Valid BIP39 mnemonic
        passphrase: BIP39 passphrase
        confirm_overwrite: See :func:`write_key_pair`
        backup_root: See :func:`write_key_pair`
        logger: Optional structlog logger instance

    Returns:
        KeygenResult describing the written key pair
    """
    bound_logger = (logger or structlog.get_logger()).bind(
        key_type=request.key_type.value,
        output_dir=str(request.output_dir),
    )

    public, private = build_artifacts(request, phrase, passphrase)
    write_key_pair(
        (public, private),
        confirm_overwrite=confirm_overwrite,
        backup_root=backup_root,
        logger=bound_logger,
    )

    return KeygenResult(
        key_type=request.key_type,
        public_key_path=public.path,
        private_key_path=private.path,
        public_key=public.content.decode("utf-8").strip(),
        fingerprint=fingerprint(public.content),
    )
