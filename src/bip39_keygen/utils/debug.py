"""Opt-in debug tracing for bip39-keygen.

``debug()`` writes one ``[DEBUG]`` line to stderr per call when the
BIP39_KEYGEN_DEBUG environment variable is truthy. The filesystem layer
traces every mutation, backup and undo through it, and the key workflow
traces each run. Keyword arguments are appended as ``key=value`` pairs.

    debug(f"Created directory: {path}")
    debug("Writing key pair", files=2, backup_root=None)

Environment:
    BIP39_KEYGEN_DEBUG: '1', 'true' or 'yes' (any case) enables tracing.
        The value is read once, when this module is imported.

Stderr keeps traces out of the key paths and fingerprint printed on stdout:
    $ BIP39_KEYGEN_DEBUG=1 bip39-keygen ssh -t ed25519 2>trace.log
"""

import os
import sys
from typing import Any

_TRUTHY = frozenset({"1", "true", "yes"})

_DEBUG_ENABLED = os.environ.get("BIP39_KEYGEN_DEBUG", "").lower() in _TRUTHY


def debug(msg: Any, **context: Any) -> None:
    """Write ``msg`` (and any ``context`` pairs) to stderr when tracing is on."""
    if not _DEBUG_ENABLED:
        return
    line = f"[DEBUG] {msg}"
    if context:
        line += " " + " ".join(f"{key}={value}" for key, value in context.items())
    print(line, file=sys.stderr)
