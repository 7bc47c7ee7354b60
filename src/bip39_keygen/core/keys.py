"""BIP39 mnemonic handling and Ed25519 key derivation.

The same mnemonic and passphrase always yield the same key pair: the first
32 bytes of the BIP39 seed are used directly as the Ed25519 private key.
"""

import base64
import hashlib
from functools import lru_cache

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from mnemonic import Mnemonic

from bip39_keygen.core.errors import InvalidMnemonic

#: Supported mnemonic lengths mapped to their entropy in bits
WORD_COUNT_STRENGTH: dict[int, int] = {12: 128, 15: 160, 18: 192, 21: 224, 24: 256}

ED25519_SEED_SIZE = 32


@lru_cache(maxsize=1)
def _english() -> Mnemonic:
    return Mnemonic("english")


def generate_mnemonic(words: int = 12) -> str:
    """Generate a fresh English BIP39 mnemonic.

    Args:
        words: Number of words (12, 15, 18, 21 or 24)

    Raises:
        ValueError: If ``words`` is not a supported length
    """
    if words not in WORD_COUNT_STRENGTH:
        raise ValueError(f"unsupported mnemonic length: {words} words")
    return _english().generate(strength=WORD_COUNT_STRENGTH[words])


def parse_mnemonic(phrase: str) -> str:
    """Validate a mnemonic and return it with whitespace normalized.

    Raises:
        InvalidMnemonic: If the phrase is empty, has an unsupported length,
            contains words outside the English list or fails its checksum
    """
    words = phrase.split()
    if not words:
        raise InvalidMnemonic("phrase is empty")
    if len(words) not in WORD_COUNT_STRENGTH:
        raise InvalidMnemonic(
            f"expected 12, 15, 18, 21 or 24 words, got {len(words)}"
        )

    wordlist = set(_english().wordlist)
    unknown = [word for word in words if word not in wordlist]
    if unknown:
        raise InvalidMnemonic(f"unknown word(s): {', '.join(unknown)}")

    normalized = " ".join(words)
    if not _english().check(normalized):
        raise InvalidMnemonic("checksum mismatch")
    return normalized


def derive_seed(phrase: str, passphrase: str = "") -> bytes:
    """Derive the 64-byte BIP39 seed for a mnemonic and passphrase."""
    return Mnemonic.to_seed(phrase, passphrase)


def derive_ed25519_keypair(seed: bytes) -> Ed25519PrivateKey:
    """Build an Ed25519 private key from the first 32 bytes of ``seed``.

    Raises:
        ValueError: If the seed is shorter than 32 bytes
    """
    if len(seed) < ED25519_SEED_SIZE:
        raise ValueError(
            f"seed must be at least {ED25519_SEED_SIZE} bytes, got {len(seed)}"
        )
    return Ed25519PrivateKey.from_private_bytes(seed[:ED25519_SEED_SIZE])


def encode_openssh(
    private_key: Ed25519PrivateKey, comment: str = ""
) -> tuple[bytes, bytes]:
    """Encode a key pair in OpenSSH format.

    Args:
        private_key: Key to encode
        comment: Comment appended to the public key line

    Returns:
        ``(public, private)``: an ``ssh-ed25519 <base64> <comment>`` line and
        an unencrypted ``OPENSSH PRIVATE KEY`` block
    """
    public = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.OpenSSH,
        format=serialization.PublicFormat.OpenSSH,
    )
    if comment:
        public += b" " + comment.encode("utf-8")
    public += b"\n"

    private = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return public, private


def fingerprint(public_key: bytes) -> str:
    """Return the ``SHA256:`` fingerprint of an OpenSSH public key line."""
    fields = public_key.split()
    if len(fields) < 2:
        raise ValueError("not an OpenSSH public key line")
    blob = base64.b64decode(fields[1])
    digest = hashlib.sha256(blob).digest()
    return "SHA256:" + base64.b64encode(digest).decode("ascii").rstrip("=")
