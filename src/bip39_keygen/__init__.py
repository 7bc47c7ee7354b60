"""Deterministic SSH key generation from BIP39 mnemonics."""

from bip39_keygen.version import VERSION

__all__ = ["VERSION"]
