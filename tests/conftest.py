"""Pytest configuration and fixtures for bip39-keygen tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from bip39_keygen.core.errors import RollbackFailed
from bip39_keygen.fs.backup import BackupStore
from bip39_keygen.fs.transaction import Transaction

#: BIP39 test vector for all-zero entropy
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


class FaultRecorder:
    """Fault handler that records rollback failures instead of aborting."""

    def __init__(self) -> None:
        self.errors: list[RollbackFailed] = []

    def __call__(self, error: RollbackFailed) -> None:
        self.errors.append(error)


@pytest.fixture
def test_mnemonic() -> str:
    return TEST_MNEMONIC


@pytest.fixture
def faults() -> FaultRecorder:
    return FaultRecorder()


@pytest.fixture
def backup_root(tmp_path: Path) -> Path:
    root = tmp_path / "backups"
    root.mkdir()
    return root


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def tx(backup_root: Path, faults: FaultRecorder) -> Iterator[Transaction]:
    """An open transaction whose backups live under ``backup_root``."""
    transaction = Transaction(BackupStore(backup_root), fault_handler=faults)
    yield transaction
    transaction.close()
