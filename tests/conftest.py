"""
Pytest configuration for worker wallet tests

Fixtures for the in-memory ledger, treasury key material and the manager.
"""

import pytest

from worker_wallets.manager import WorkerWalletManager

from .factories import CredentialMaterialFactory
from .mocks import FakeLedgerClient


ONE_ADA = 1_000_000


@pytest.fixture
def ledger():
    """In-memory ledger with a flat fee"""
    return FakeLedgerClient()


@pytest.fixture
def treasury_key():
    """Hex-encoded treasury signing key"""
    return CredentialMaterialFactory.raw_hex()


@pytest.fixture
def manager(treasury_key, ledger):
    """Manager whose treasury holds 10 ADA"""
    wallet_manager = WorkerWalletManager(treasury_key, ledger)
    ledger.set_balance(wallet_manager.treasury_address, 10 * ONE_ADA)
    return wallet_manager
