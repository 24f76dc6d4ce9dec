"""
Cardano Worker Wallets

Ephemeral worker wallets funded from, and swept back into, a single treasury.
Contains the wallet lifecycle manager, credential handling and the BlockFrost
ledger client, separated from the console demo.
"""

from .chain_context import CardanoChainContext
from .config import WorkerWalletSettings
from .enums import NetworkType, WorkerState
from .exceptions import (
    ConfigurationError,
    InvalidCredentialError,
    LedgerConnectivityError,
    LedgerError,
    LedgerRejectionError,
    TransferError,
    WorkerWalletError,
)
from .ledger import BlockFrostLedgerClient, LedgerClient, TransferIntent
from .manager import ReclaimResult, WorkerWalletManager
from .units import LOVELACE_PER_ADA, ada_to_lovelace, lovelace_to_ada
from .wallet import Credential, WorkerRegistry


__all__ = [
    "WorkerWalletManager",
    "ReclaimResult",
    "Credential",
    "WorkerRegistry",
    "CardanoChainContext",
    "BlockFrostLedgerClient",
    "LedgerClient",
    "TransferIntent",
    "WorkerWalletSettings",
    "NetworkType",
    "WorkerState",
    "WorkerWalletError",
    "ConfigurationError",
    "InvalidCredentialError",
    "LedgerError",
    "LedgerConnectivityError",
    "LedgerRejectionError",
    "TransferError",
    "LOVELACE_PER_ADA",
    "ada_to_lovelace",
    "lovelace_to_ada",
]
