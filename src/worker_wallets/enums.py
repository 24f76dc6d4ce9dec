"""
Shared Enums

Single source of truth for enums used by the settings layer, the wallet
registry and the lifecycle manager.
"""

from enum import Enum

import pycardano as pc


# ============================================================================
# Blockchain Enums
# ============================================================================


class NetworkType(str, Enum):
    """Blockchain network types"""

    TESTNET = "testnet"
    MAINNET = "mainnet"

    @property
    def cardano_network(self) -> pc.Network:
        """PyCardano network used when deriving addresses"""
        return pc.Network.MAINNET if self is NetworkType.MAINNET else pc.Network.TESTNET


# ============================================================================
# Worker Enums
# ============================================================================


class WorkerState(str, Enum):
    """
    Worker wallet lifecycle state

    Lifecycle:
    - REGISTERED: Key material generated and tracked, funding not confirmed
    - FUNDED: Funding transfer from the treasury confirmed on-chain

    A reclaimed worker has no state: its registry entry is deleted.
    """

    REGISTERED = "REGISTERED"
    FUNDED = "FUNDED"
