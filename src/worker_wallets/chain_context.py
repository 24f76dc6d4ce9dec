"""
Cardano Chain Context Management

Handles network configuration and the BlockFrost connection used by the
ledger client.
"""

from typing import Optional

import pycardano as pc
from blockfrost import ApiUrls, BlockFrostApi

from .enums import NetworkType
from .exceptions import ConfigurationError


class CardanoChainContext:
    """Manages Cardano chain context and network configuration"""

    def __init__(
        self,
        network: NetworkType = NetworkType.TESTNET,
        blockfrost_api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize chain context

        Args:
            network: Network type ("testnet" or "mainnet")
            blockfrost_api_key: BlockFrost project ID for chain queries
            base_url: Ledger endpoint override (defaults to the public BlockFrost URL)

        Raises:
            ConfigurationError: If no BlockFrost API key is supplied
        """
        if not blockfrost_api_key:
            raise ConfigurationError("BlockFrost API key required for chain context")

        self.network = NetworkType(network)
        self.blockfrost_api_key = blockfrost_api_key

        # Set network configuration
        if self.network is NetworkType.TESTNET:
            self.base_url = base_url or ApiUrls.preview.value
            self.cardanoscan = "https://preview.cardanoscan.io"
        else:
            self.base_url = base_url or ApiUrls.mainnet.value
            self.cardanoscan = "https://cardanoscan.io"
        self.cardano_network = self.network.cardano_network

        self.api = BlockFrostApi(project_id=blockfrost_api_key, base_url=self.base_url)
        self.context = pc.BlockFrostChainContext(project_id=blockfrost_api_key, base_url=self.base_url)

    def get_context(self) -> pc.ChainContext:
        """Get the chain context"""
        return self.context

    def get_api(self) -> BlockFrostApi:
        """Get the BlockFrost API instance"""
        return self.api

    def get_network_info(self) -> dict:
        """
        Get network configuration information

        Returns:
            Dictionary containing network information
        """
        return {
            "network": self.network.value,
            "cardano_network": self.cardano_network,
            "base_url": self.base_url,
            "cardanoscan": self.cardanoscan,
        }

    def get_explorer_url(self, tx_id: str) -> str:
        """
        Get explorer URL for transaction

        Args:
            tx_id: Transaction ID

        Returns:
            Explorer URL for the transaction
        """
        return f"{self.cardanoscan}/transaction/{tx_id}"
