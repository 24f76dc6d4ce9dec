"""
Worker Wallet Configuration

Environment-specific settings load from the environment or a .env file.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import NetworkType


# Get the project root directory (two levels up from src/worker_wallets/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class WorkerWalletSettings(BaseSettings):
    """
    Settings for the worker wallet manager

    Credential material and the BlockFrost key are optional here so that a
    missing value surfaces as a ConfigurationError from the component that
    needs it.
    """

    # ============================================================================
    # Treasury and ledger
    # ============================================================================

    treasury_signing_key: Optional[str] = None  # mnemonic, text envelope or hex key
    blockfrost_api_key: Optional[str] = None
    network: NetworkType = NetworkType.TESTNET
    blockfrost_base_url: Optional[str] = None  # defaults to the public BlockFrost URL for the network

    # ============================================================================
    # Confirmation policy
    # ============================================================================

    confirmation_timeout: float = 180.0
    confirmation_poll_interval: float = 5.0
    ttl_slots: int = 1000

    # ============================================================================
    # Logging and demo
    # ============================================================================

    log_level: str = "INFO"
    demo_funding_ada: Decimal = Decimal("2")
    demo_min_treasury_ada: Decimal = Decimal("5")

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
