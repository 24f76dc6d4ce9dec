"""
Settings and Chain Context Tests
"""

from decimal import Decimal
from unittest.mock import patch

import pycardano as pc
import pytest
from blockfrost import ApiUrls

from worker_wallets.chain_context import CardanoChainContext
from worker_wallets.config import WorkerWalletSettings
from worker_wallets.enums import NetworkType
from worker_wallets.exceptions import ConfigurationError


@pytest.mark.unit
class TestWorkerWalletSettings:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "TREASURY_SIGNING_KEY",
            "BLOCKFROST_API_KEY",
            "NETWORK",
            "BLOCKFROST_BASE_URL",
            "CONFIRMATION_TIMEOUT",
            "CONFIRMATION_POLL_INTERVAL",
            "TTL_SLOTS",
            "LOG_LEVEL",
            "DEMO_FUNDING_ADA",
            "DEMO_MIN_TREASURY_ADA",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = WorkerWalletSettings(_env_file=None)

        assert settings.treasury_signing_key is None
        assert settings.blockfrost_api_key is None
        assert settings.network is NetworkType.TESTNET
        assert settings.blockfrost_base_url is None
        assert settings.confirmation_timeout == 180.0
        assert settings.confirmation_poll_interval == 5.0
        assert settings.ttl_slots == 1000
        assert settings.log_level == "INFO"
        assert settings.demo_funding_ada == Decimal("2")
        assert settings.demo_min_treasury_ada == Decimal("5")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TREASURY_SIGNING_KEY", "ab" * 32)
        monkeypatch.setenv("BLOCKFROST_API_KEY", "mainnetXYZ")
        monkeypatch.setenv("NETWORK", "mainnet")
        monkeypatch.setenv("CONFIRMATION_TIMEOUT", "90")
        monkeypatch.setenv("TTL_SLOTS", "300")
        monkeypatch.setenv("DEMO_FUNDING_ADA", "1.5")

        settings = WorkerWalletSettings(_env_file=None)

        assert settings.treasury_signing_key == "ab" * 32
        assert settings.blockfrost_api_key == "mainnetXYZ"
        assert settings.network is NetworkType.MAINNET
        assert settings.confirmation_timeout == 90.0
        assert settings.ttl_slots == 300
        assert settings.demo_funding_ada == Decimal("1.5")

    def test_env_names_are_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("blockfrost_api_key", "preview123")

        assert WorkerWalletSettings(_env_file=None).blockfrost_api_key == "preview123"

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BLOCKFROST_API_KEY=previewFromFile\nUNRELATED_SETTING=ignored\n")

        settings = WorkerWalletSettings(_env_file=env_file)

        assert settings.blockfrost_api_key == "previewFromFile"

    def test_invalid_network_is_rejected(self, monkeypatch):
        monkeypatch.setenv("NETWORK", "devnet")

        with pytest.raises(ValueError):
            WorkerWalletSettings(_env_file=None)


@pytest.mark.unit
class TestCardanoChainContext:
    @pytest.fixture(autouse=True)
    def blockfrost(self):
        with patch("worker_wallets.chain_context.BlockFrostApi") as api_cls, patch(
            "worker_wallets.chain_context.pc.BlockFrostChainContext"
        ) as context_cls:
            self.api_cls = api_cls
            self.context_cls = context_cls
            yield

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_api_key(self, api_key):
        with pytest.raises(ConfigurationError):
            CardanoChainContext(NetworkType.TESTNET, api_key)

        self.api_cls.assert_not_called()
        self.context_cls.assert_not_called()

    def test_testnet_uses_preview(self):
        chain_context = CardanoChainContext("testnet", "preview123")

        self.api_cls.assert_called_once_with(project_id="preview123", base_url=ApiUrls.preview.value)
        self.context_cls.assert_called_once_with(project_id="preview123", base_url=ApiUrls.preview.value)
        assert chain_context.get_api() is self.api_cls.return_value
        assert chain_context.get_context() is self.context_cls.return_value
        assert chain_context.get_network_info() == {
            "network": "testnet",
            "cardano_network": pc.Network.TESTNET,
            "base_url": ApiUrls.preview.value,
            "cardanoscan": "https://preview.cardanoscan.io",
        }

    def test_mainnet(self):
        chain_context = CardanoChainContext(NetworkType.MAINNET, "mainnet123")

        assert chain_context.base_url == ApiUrls.mainnet.value
        assert chain_context.cardano_network == pc.Network.MAINNET
        assert chain_context.get_explorer_url("abc") == "https://cardanoscan.io/transaction/abc"

    def test_base_url_override(self):
        chain_context = CardanoChainContext(NetworkType.TESTNET, "preview123", base_url="http://localhost:3000")

        self.context_cls.assert_called_once_with(project_id="preview123", base_url="http://localhost:3000")
        assert chain_context.get_explorer_url("abc") == "https://preview.cardanoscan.io/transaction/abc"
