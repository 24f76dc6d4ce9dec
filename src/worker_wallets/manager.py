"""
Worker Wallet Lifecycle Manager

Funds ephemeral worker wallets from the treasury and sweeps them back once
the caller is done with them. Every ledger call blocks until the ledger
answers; nothing is submitted in the background.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from .chain_context import CardanoChainContext
from .config import WorkerWalletSettings
from .enums import NetworkType, WorkerState
from .exceptions import ConfigurationError, InvalidCredentialError, LedgerError, TransferError
from .ledger import BlockFrostLedgerClient, LedgerClient, TransferIntent
from .units import Amount, ada_to_lovelace, lovelace_to_ada
from .wallet import Credential, WorkerRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReclaimResult:
    """Outcome of closing a worker wallet"""

    worker_address: str
    reclaimed_lovelace: int
    tx_id: Optional[str] = None

    @property
    def transfer_performed(self) -> bool:
        """False when the worker was already empty and nothing was submitted"""
        return self.tx_id is not None

    @property
    def reclaimed_ada(self) -> Decimal:
        return lovelace_to_ada(self.reclaimed_lovelace)


def load_treasury_credential(material: Optional[str], network: NetworkType = NetworkType.TESTNET) -> Credential:
    """
    Decode the treasury credential from configuration

    Raises:
        ConfigurationError: If no credential material is configured
        InvalidCredentialError: If the material cannot be decoded
    """
    if not material or not material.strip():
        logger.error("Treasury signing key is missing from the configuration")
        raise ConfigurationError("Treasury signing key is required (TREASURY_SIGNING_KEY)")

    try:
        return Credential.from_encoded(material, network)
    except InvalidCredentialError as e:
        logger.error(f"Failed to load treasury wallet: {e}")
        raise


class WorkerWalletManager:
    """Creates, funds and reclaims worker wallets on behalf of a single treasury"""

    def __init__(
        self,
        treasury_key: Optional[str],
        ledger: LedgerClient,
        network: NetworkType = NetworkType.TESTNET,
    ):
        """
        Initialize the manager

        Args:
            treasury_key: Encoded treasury credential material
            ledger: Connected ledger client
            network: Network worker addresses are derived for

        Raises:
            ConfigurationError: If no credential material is supplied
            InvalidCredentialError: If the material cannot be decoded
        """
        self.network = NetworkType(network)
        self._treasury = load_treasury_credential(treasury_key, self.network)
        self.ledger = ledger
        self.workers = WorkerRegistry()

        logger.info(f"Treasury wallet loaded: {self.treasury_address}")

    @classmethod
    def from_settings(cls, settings: Optional[WorkerWalletSettings] = None) -> "WorkerWalletManager":
        """
        Build a manager wired to BlockFrost from settings

        The credential is validated before any connection is opened.
        """
        settings = settings or WorkerWalletSettings()
        load_treasury_credential(settings.treasury_signing_key, settings.network)

        chain_context = CardanoChainContext(
            network=settings.network,
            blockfrost_api_key=settings.blockfrost_api_key,
            base_url=settings.blockfrost_base_url,
        )
        ledger = BlockFrostLedgerClient(
            chain_context,
            confirmation_timeout=settings.confirmation_timeout,
            poll_interval=settings.confirmation_poll_interval,
            ttl_slots=settings.ttl_slots,
        )
        return cls(settings.treasury_signing_key, ledger, settings.network)

    @property
    def treasury(self) -> Credential:
        return self._treasury

    @property
    def treasury_address(self) -> str:
        """Public identifier of the treasury account"""
        return self._treasury.identifier

    # ------------------------------------------------------------------
    # Worker lifecycle
    # ------------------------------------------------------------------

    def create_and_fund_wallet(self, amount_ada: Amount) -> Credential:
        """
        Generate a worker wallet and fund it from the treasury

        The worker is registered before the funding transfer, so a failed
        transfer still leaves it available for inspection and cleanup.

        Args:
            amount_ada: Funding amount in ADA, rounded to the nearest lovelace (ties to even)

        Returns:
            Worker credential

        Raises:
            ValueError: If the amount is not positive
            TransferError: If the funding transfer fails
        """
        lovelace = ada_to_lovelace(amount_ada)

        worker = Credential.generate(self.network)
        self.workers.add(worker)

        logger.info(f"Creating worker wallet {worker.identifier} funded with {lovelace_to_ada(lovelace)} ADA")
        self._transfer(self._treasury, worker.identifier, lovelace)
        self.workers.mark_funded(worker.identifier)

        return worker

    def transfer_ada(
        self,
        sender: Credential,
        receiver: str,
        amount_ada: Amount,
        fee_payer: Optional[Credential] = None,
    ) -> str:
        """
        Send ADA and wait for confirmation

        Not idempotent: if confirmation times out the transaction may still
        land, and calling again can send the amount twice. Check
        ``TransferError.tx_id`` on the ledger before retrying.

        Args:
            sender: Credential that authorizes the debit
            receiver: Destination address
            amount_ada: Amount in ADA
            fee_payer: Credential paying the network fee (defaults to the sender)

        Returns:
            Transaction ID

        Raises:
            TransferError: If submission or confirmation fails
        """
        return self._transfer(sender, str(receiver), ada_to_lovelace(amount_ada), fee_payer)

    def close_wallet_and_reclaim_ada(self, worker: Credential) -> ReclaimResult:
        """
        Sweep a worker's entire balance back to the treasury

        The treasury pays the network fee and co-signs, so every lovelace on
        the worker comes back regardless of how small the balance is.

        Args:
            worker: Worker credential

        Returns:
            ReclaimResult; ``tx_id`` is None when the balance was already zero

        Raises:
            LedgerConnectivityError: If the worker balance cannot be read
            TransferError: If the sweep fails (the worker stays registered)
        """
        worker_address = worker.identifier
        balance = self.ledger.get_balance(worker_address)

        if balance == 0:
            logger.info(f"Worker wallet {worker_address} has zero balance, no transfer needed")
            self.workers.remove(worker_address)
            return ReclaimResult(worker_address, 0)

        try:
            tx_id = self._transfer(worker, self.treasury_address, balance, fee_payer=self._treasury)
        except TransferError:
            logger.error(f"Failed to close worker wallet {worker_address}")
            raise

        self.workers.remove(worker_address)
        logger.info(f"Worker wallet {worker_address} closed, reclaimed {lovelace_to_ada(balance)} ADA (tx={tx_id})")
        return ReclaimResult(worker_address, balance, tx_id)

    # ------------------------------------------------------------------
    # Balances and registry
    # ------------------------------------------------------------------

    def get_ada_balance(self, address: str) -> Decimal:
        """Current balance in ADA, read straight from the ledger"""
        return lovelace_to_ada(self.ledger.get_balance(str(address)))

    def active_workers(self) -> List[str]:
        return self.workers.identifiers()

    def get_worker(self, address: str) -> Optional[Credential]:
        return self.workers.get(address)

    def worker_state(self, address: str) -> Optional[WorkerState]:
        return self.workers.state(address)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transfer(
        self,
        sender: Credential,
        receiver: str,
        lovelace: int,
        fee_payer: Optional[Credential] = None,
    ) -> str:
        signers = [sender]
        if fee_payer is not None and fee_payer != sender:
            signers.append(fee_payer)

        logger.info(f"Initiating transfer of {lovelace_to_ada(lovelace)} ADA from {sender.identifier} to {receiver}")

        try:
            intent = TransferIntent(
                source=sender.identifier,
                destination=receiver,
                lovelace=lovelace,
                reference_slot=self.ledger.get_latest_reference_handle(),
                fee_payer=fee_payer.identifier if fee_payer is not None else None,
            )
            tx_id = self.ledger.submit_and_confirm(intent, signers)
        except LedgerError as e:
            logger.error(
                f"Transfer of {lovelace} lovelace from {sender.identifier} to {receiver} failed: {e}"
                + (f" (tx={e.tx_id})" if e.tx_id else "")
            )
            raise TransferError(sender.identifier, receiver, lovelace, cause=e, tx_id=e.tx_id) from e

        logger.info(f"Transfer successful: {tx_id}")
        return tx_id
