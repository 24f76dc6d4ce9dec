"""
Cardano Ledger Client

Transaction building, signing, submission and confirmation against the
BlockFrost API. The lifecycle manager only depends on the ``LedgerClient``
protocol, so tests and other backends can plug in their own client.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

import pycardano as pc
import requests
from blockfrost import ApiError
from pycardano.exception import PyCardanoException

from .chain_context import CardanoChainContext
from .exceptions import LedgerConnectivityError, LedgerError, LedgerRejectionError
from .wallet import Credential

logger = logging.getLogger(__name__)

# HTTP statuses that mean "try again later" rather than "the request is wrong"
RETRYABLE_STATUS_CODES = {408, 425, 429}


@dataclass(frozen=True)
class TransferIntent:
    """A single lovelace transfer waiting to be built and signed"""

    source: str
    destination: str
    lovelace: int
    reference_slot: int
    fee_payer: Optional[str] = None

    @property
    def payer(self) -> str:
        """Address that pays the network fee"""
        return self.fee_payer or self.source


class LedgerClient(Protocol):
    """Operations the lifecycle manager needs from the ledger"""

    def get_balance(self, address: str) -> int:
        ...

    def get_latest_reference_handle(self) -> int:
        ...

    def submit_and_confirm(self, intent: TransferIntent, signers: Sequence[Credential]) -> str:
        ...


def translate_ledger_error(error: Exception, tx_id: Optional[str] = None) -> LedgerError:
    """
    Map a BlockFrost, requests or PyCardano failure onto the ledger error taxonomy

    Args:
        error: Original exception
        tx_id: Transaction ID the failure relates to, if any

    Returns:
        LedgerRejectionError or LedgerConnectivityError
    """
    if isinstance(error, LedgerError):
        return error
    if isinstance(error, ApiError):
        status = getattr(error, "status_code", None)
        if status is not None and 400 <= status < 500 and status not in RETRYABLE_STATUS_CODES:
            return LedgerRejectionError(f"Ledger rejected request ({status}): {error}", tx_id=tx_id)
        return LedgerConnectivityError(f"Ledger API error ({status}): {error}", tx_id=tx_id)
    if isinstance(error, requests.RequestException):
        return LedgerConnectivityError(f"Ledger unreachable: {error}", tx_id=tx_id)
    if isinstance(error, PyCardanoException):
        # BlockFrostChainContext.submit_tx wraps the HTTP failure
        if isinstance(error.__cause__, ApiError):
            return translate_ledger_error(error.__cause__, tx_id=tx_id)
        return LedgerRejectionError(f"Transaction rejected: {error}", tx_id=tx_id)
    return LedgerConnectivityError(f"Unexpected ledger failure: {error}", tx_id=tx_id)


class BlockFrostLedgerClient:
    """Ledger client backed by PyCardano's BlockFrost chain context"""

    def __init__(
        self,
        chain_context: CardanoChainContext,
        confirmation_timeout: float = 180.0,
        poll_interval: float = 5.0,
        ttl_slots: int = 1000,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize ledger client

        Args:
            chain_context: CardanoChainContext instance
            confirmation_timeout: Seconds to wait for a submitted transaction to appear on-chain
            poll_interval: Seconds between confirmation checks
            ttl_slots: Validity window, in slots, added to the reference slot
            sleep: Sleep function (injectable for tests)
            clock: Monotonic clock (injectable for tests)
        """
        self.chain_context = chain_context
        self.context = chain_context.get_context()
        self.api = chain_context.get_api()
        self.confirmation_timeout = confirmation_timeout
        self.poll_interval = poll_interval
        self.ttl_slots = ttl_slots
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_balance(self, address: str) -> int:
        """
        Get the lovelace held by an address

        Unused addresses report a zero balance.

        Raises:
            LedgerConnectivityError: If the ledger cannot be queried
        """
        try:
            utxos = self.context.utxos(address)
        except ApiError as e:
            if getattr(e, "status_code", None) == 404:
                return 0
            raise LedgerConnectivityError(f"Error checking balance of {address}: {e}") from e
        except requests.RequestException as e:
            raise LedgerConnectivityError(f"Error checking balance of {address}: {e}") from e

        return sum(int(utxo.output.amount.coin) for utxo in utxos)

    def get_latest_reference_handle(self) -> int:
        """Latest block slot, used to anchor the validity window of new transactions"""
        try:
            return int(self.context.last_block_slot)
        except (ApiError, requests.RequestException) as e:
            raise translate_ledger_error(e) from e

    def is_confirmed(self, tx_id: str) -> bool:
        """
        Check whether a transaction is included in a block

        Raises:
            LedgerConnectivityError: If the ledger cannot be queried
        """
        try:
            self.api.transaction(tx_id)
        except ApiError as e:
            if getattr(e, "status_code", None) == 404:
                return False
            raise LedgerConnectivityError(f"Error checking transaction {tx_id}: {e}", tx_id=tx_id) from e
        except requests.RequestException as e:
            raise LedgerConnectivityError(f"Error checking transaction {tx_id}: {e}", tx_id=tx_id) from e
        return True

    def get_explorer_url(self, tx_id: str) -> str:
        return self.chain_context.get_explorer_url(tx_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def build_transaction(self, intent: TransferIntent, signers: Sequence[Credential]) -> pc.Transaction:
        """
        Build and sign the transaction for a transfer intent

        When the fee payer is a different account, every UTxO of the source is
        spent explicitly, the source keeps whatever it does not send, and the
        fee payer's inputs cover the fee and receive the change.

        Args:
            intent: Transfer to build
            signers: Credentials whose keys witness the transaction

        Returns:
            Signed transaction

        Raises:
            LedgerRejectionError: If the source cannot cover the amount
        """
        source = pc.Address.from_primitive(intent.source)
        destination = pc.Address.from_primitive(intent.destination)

        builder = pc.TransactionBuilder(self.context)

        if intent.payer == intent.source:
            builder.add_input_address(source)
            change_address = source
        else:
            source_utxos = self.context.utxos(source)
            available = sum(int(utxo.output.amount.coin) for utxo in source_utxos)
            if available < intent.lovelace:
                raise LedgerRejectionError(
                    f"Insufficient funds at {intent.source}: {available} < {intent.lovelace} lovelace"
                )
            for utxo in source_utxos:
                builder.add_input(utxo)

            leftover = available - intent.lovelace
            if leftover > 0:
                builder.add_output(pc.TransactionOutput(source, leftover))

            change_address = pc.Address.from_primitive(intent.payer)
            builder.add_input_address(change_address)

        builder.add_output(pc.TransactionOutput(destination, intent.lovelace))
        builder.ttl = intent.reference_slot + self.ttl_slots

        return builder.build_and_sign([signer.signing_key for signer in signers], change_address=change_address)

    def submit_and_confirm(self, intent: TransferIntent, signers: Sequence[Credential]) -> str:
        """
        Build, sign, submit and wait for a transfer to be confirmed

        Returns:
            Transaction ID

        Raises:
            LedgerRejectionError: Invalid transaction, insufficient funds or expired validity window
            LedgerConnectivityError: Network failure or confirmation timeout
        """
        try:
            signed_tx = self.build_transaction(intent, signers)
        except (ApiError, requests.RequestException, PyCardanoException) as e:
            raise translate_ledger_error(e) from e

        tx_id = signed_tx.id.payload.hex()
        valid_until = intent.reference_slot + self.ttl_slots

        try:
            self.context.submit_tx(signed_tx)
        except (ApiError, requests.RequestException, PyCardanoException) as e:
            error = translate_ledger_error(e)
            if isinstance(error, LedgerConnectivityError):
                # The node may have accepted it before the failure was reported
                error.tx_id = tx_id
            raise error from e

        logger.info(f"Transaction {tx_id} submitted, waiting for confirmation")
        self.wait_for_confirmation(tx_id, valid_until)
        return tx_id

    def wait_for_confirmation(self, tx_id: str, valid_until: Optional[int] = None) -> None:
        """
        Block until a submitted transaction is on-chain

        Args:
            tx_id: Transaction ID
            valid_until: Last slot the transaction can be included in

        Raises:
            LedgerRejectionError: If the chain moved past ``valid_until`` without the transaction
            LedgerConnectivityError: If ``confirmation_timeout`` elapses
        """
        deadline = self._clock() + self.confirmation_timeout

        while True:
            if self.is_confirmed(tx_id):
                logger.info(f"Transaction {tx_id} confirmed")
                return

            if valid_until is not None and self._current_slot(tx_id) > valid_until:
                # It may have landed in the last block before expiry
                if self.is_confirmed(tx_id):
                    logger.info(f"Transaction {tx_id} confirmed")
                    return
                raise LedgerRejectionError(
                    f"Transaction {tx_id} expired at slot {valid_until} without confirmation", tx_id=tx_id
                )

            if self._clock() >= deadline:
                raise LedgerConnectivityError(
                    f"Timed out after {self.confirmation_timeout}s waiting for transaction {tx_id}", tx_id=tx_id
                )

            self._sleep(self.poll_interval)

    def _current_slot(self, tx_id: str) -> int:
        # Once submitted, a failed tip query says nothing about the transaction
        try:
            return self.get_latest_reference_handle()
        except LedgerError as e:
            raise LedgerConnectivityError(
                f"Error checking chain tip while waiting for transaction {tx_id}: {e}", tx_id=tx_id
            ) from e
