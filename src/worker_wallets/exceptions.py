"""
Worker Wallet Exceptions

Error taxonomy shared by the credential decoder, the ledger client and the
lifecycle manager.
"""

from typing import Optional


class WorkerWalletError(Exception):
    """Base exception for worker wallet errors"""

    pass


class ConfigurationError(WorkerWalletError):
    """Required configuration is absent"""

    pass


class InvalidCredentialError(WorkerWalletError):
    """Credential material is present but cannot be decoded into a keypair"""

    pass


class LedgerError(WorkerWalletError):
    """
    Base exception for failures reported while talking to the ledger

    Args:
        message: Human readable description
        tx_id: Transaction ID when the failure happened after a transaction
            was built, so callers can look it up before retrying
    """

    def __init__(self, message: str, tx_id: Optional[str] = None):
        super().__init__(message)
        self.tx_id = tx_id


class LedgerConnectivityError(LedgerError):
    """Transient network or timeout failure talking to the ledger"""

    pass


class LedgerRejectionError(LedgerError):
    """The ledger refused the transaction (invalid, underfunded or expired)"""

    pass


class TransferError(WorkerWalletError):
    """
    A transfer failed to submit or confirm

    Wraps the underlying ledger error with the transfer context.
    """

    def __init__(self, sender: str, receiver: str, lovelace: int, cause: Exception, tx_id: Optional[str] = None):
        self.sender = sender
        self.receiver = receiver
        self.lovelace = lovelace
        self.cause = cause
        self.tx_id = tx_id
        super().__init__(f"Transfer of {lovelace} lovelace from {sender} to {receiver} failed: {cause}")

    @property
    def is_retry_safe(self) -> bool:
        """True when the ledger refused the transfer, so resubmitting cannot double-spend"""
        return isinstance(self.cause, LedgerRejectionError)
