"""
Cardano Wallet Credentials

Key material for the treasury and worker accounts, plus the registry that
owns the worker keys between funding and reclamation.
"""

import json
import threading
from typing import Dict, List, Optional, Union

import pycardano as pc

from .enums import NetworkType, WorkerState
from .exceptions import InvalidCredentialError

# Same derivation the CIP-1852 wallets use for the first payment key
PAYMENT_DERIVATION_PATH = "m/1852'/1815'/0'/0/0"

SIGNING_KEY_LENGTH = 32

# CBOR header for a 32-byte bytestring
CBOR_BYTES32_PREFIX = b"\x58\x20"

SigningKey = Union[pc.PaymentSigningKey, pc.ExtendedSigningKey]


class Credential:
    """An Ed25519 keypair and the enterprise address it controls"""

    def __init__(self, signing_key: SigningKey, network: NetworkType = NetworkType.TESTNET):
        """
        Initialize credential from a signing key

        Args:
            signing_key: Payment signing key (plain or BIP32-extended)
            network: Network the address is derived for
        """
        self.network = NetworkType(network)
        self.signing_key = signing_key
        self.verification_key = signing_key.to_verification_key()
        self.address = pc.Address(
            payment_part=self.verification_key.hash(),
            network=self.network.cardano_network,
        )

    @property
    def identifier(self) -> str:
        """Bech32 enterprise address, the public identity of the account"""
        return str(self.address)

    @property
    def key_hash(self) -> bytes:
        """Payment verification key hash"""
        return self.verification_key.hash().payload

    @classmethod
    def generate(cls, network: NetworkType = NetworkType.TESTNET) -> "Credential":
        """Create a credential from fresh random key material"""
        return cls(pc.PaymentSigningKey.generate(), network)

    @classmethod
    def from_mnemonic(cls, mnemonic: str, network: NetworkType = NetworkType.TESTNET) -> "Credential":
        """
        Derive the first payment key of a BIP39 mnemonic

        Raises:
            InvalidCredentialError: If the words or the checksum are invalid
        """
        try:
            hdwallet = pc.crypto.bip32.HDWallet.from_mnemonic(mnemonic)
            payment_key = hdwallet.derive_from_path(PAYMENT_DERIVATION_PATH)
        except ValueError as e:
            raise InvalidCredentialError(f"Invalid mnemonic: {e}") from e

        return cls(pc.ExtendedSigningKey.from_hdwallet(payment_key), network)

    @classmethod
    def from_encoded(cls, material: str, network: NetworkType = NetworkType.TESTNET) -> "Credential":
        """
        Decode credential material into a credential

        Accepted encodings:
            - BIP39 mnemonic phrase
            - cardano-cli text envelope (JSON with a ``cborHex`` field)
            - CBOR hex of a 32-byte key (``5820...``)
            - Raw hex of a 32-byte key

        Args:
            material: Encoded key material
            network: Network the address is derived for

        Returns:
            Decoded credential

        Raises:
            InvalidCredentialError: If the material is malformed or has the wrong length
        """
        material = material.strip()

        if material.startswith("{"):
            material = _cbor_hex_from_envelope(material).strip()
        elif len(material.split()) > 1:
            return cls.from_mnemonic(" ".join(material.split()), network)

        try:
            raw = bytes.fromhex(material)
        except ValueError as e:
            raise InvalidCredentialError("Signing key is not valid hex") from e

        if len(raw) == len(CBOR_BYTES32_PREFIX) + SIGNING_KEY_LENGTH and raw.startswith(CBOR_BYTES32_PREFIX):
            raw = raw[len(CBOR_BYTES32_PREFIX):]

        if len(raw) != SIGNING_KEY_LENGTH:
            raise InvalidCredentialError(
                f"Signing key must be {SIGNING_KEY_LENGTH} bytes, got {len(raw)}"
            )

        return cls(pc.PaymentSigningKey(raw), network)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Credential):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return f"Credential({self.identifier})"


def _cbor_hex_from_envelope(material: str) -> str:
    try:
        envelope = json.loads(material)
    except json.JSONDecodeError as e:
        raise InvalidCredentialError("Signing key envelope is not valid JSON") from e

    cbor_hex = envelope.get("cborHex") if isinstance(envelope, dict) else None
    if not isinstance(cbor_hex, str):
        raise InvalidCredentialError("Signing key envelope has no cborHex field")
    return cbor_hex


class WorkerRegistry:
    """Tracks the worker credentials that are still holding (or may hold) funds"""

    def __init__(self):
        self._lock = threading.Lock()
        self._workers: Dict[str, Credential] = {}
        self._states: Dict[str, WorkerState] = {}

    def add(self, credential: Credential) -> None:
        """
        Register a new worker in REGISTERED state

        Raises:
            ValueError: If the worker is already registered
        """
        with self._lock:
            if credential.identifier in self._workers:
                raise ValueError(f"Worker {credential.identifier} is already registered")
            self._workers[credential.identifier] = credential
            self._states[credential.identifier] = WorkerState.REGISTERED

    def mark_funded(self, identifier: str) -> None:
        """Move a registered worker to FUNDED"""
        with self._lock:
            if identifier in self._workers:
                self._states[identifier] = WorkerState.FUNDED

    def get(self, identifier: str) -> Optional[Credential]:
        with self._lock:
            return self._workers.get(identifier)

    def state(self, identifier: str) -> Optional[WorkerState]:
        with self._lock:
            return self._states.get(identifier)

    def remove(self, identifier: str) -> bool:
        """
        Remove worker by identifier

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            self._states.pop(identifier, None)
            return self._workers.pop(identifier, None) is not None

    def identifiers(self) -> List[str]:
        """Snapshot of the registered worker identifiers"""
        with self._lock:
            return list(self._workers.keys())

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._workers

    def __len__(self) -> int:
        with self._lock:
            return len(self._workers)
