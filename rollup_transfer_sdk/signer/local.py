"""
Local private-key signer.
"""
import logging
from typing import Any, Dict

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount

from ..exceptions import InvalidPrivateKey
from ..utils import HEX_DIGITS
from .ec_constants import PRIVATE_KEY_HEX_LENGTH, SECP256K1_MAX, SECP256K1_MIN

logger = logging.getLogger(__name__)


def _normalize_private_key(private_key: Any) -> bytes:
    """
    Check a hex private key and return its 32 raw bytes.

    Accepts exactly 64 hex characters, optionally prefixed with ``0x``.
    """
    if not isinstance(private_key, str):
        raise InvalidPrivateKey(f"Private key must be a string, got {type(private_key).__name__}")

    key_hex = private_key[2:] if private_key.startswith("0x") else private_key
    if len(key_hex) != PRIVATE_KEY_HEX_LENGTH:
        raise InvalidPrivateKey(
            "Private key must be 64 hexadecimal characters, optionally prefixed with 0x "
            f"(got {len(private_key)} characters)"
        )

    if not all(c in HEX_DIGITS for c in key_hex):
        raise InvalidPrivateKey("Private key contains non-hexadecimal characters")
    key_bytes = bytes.fromhex(key_hex)

    scalar = int.from_bytes(key_bytes, "big")
    if not SECP256K1_MIN <= scalar <= SECP256K1_MAX:
        raise InvalidPrivateKey("Private key is not a valid secp256k1 scalar")

    return key_bytes


class LocalSigner:
    """
    Signer backed by a private key held in memory.

    The key is never logged and is not part of ``repr``.
    """

    def __init__(self, private_key: str):
        """
        Derive a signing identity from a hex private key

        Args:
            private_key: 64 hex characters, with or without the 0x prefix

        Raises:
            InvalidPrivateKey: If the key is malformed or out of range
        """
        key_bytes = _normalize_private_key(private_key)
        try:
            self._account: LocalAccount = Account.from_key(key_bytes)
        except ValueError as e:
            # Do not chain: the original message may echo key material
            raise InvalidPrivateKey(f"Private key rejected by signer: {type(e).__name__}") from None
        self.address = self._account.address
        logger.debug(f"Derived signer for {self.address}")

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> SignedTransaction:
        """Sign a transaction dictionary with the held key"""
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address!r})"
