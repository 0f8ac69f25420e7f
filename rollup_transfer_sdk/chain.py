"""
ChainClient - read and submit access to an Ethereum-compatible RPC node.
"""
import logging
from typing import Any, Dict, Optional

from web3 import Web3
from web3.exceptions import Web3Exception
from requests.exceptions import RequestException

from .exceptions import ChainQueryFailed, SubmissionFailed
from .models import UnsignedTransaction
from .signer import Signer
from .utils import validate_rpc_url

# Errors a provider call can raise for a failed or malformed RPC round trip
RPC_ERRORS = (Web3Exception, RequestException, ConnectionError, TimeoutError, ValueError)


class ChainClient:
    """
    Explicit view of the chain state a transfer needs.

    Every method performs a fresh RPC call; nothing is cached between calls.
    Read failures raise ChainQueryFailed, submission failures raise
    SubmissionFailed.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: int = 30,
        w3: Optional[Web3] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ChainClient

        Args:
            rpc_url: RPC endpoint URL (e.g., "https://sepolia-rollup.arbitrum.io/rpc")
            timeout: Timeout for RPC requests in seconds
            w3: Pre-built Web3 instance to use instead of an HTTP provider
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ConfigError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        self.rpc_url = validate_rpc_url(rpc_url)
        self.logger = logger or logging.getLogger(__name__)
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

    def query(self, operation: str, fn, *args) -> Any:
        """Run an RPC call, turning provider failures into ChainQueryFailed"""
        try:
            return fn(*args)
        except RPC_ERRORS as e:
            self.logger.error(f"{operation} failed: {e}")
            raise ChainQueryFailed(operation, f"Chain query failed: {operation}: {e}") from e

    def get_balance(self, address: str) -> int:
        """Balance of an address in wei"""
        balance = self.query("get_balance", self.w3.eth.get_balance, address)
        self.logger.debug(f"Balance of {address}: {balance} wei")
        return int(balance)

    def get_gas_price(self) -> int:
        """Current suggested gas price in wei"""
        gas_price = self.query("get_gas_price", lambda: self.w3.eth.gas_price)
        return int(gas_price)

    def get_latest_block_base_fee(self) -> Optional[int]:
        """
        Base fee of the latest block

        Returns:
            Base fee in wei, or None when the block carries no baseFeePerGas
        """
        block = self.query("get_latest_block", self.w3.eth.get_block, "latest")
        if block is None:
            return None
        base_fee = block.get("baseFeePerGas")
        return int(base_fee) if base_fee is not None else None

    def get_block_number(self) -> int:
        return int(self.query("get_block_number", lambda: self.w3.eth.block_number))

    def get_transaction_count(self, address: str) -> int:
        """Nonce of the next transaction from an address"""
        return int(self.query("get_transaction_count", self.w3.eth.get_transaction_count, address))

    def get_chain_id(self) -> int:
        return int(self.query("get_chain_id", lambda: self.w3.eth.chain_id))

    def submit_transaction(self, tx: UnsignedTransaction, signer: Signer) -> str:
        """
        Sign a transaction and broadcast it

        Args:
            tx: Transaction to sign
            signer: Signer owning the sending address

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            SubmissionFailed: If signing or broadcasting fails
        """
        tx_dict: Dict[str, Any] = tx.to_tx_dict()

        try:
            signed_tx = signer.sign_transaction(tx_dict)
        except Exception as e:
            self.logger.error(f"Transaction signing failed: {e}")
            raise SubmissionFailed("sign", f"Failed to sign transaction: {e}") from e

        try:
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except RPC_ERRORS as e:
            self.logger.error(f"Failed to send transaction: {e}")
            raise SubmissionFailed("send", f"Failed to send transaction: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"Transaction sent: {tx_hash_hex}")
        return tx_hash_hex
