"""
TransferClient - native-asset transfers on an Ethereum-compatible rollup.
"""
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from .balance import check_sufficient_balance
from .chain import ChainClient
from .config import TransferConfig
from .exceptions import ChainQueryFailed, SubmissionFailed, TransferCancelled
from .fees import estimate_fees
from .models import FeeEnvelope, UnsignedTransaction
from .signer import LocalSigner, Signer
from .utils import AmountLike, validate_transfer

# Called with the transaction about to be sent; a falsy return cancels it.
# The nonce and chain id of the preview are 0: they are read after confirmation.
ConfirmCallback = Callable[[UnsignedTransaction], bool]


class TransferClient:
    """
    Client for sending ETH on a rollup network.

    A transfer runs as a fixed sequence of stages:
    1. Validate recipient and amount
    2. Check the balance covers the value
    3. Estimate EIP-1559 fees from live gas figures
    4. Check the balance covers value plus the worst-case fee
    5. Read nonce and chain id, sign and submit

    Every chain figure is read fresh for each transfer. Submissions from the
    same sender must be serialized by the caller.
    """

    def __init__(
        self,
        chain: ChainClient,
        signer: Signer,
        confirm: Optional[ConfirmCallback] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the TransferClient

        Args:
            chain: Chain state reader and transaction submitter
            signer: Signer for the sending account
            confirm: Optional callback asked before anything is submitted
            logger: Optional logger instance to use for debug/info logging
        """
        self.chain = chain
        self.signer = signer
        self.confirm = confirm
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls,
        config: TransferConfig,
        confirm: Optional[ConfirmCallback] = None,
        logger: Optional[logging.Logger] = None
    ) -> "TransferClient":
        """
        Build a client from a TransferConfig

        Raises:
            InvalidPrivateKey: If the configured key is malformed
            ConfigError: If the RPC URL is not https (and not local)
        """
        signer = LocalSigner(config.private_key.get_secret_value())
        chain = ChainClient(config.rpc_url, logger=logger)
        return cls(chain=chain, signer=signer, confirm=confirm, logger=logger)

    @property
    def address(self) -> str:
        """Address of the sending account"""
        return self.signer.address

    def send_eth_transaction(self, to_address: str, amount_eth: AmountLike) -> str:
        """
        Send ETH to an address

        Args:
            to_address: Recipient address (hex, with or without 0x)
            amount_eth: Amount in ETH

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            InvalidAddress: If the recipient is not a valid address
            InvalidAmount: If the amount is not a positive number
            ChainQueryFailed: If balance or gas figures cannot be read
            InsufficientBalance: If the balance cannot cover value or value plus fee
            TransferCancelled: If the confirm callback declines
            SubmissionFailed: If nonce/chain id reads, signing or sending fail
        """
        to_address, amount_wei = validate_transfer(to_address, amount_eth)
        from_address = self.signer.address
        self.logger.info(f"Preparing transfer of {amount_wei} wei from {from_address} to {to_address}")

        check_sufficient_balance(self.chain, from_address, amount_wei)

        fee = estimate_fees(self.chain)

        total_cost = amount_wei + fee.max_cost_wei
        check_sufficient_balance(self.chain, from_address, total_cost)

        if self.confirm is not None:
            preview = UnsignedTransaction(to=to_address, value=amount_wei, nonce=0, chain_id=0, fee=fee)
            if not self.confirm(preview):
                self.logger.info("Transfer cancelled before submission")
                raise TransferCancelled("Transfer cancelled by user")

        tx = self.build_transaction(to_address, amount_wei, fee)
        return self.chain.submit_transaction(tx, self.signer)

    def build_transaction(self, to_address: str, amount_wei: int, fee: FeeEnvelope) -> UnsignedTransaction:
        """
        Read nonce and chain id and assemble the unsigned transaction

        Raises:
            SubmissionFailed: If the nonce or chain id cannot be read or is
                out of range
        """
        from_address = self.signer.address
        try:
            nonce = self.chain.get_transaction_count(from_address)
            chain_id = self.chain.get_chain_id()
        except ChainQueryFailed as e:
            raise SubmissionFailed(e.operation, f"Failed to prepare transaction: {e}") from e

        self.logger.debug(f"Nonce: {nonce}, chain id: {chain_id}")
        try:
            return UnsignedTransaction(
                to=to_address,
                value=amount_wei,
                nonce=nonce,
                chain_id=chain_id,
                fee=fee,
            )
        except ValidationError as e:
            raise SubmissionFailed("build", f"Failed to prepare transaction: {e}") from e
