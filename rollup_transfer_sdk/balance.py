"""
Balance checks against live chain state.
"""
import logging
from decimal import Decimal

from .chain import ChainClient
from .exceptions import InsufficientBalance
from .utils import parse_address, wei_to_eth

logger = logging.getLogger(__name__)


def check_sufficient_balance(chain: ChainClient, address: str, required: int) -> int:
    """
    Verify an address holds at least the required amount

    Args:
        chain: Chain state reader
        address: Address to check
        required: Required amount in wei

    Returns:
        The balance that was read, in wei

    Raises:
        InsufficientBalance: If the balance is below the required amount
        ChainQueryFailed: If the balance cannot be read
    """
    balance = chain.get_balance(address)
    if balance < required:
        logger.error(f"Insufficient balance for {address}: required {required} wei, available {balance} wei")
        raise InsufficientBalance(required=required, available=balance)
    return balance


def get_balance_eth(chain: ChainClient, address: str) -> Decimal:
    """Balance of an address in ETH"""
    return wei_to_eth(chain.get_balance(parse_address(address)))
