"""
EIP-1559 fee estimation.

Rollup networks can report volatile or non-standard base fees, so the max fee
is the largest of three signals: a fixed floor, the node's suggested gas
price, and the latest base fee plus the priority fee.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from .chain import ChainClient
from .exceptions import ChainQueryFailed
from .models import FeeEnvelope, GasInfo
from .utils import calculate_gas_fee, wei_to_gwei

logger = logging.getLogger(__name__)

# 2 gwei
MAX_PRIORITY_FEE_PER_GAS = 2_000_000_000
# 20 gwei
MIN_MAX_FEE_PER_GAS = 20_000_000_000
# Arbitrum needs more than 21000 for a plain value transfer
TRANSFER_GAS_LIMIT = 100_000
# Canonical gas cost of sending ether on L1
BASIC_TRANSFER_GAS_LIMIT = 21_000


def compute_fee_envelope(gas_price: int, base_fee: Optional[int]) -> FeeEnvelope:
    """
    Apply the floor policy to observed gas figures.

    Args:
        gas_price: Suggested gas price in wei
        base_fee: Latest block base fee in wei; falls back to gas_price when None

    Returns:
        FeeEnvelope for a transfer
    """
    if base_fee is None:
        base_fee = gas_price

    min_max_fee = base_fee + MAX_PRIORITY_FEE_PER_GAS
    max_fee_per_gas = max(MIN_MAX_FEE_PER_GAS, gas_price, min_max_fee)

    return FeeEnvelope(
        max_fee_per_gas=max_fee_per_gas,
        max_priority_fee_per_gas=MAX_PRIORITY_FEE_PER_GAS,
        gas_limit=TRANSFER_GAS_LIMIT,
        gas_price=gas_price,
        base_fee=base_fee,
    )


def estimate_fees(chain: ChainClient) -> FeeEnvelope:
    """
    Read live gas figures and compute a fee envelope

    Raises:
        ChainQueryFailed: If the gas price or latest block cannot be read, or
            the node reports figures outside the EIP-1559 field ranges
    """
    gas_price = chain.get_gas_price()
    base_fee = chain.get_latest_block_base_fee()
    if base_fee is None:
        logger.warning(f"Latest block has no base fee, using gas price {gas_price} wei")

    try:
        fee = compute_fee_envelope(gas_price, base_fee)
    except ValidationError as e:
        logger.error(f"Node reported unusable gas figures: gas price {gas_price}, base fee {base_fee}")
        raise ChainQueryFailed("estimate_fees", f"Gas figures out of range: {e}") from e

    logger.debug(f"Gas Price: {gas_price} wei")
    logger.debug(f"Base Fee: {fee.base_fee} wei")
    logger.info(
        f"Fee envelope: maxFeePerGas={fee.max_fee_per_gas} wei, "
        f"maxPriorityFeePerGas={fee.max_priority_fee_per_gas} wei, gasLimit={fee.gas_limit}"
    )
    return fee


def get_gas_info(chain: ChainClient) -> GasInfo:
    """Gas price and estimated fee of a basic 21000-gas transfer"""
    gas_price = chain.get_gas_price()
    return GasInfo(
        gas_price=gas_price,
        gas_price_gwei=wei_to_gwei(gas_price),
        gas_limit=BASIC_TRANSFER_GAS_LIMIT,
        estimated_fee=calculate_gas_fee(gas_price, BASIC_TRANSFER_GAS_LIMIT),
    )
