"""
Rollup transfer SDK - send ETH on Ethereum-compatible rollup networks.
"""
from .version import __version__
from .balance import check_sufficient_balance, get_balance_eth
from .chain import ChainClient
from .client import TransferClient
from .config import NetworkConfig, TransferConfig
from .exceptions import (
    TransferError,
    InvalidAddress,
    InvalidAmount,
    InvalidPrivateKey,
    ChainQueryFailed,
    InsufficientBalance,
    SubmissionFailed,
    TransferCancelled,
    ConfigError,
)
from .fees import estimate_fees, compute_fee_envelope, get_gas_info
from .models import FeeEnvelope, UnsignedTransaction, GasInfo, TokenInfo
from .signer import Signer, LocalSigner
from .token import TokenReader
from .utils import parse_address, eth_to_wei, wei_to_eth, calculate_gas_fee, validate_transfer

__all__ = [
    "__version__",
    "TransferClient",
    "ChainClient",
    "NetworkConfig",
    "TransferConfig",
    "TokenReader",
    "Signer",
    "LocalSigner",
    "FeeEnvelope",
    "UnsignedTransaction",
    "GasInfo",
    "TokenInfo",
    "estimate_fees",
    "compute_fee_envelope",
    "get_gas_info",
    "check_sufficient_balance",
    "get_balance_eth",
    "parse_address",
    "eth_to_wei",
    "wei_to_eth",
    "calculate_gas_fee",
    "validate_transfer",
    "TransferError",
    "InvalidAddress",
    "InvalidAmount",
    "InvalidPrivateKey",
    "ChainQueryFailed",
    "InsufficientBalance",
    "SubmissionFailed",
    "TransferCancelled",
    "ConfigError",
]
