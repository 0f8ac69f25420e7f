"""
Input validation and unit conversion helpers for the rollup transfer SDK.
"""
import logging
import re
import string
import urllib.parse
from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Any, Tuple, Union

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from .exceptions import InvalidAddress, InvalidAmount, ConfigError

logger = logging.getLogger(__name__)

# 1 ETH = 10^18 wei
WEI_PER_ETH = 10**18
WEI_PER_GWEI = 10**9
ETH_DECIMALS = 18
MAX_UINT256 = 2**256 - 1

ADDRESS_HEX_LENGTH = 40
HEX_DIGITS = frozenset(string.hexdigits)
# Plain ASCII decimal literal, optionally signed, with an optional exponent
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

AmountLike = Union[str, int, float, Decimal]


def parse_address(value: Any) -> ChecksumAddress:
    """
    Parse a hex address into its canonical checksummed form.

    Any letter case is accepted, with or without the ``0x`` prefix. Two
    spellings of the same 20 bytes always produce the same result.

    Args:
        value: Address string

    Returns:
        EIP-55 checksummed address

    Raises:
        InvalidAddress: If the value does not decode to exactly 20 bytes
    """
    if not isinstance(value, str):
        raise InvalidAddress(value, f"expected str, got {type(value).__name__}")

    raw = value[2:] if value[:2] in ("0x", "0X") else value

    if len(raw) != ADDRESS_HEX_LENGTH:
        raise InvalidAddress(value, f"expected {ADDRESS_HEX_LENGTH} hex characters, got {len(raw)}")

    if not all(c in HEX_DIGITS for c in raw):
        raise InvalidAddress(value, "not hexadecimal")

    return to_checksum_address(bytes.fromhex(raw))


def _to_decimal(amount: AmountLike) -> Decimal:
    if isinstance(amount, bool):
        raise InvalidAmount(amount, "booleans are not amounts")
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, int):
        return Decimal(amount)
    if isinstance(amount, float):
        # repr gives the shortest string that round-trips, so 0.1 stays 0.1
        return Decimal(repr(amount))
    if isinstance(amount, str):
        if not DECIMAL_PATTERN.fullmatch(amount):
            raise InvalidAmount(amount, "not a decimal number")
        return Decimal(amount)
    raise InvalidAmount(amount, f"unsupported type {type(amount).__name__}")


def eth_to_wei(amount: AmountLike) -> int:
    """
    Convert a decimal ETH amount to wei.

    Uses exact decimal arithmetic. Precision beyond 18 decimal places is
    truncated toward zero.

    Args:
        amount: Amount in ETH as a string, int, float or Decimal

    Returns:
        Amount in wei

    Raises:
        InvalidAmount: If the amount is unparseable, not finite, not positive,
            or does not fit in 256 bits once scaled
    """
    value = _to_decimal(amount)

    if not value.is_finite():
        raise InvalidAmount(amount, "must be finite")
    if value <= 0:
        raise InvalidAmount(amount, "must be greater than 0")
    if value.adjusted() > 77:
        raise InvalidAmount(amount, "too large")

    with localcontext() as ctx:
        ctx.prec = 160
        wei = int(value.scaleb(ETH_DECIMALS).to_integral_value(rounding=ROUND_DOWN))

    if wei <= 0:
        raise InvalidAmount(amount, "smaller than 1 wei")
    if wei > MAX_UINT256:
        raise InvalidAmount(amount, "too large")
    return wei


def wei_to_eth(wei: int) -> Decimal:
    """Convert wei to an exact Decimal ETH amount."""
    with localcontext() as ctx:
        ctx.prec = 160
        return Decimal(wei).scaleb(-ETH_DECIMALS).normalize()


def wei_to_gwei(wei: int) -> float:
    return wei / WEI_PER_GWEI


def calculate_gas_fee(gas_price: int, gas_limit: int) -> float:
    """
    Calculate the fee for a transaction in ETH.

    Args:
        gas_price: Price per unit of gas in wei
        gas_limit: Gas limit

    Returns:
        ``gas_price * gas_limit`` expressed in ETH
    """
    fee_wei = gas_price * gas_limit
    return fee_wei / WEI_PER_ETH


def validate_transfer(recipient: Any, amount: AmountLike) -> Tuple[ChecksumAddress, int]:
    """
    Validate a recipient and an ETH amount.

    Returns:
        Tuple of (checksummed recipient, amount in wei)
    """
    return parse_address(recipient), eth_to_wei(amount)


def validate_rpc_url(rpc_url: str) -> str:
    """
    Ensure an RPC URL uses https unless it points at the local machine.

    Raises:
        ConfigError: If the URL is not https and not local
    """
    parsed = urllib.parse.urlparse(rpc_url)
    # Check if it's a localhost or 127.0.0.1 address (with or without port)
    host = parsed.netloc.split(':')[0]
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ConfigError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")
    return rpc_url
