"""
Data models for the rollup transfer SDK.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class FeeEnvelope(BaseModel):
    """EIP-1559 fee parameters for a single transaction"""
    model_config = ConfigDict(frozen=True)

    max_fee_per_gas: int = Field(..., ge=0, lt=2**128)
    max_priority_fee_per_gas: int = Field(..., ge=0, lt=2**128)
    gas_limit: int = Field(..., gt=0, lt=2**64)
    gas_price: Optional[int] = None
    base_fee: Optional[int] = None

    @property
    def max_cost_wei(self) -> int:
        """Worst-case fee paid if the whole gas limit is used at the max fee"""
        return self.max_fee_per_gas * self.gas_limit


class UnsignedTransaction(BaseModel):
    """A native-value transfer ready to be signed"""
    model_config = ConfigDict(frozen=True)

    to: str
    value: int = Field(..., ge=0)
    nonce: int = Field(..., ge=0, lt=2**64)
    chain_id: int = Field(..., ge=0, lt=2**64)
    fee: FeeEnvelope

    def to_tx_dict(self) -> Dict[str, Any]:
        """
        Render the transaction in the dict form eth-account signs.

        Returns:
            Type 2 (EIP-1559) transaction dictionary
        """
        return {
            "type": 2,
            "to": self.to,
            "value": self.value,
            "nonce": self.nonce,
            "chainId": self.chain_id,
            "gas": self.fee.gas_limit,
            "maxFeePerGas": self.fee.max_fee_per_gas,
            "maxPriorityFeePerGas": self.fee.max_priority_fee_per_gas,
        }


class GasInfo(BaseModel):
    """Gas price report for a basic transfer"""
    gas_price: int
    gas_price_gwei: float
    gas_limit: int
    estimated_fee: float


class TokenInfo(BaseModel):
    """ERC-20 token metadata"""
    address: str
    name: str
    symbol: str
    decimals: int
    total_supply: int
    block_number: int
