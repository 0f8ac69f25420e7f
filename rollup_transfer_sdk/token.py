"""
Read-only access to ERC-20 token contracts.
"""
import logging
from typing import Optional

from .chain import ChainClient
from .models import TokenInfo
from .utils import parse_address


class TokenReader:
    """
    Reads metadata and balances from an ERC-20 contract.

    All calls are views; nothing is signed or sent.
    """

    # Minimal ERC-20 ABI: the view functions the reader calls
    ERC20_ABI = [
        {
            "inputs": [],
            "name": "name",
            "outputs": [{"internalType": "string", "name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "symbol",
            "outputs": [{"internalType": "string", "name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "decimals",
            "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "totalSupply",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
            "name": "balanceOf",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function"
        }
    ]

    def __init__(self, chain: ChainClient, contract_address: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the TokenReader

        Args:
            chain: Chain client whose Web3 instance is used for calls
            contract_address: Token contract address

        Raises:
            InvalidAddress: If the contract address is malformed
        """
        self.chain = chain
        self.address = parse_address(contract_address)
        self.logger = logger or logging.getLogger(__name__)
        self.contract = chain.w3.eth.contract(address=self.address, abi=self.ERC20_ABI)

    def get_name(self) -> str:
        return self.chain.query("token_name", self.contract.functions.name().call)

    def get_symbol(self) -> str:
        return self.chain.query("token_symbol", self.contract.functions.symbol().call)

    def get_decimals(self) -> int:
        return int(self.chain.query("token_decimals", self.contract.functions.decimals().call))

    def get_total_supply(self) -> int:
        return int(self.chain.query("token_total_supply", self.contract.functions.totalSupply().call))

    def get_balance(self, holder: str) -> int:
        """
        Token balance of a holder, in the token's smallest unit

        Raises:
            InvalidAddress: If the holder address is malformed
            ChainQueryFailed: If the contract call fails
        """
        holder = parse_address(holder)
        return int(self.chain.query("token_balance_of", self.contract.functions.balanceOf(holder).call))

    def get_info(self) -> TokenInfo:
        """Collect name, symbol, decimals, supply and the current block number"""
        info = TokenInfo(
            address=self.address,
            name=self.get_name(),
            symbol=self.get_symbol(),
            decimals=self.get_decimals(),
            total_supply=self.get_total_supply(),
            block_number=self.chain.get_block_number(),
        )
        self.logger.debug(f"Token info: {info}")
        return info
