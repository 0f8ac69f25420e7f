"""
Pytest fixtures for the rollup transfer SDK tests.
"""
import pytest
from unittest.mock import MagicMock
from hexbytes import HexBytes
from web3.providers.rpc import HTTPProvider

from rollup_transfer_sdk.chain import ChainClient
from rollup_transfer_sdk.config import NetworkConfig
from rollup_transfer_sdk.signer import LocalSigner

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_RECIPIENT = "0xEFc67c7c50b5Ec45D76c63EeAb61b14E884E2Be4"
TEST_CHAIN_ID = 421614
TEST_TX_HASH = "0x" + "ab" * 32

GWEI = 10**9
ETH = 10**18


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": hex(TEST_CHAIN_ID)}
        if method == "eth_gasPrice":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"}  # 1 gwei
        # everything else – return something harmless
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _reset_network_cache():
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def mock_w3():
    """
    Mock Web3 instance modelling a rollup node.

    Gas price 10 gwei, base fee 5 gwei, balance 1 ETH, nonce 7.
    """
    w3 = MagicMock()
    w3.eth.get_balance = MagicMock(return_value=1 * ETH)
    w3.eth.gas_price = 10 * GWEI
    w3.eth.get_block = MagicMock(return_value={"number": 123456, "baseFeePerGas": 5 * GWEI})
    w3.eth.block_number = 123456
    w3.eth.get_transaction_count = MagicMock(return_value=7)
    w3.eth.chain_id = TEST_CHAIN_ID
    w3.eth.send_raw_transaction = MagicMock(return_value=HexBytes(TEST_TX_HASH))
    return w3


@pytest.fixture
def chain(mock_w3):
    """ChainClient wired to the mock Web3 instance"""
    return ChainClient(TEST_RPC_URL, w3=mock_w3)


@pytest.fixture
def signer():
    """Deterministic test signer"""
    return LocalSigner(TEST_PRIV_KEY)
