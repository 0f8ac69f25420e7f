"""
Tests for the ChainClient RPC wrapper.
"""
import pytest
from unittest.mock import MagicMock, PropertyMock
from web3 import Web3
from web3.exceptions import Web3Exception

from rollup_transfer_sdk.chain import ChainClient
from rollup_transfer_sdk.exceptions import ChainQueryFailed, SubmissionFailed, ConfigError
from rollup_transfer_sdk.fees import compute_fee_envelope
from rollup_transfer_sdk.models import UnsignedTransaction
from tests.conftest import TEST_RPC_URL, TEST_RECIPIENT, TEST_CHAIN_ID, TEST_TX_HASH, GWEI, ETH


@pytest.fixture
def unsigned_tx():
    return UnsignedTransaction(
        to=TEST_RECIPIENT,
        value=10**14,
        nonce=7,
        chain_id=TEST_CHAIN_ID,
        fee=compute_fee_envelope(10 * GWEI, 5 * GWEI),
    )


def test_url_validation():
    with pytest.raises(ConfigError, match="must use https://"):
        ChainClient("http://rpc.example.com")

    client = ChainClient("http://localhost:8545")
    assert client.rpc_url == "http://localhost:8545"


def test_builds_http_provider():
    client = ChainClient(TEST_RPC_URL, timeout=5)
    assert isinstance(client.w3, Web3)
    assert client.w3.provider.endpoint_uri == TEST_RPC_URL


def test_reads(chain, mock_w3):
    assert chain.get_balance(TEST_RECIPIENT) == ETH
    assert chain.get_gas_price() == 10 * GWEI
    assert chain.get_latest_block_base_fee() == 5 * GWEI
    assert chain.get_transaction_count(TEST_RECIPIENT) == 7
    assert chain.get_chain_id() == TEST_CHAIN_ID
    assert chain.get_block_number() == 123456
    mock_w3.eth.get_balance.assert_called_once_with(TEST_RECIPIENT)
    mock_w3.eth.get_transaction_count.assert_called_once_with(TEST_RECIPIENT)


def test_base_fee_missing(chain, mock_w3):
    mock_w3.eth.get_block.return_value = {"number": 1}
    assert chain.get_latest_block_base_fee() is None


def test_base_fee_no_block(chain, mock_w3):
    mock_w3.eth.get_block.return_value = None
    assert chain.get_latest_block_base_fee() is None


def test_reads_are_not_cached(chain, mock_w3):
    chain.get_transaction_count(TEST_RECIPIENT)
    chain.get_transaction_count(TEST_RECIPIENT)
    assert mock_w3.eth.get_transaction_count.call_count == 2


@pytest.mark.parametrize("error", [
    Web3Exception("bad response"),
    ConnectionError("refused"),
    TimeoutError("timed out"),
    ValueError({"code": -32000, "message": "header not found"}),
])
def test_read_errors_wrapped(chain, mock_w3, error):
    mock_w3.eth.get_balance.side_effect = error
    with pytest.raises(ChainQueryFailed) as exc_info:
        chain.get_balance(TEST_RECIPIENT)
    assert exc_info.value.operation == "get_balance"
    assert exc_info.value.__cause__ is error


def test_chain_id_error(chain, mock_w3):
    type(mock_w3.eth).chain_id = PropertyMock(side_effect=Web3Exception("RPC error"))
    with pytest.raises(ChainQueryFailed, match="get_chain_id"):
        chain.get_chain_id()


def test_submit_transaction(chain, mock_w3, signer, unsigned_tx):
    tx_hash = chain.submit_transaction(unsigned_tx, signer)
    assert tx_hash == TEST_TX_HASH
    raw = mock_w3.eth.send_raw_transaction.call_args[0][0]
    assert isinstance(raw, (bytes, bytearray))


def test_submit_transaction_signs_tx_dict(chain, unsigned_tx):
    custom_signer = MagicMock()
    custom_signer.address = "0x1234567890123456789012345678901234567890"
    custom_signer.sign_transaction.return_value = MagicMock(raw_transaction=b"signed")

    chain.submit_transaction(unsigned_tx, custom_signer)

    custom_signer.sign_transaction.assert_called_once_with(unsigned_tx.to_tx_dict())


def test_submit_sign_failure(chain, mock_w3, unsigned_tx):
    failing_signer = MagicMock()
    failing_signer.sign_transaction.side_effect = ValueError("Signing failed deliberately")

    with pytest.raises(SubmissionFailed, match="Failed to sign transaction") as exc_info:
        chain.submit_transaction(unsigned_tx, failing_signer)
    assert exc_info.value.stage == "sign"
    mock_w3.eth.send_raw_transaction.assert_not_called()


def test_submit_send_failure(chain, mock_w3, signer, unsigned_tx):
    mock_w3.eth.send_raw_transaction.side_effect = ValueError({"message": "nonce too low"})
    with pytest.raises(SubmissionFailed, match="nonce too low") as exc_info:
        chain.submit_transaction(unsigned_tx, signer)
    assert exc_info.value.stage == "send"
