"""
Command-line interface for rollup transfers.

Subcommands: send, balance, gas, token.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from rollup_transfer_sdk import __version__
from rollup_transfer_sdk.balance import get_balance_eth
from rollup_transfer_sdk.chain import ChainClient
from rollup_transfer_sdk.client import TransferClient
from rollup_transfer_sdk.config import DEFAULT_NETWORK, NetworkConfig, TransferConfig
from rollup_transfer_sdk.exceptions import TransferCancelled, TransferError
from rollup_transfer_sdk.fees import get_gas_info
from rollup_transfer_sdk.models import UnsignedTransaction
from rollup_transfer_sdk.token import TokenReader
from rollup_transfer_sdk.utils import calculate_gas_fee, parse_address, wei_to_eth

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging from the -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=level,
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rollup-transfer",
        description="Send ETH and query chain state on Ethereum-compatible rollups",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--network",
        default=None,
        help=f"Network name from the bundled config (default: $NETWORK or {DEFAULT_NETWORK})",
    )
    parser.add_argument("--rpc-url", default=None, help="RPC endpoint overriding the network default")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    send_parser = subparsers.add_parser("send", help="Send ETH to an address")
    send_parser.add_argument("--to", dest="to_address", default=None, help="Recipient (default: $TO_ADDRESS)")
    send_parser.add_argument("--amount", default=None, help="Amount in ETH (default: $AMOUNT_ETH)")
    send_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    balance_parser = subparsers.add_parser("balance", help="Show the ETH balance of an address")
    balance_parser.add_argument("address", help="Address to query")

    subparsers.add_parser("gas", help="Show gas price and basic transfer fee")

    token_parser = subparsers.add_parser("token", help="Show ERC-20 token information")
    token_parser.add_argument("contract", help="Token contract address")
    token_parser.add_argument(
        "--holder",
        action="append",
        default=[],
        help="Also show the token balance of this address (repeatable)",
    )

    return parser


def _resolve_network(args: argparse.Namespace) -> str:
    return args.network or os.environ.get("NETWORK") or DEFAULT_NETWORK


def _chain_from_args(args: argparse.Namespace) -> ChainClient:
    network = _resolve_network(args)
    return ChainClient(NetworkConfig.get_rpc_url(network, override=args.rpc_url))


def prompt_confirm(tx: UnsignedTransaction) -> bool:
    """Ask on the terminal before a transfer is sent."""
    fee = tx.fee
    print("Transfer details:")
    print(f"   Recipient:    {tx.to}")
    print(f"   Amount:       {wei_to_eth(tx.value)} ETH")
    print(f"   Max fee:      {fee.max_fee_per_gas} wei/gas (priority {fee.max_priority_fee_per_gas})")
    print(f"   Gas limit:    {fee.gas_limit}")
    print(f"   Max gas cost: {calculate_gas_fee(fee.max_fee_per_gas, fee.gas_limit)} ETH")
    print()
    try:
        answer = input("Press Enter to send, or type 'n' to cancel: ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() not in ("n", "no")


def cmd_send(args: argparse.Namespace) -> int:
    config = TransferConfig.from_env(network=_resolve_network(args), rpc_url=args.rpc_url)
    recipient = args.to_address or config.recipient
    amount = args.amount or config.amount

    client = TransferClient.from_config(config, confirm=None if args.yes else prompt_confirm)
    print(f"Sender: {client.address}")
    print(f"Sending {amount} ETH to {recipient} on {config.network}...")

    tx_hash = client.send_eth_transaction(recipient, amount)

    print()
    print("Transfer sent!")
    print(f"   Transaction hash: {tx_hash}")
    tx_url = NetworkConfig.tx_url(config.network, tx_hash)
    if tx_url:
        print(f"   Explorer: {tx_url}")
    return EXIT_OK


def cmd_balance(args: argparse.Namespace) -> int:
    address = parse_address(args.address)
    balance = get_balance_eth(_chain_from_args(args), address)
    print(f"address: {address}")
    print(f"balance: {balance:.6f} ETH")
    if balance == 0:
        print("This address holds no ETH")
    return EXIT_OK


def cmd_gas(args: argparse.Namespace) -> int:
    info = get_gas_info(_chain_from_args(args))
    print(f"Gas price: {info.gas_price} wei")
    print(f"Gas price: {info.gas_price_gwei} gwei")
    print(f"Basic transfer gas limit: {info.gas_limit} gas")
    print(f"Estimated transfer fee: {info.estimated_fee:.8f} ETH")
    return EXIT_OK


def cmd_token(args: argparse.Namespace) -> int:
    reader = TokenReader(_chain_from_args(args), args.contract)
    info = reader.get_info()
    print(f"Contract: {info.address}")
    print(f"Block number: {info.block_number}")
    print(f"Name: {info.name}")
    print(f"Symbol: {info.symbol}")
    print(f"Decimals: {info.decimals}")
    print(f"Total supply: {info.total_supply}")
    for holder in args.holder:
        print(f"Balance of {holder}: {reader.get_balance(holder)} {info.symbol}")
    return EXIT_OK


COMMANDS = {
    "send": cmd_send,
    "balance": cmd_balance,
    "gas": cmd_gas,
    "token": cmd_token,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the rollup-transfer command."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    setup_logging(args.verbose)

    try:
        return COMMANDS[args.command](args)
    except TransferCancelled as e:
        print(f"Cancelled: {e}", file=sys.stderr)
        return EXIT_CANCELLED
    except TransferError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
