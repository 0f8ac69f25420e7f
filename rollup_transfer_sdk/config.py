"""
Network and transfer configuration for the rollup transfer SDK.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, SecretStr

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "arbitrum-sepolia"
DEFAULT_RECIPIENT = "0xdce8BfF7A85f70Bb8fE0d0F09DF434D972E3FDA5"
DEFAULT_AMOUNT_ETH = "0.0001"


class NetworkConfig:
    """Access to the networks bundled with the SDK (networks.json)."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, reading the packaged file only once.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("rollup_transfer_sdk").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a single network.

        Raises:
            ConfigError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ConfigError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        Resolve the RPC URL of a network.

        Precedence: explicit override, then the ``<NETWORK>_RPC_URL``
        environment variable, then the bundled default.
        """
        if override:
            return override

        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            logger.debug(f"Using RPC URL from {env_var}")
            return env_url

        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_explorer_url(cls, network: str) -> Optional[str]:
        return cls.get_network(network).get("explorer")

    @classmethod
    def tx_url(cls, network: str, tx_hash: str) -> Optional[str]:
        """Block explorer link for a transaction, if the network has an explorer"""
        explorer = cls.get_explorer_url(network)
        if not explorer:
            return None
        return f"{explorer.rstrip('/')}/tx/{tx_hash}"


class TransferConfig(BaseModel):
    """Everything a single transfer invocation needs, read once at the edge"""
    private_key: SecretStr
    recipient: str = DEFAULT_RECIPIENT
    amount: str = DEFAULT_AMOUNT_ETH
    rpc_url: str
    network: str = DEFAULT_NETWORK

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        network: Optional[str] = None,
        rpc_url: Optional[str] = None,
    ) -> "TransferConfig":
        """
        Build a configuration from environment variables.

        Reads PRIVATE_KEY (required), TO_ADDRESS, AMOUNT_ETH, NETWORK and
        RPC_URL. Explicit arguments win over the environment.

        Raises:
            ConfigError: If PRIVATE_KEY is missing or the network is unknown
        """
        env = os.environ if environ is None else environ

        private_key = env.get("PRIVATE_KEY")
        if not private_key:
            raise ConfigError("PRIVATE_KEY environment variable is required")

        network = network or env.get("NETWORK") or DEFAULT_NETWORK
        rpc_url = NetworkConfig.get_rpc_url(network, override=rpc_url or env.get("RPC_URL"))

        return cls(
            private_key=private_key,
            recipient=env.get("TO_ADDRESS") or DEFAULT_RECIPIENT,
            amount=env.get("AMOUNT_ETH") or DEFAULT_AMOUNT_ETH,
            rpc_url=rpc_url,
            network=network,
        )
