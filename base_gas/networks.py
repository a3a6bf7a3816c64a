"""Supported Base networks. The table is fixed and read-only."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import UnsupportedNetwork

DEFAULT_NETWORK = "base"


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    rpc_url: str
    chain_id: int


NETWORKS: Mapping[str, NetworkConfig] = MappingProxyType(
    {
        "base": NetworkConfig(
            name="Base Mainnet",
            rpc_url="https://mainnet.base.org",
            chain_id=8453,
        ),
        "base-sepolia": NetworkConfig(
            name="Base Sepolia Testnet",
            rpc_url="https://sepolia.base.org",
            chain_id=84532,
        ),
    }
)


def supported_networks() -> Tuple[str, ...]:
    return tuple(NETWORKS)


def resolve(network: str) -> NetworkConfig:
    try:
        return NETWORKS[network]
    except (KeyError, TypeError):
        raise UnsupportedNetwork(network, supported_networks()) from None
