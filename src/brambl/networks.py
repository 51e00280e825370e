"""
Network defaults for the Topl deployments Brambl knows about.

The table is built once at import time and exposed read-only.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import List, Mapping

from pydantic import BaseModel, Field

from .runtime.errors import NetworkError


class NetworkInfo(BaseModel):
    """Defaults for a single network."""
    hex: str = Field(description="Network tag as a 0x-prefixed hex string")
    decimal: int = Field(ge=0, le=255, description="Network tag byte")
    url: str = Field(description="Default node URL")

    model_config = {"frozen": True}


NETWORK_DEFAULTS: Mapping[str, NetworkInfo] = MappingProxyType({
    "local": NetworkInfo(hex="0x30", decimal=48, url="http://localhost:9085/"),
    "private": NetworkInfo(hex="0x40", decimal=64, url="http://localhost:9085/"),
    "toplnet": NetworkInfo(hex="0x01", decimal=1, url="https://torus.topl.services"),
    "valhalla": NetworkInfo(hex="0x10", decimal=16, url="https://valhalla.torus.topl.services"),
    "hel": NetworkInfo(hex="0x20", decimal=32, url="https://hel.torus.topl.services"),
})


def is_valid_network(network_prefix) -> bool:
    """Check whether network_prefix names a known network."""
    return isinstance(network_prefix, str) and network_prefix in NETWORK_DEFAULTS


def _lookup(network_prefix: str) -> NetworkInfo:
    if not is_valid_network(network_prefix):
        raise NetworkError(f"Invalid network provided: {network_prefix}",
                           details={"valid_networks": list_networks()})
    return NETWORK_DEFAULTS[network_prefix]


def get_decimal_by_network(network_prefix: str) -> int:
    """Get the one-byte network tag."""
    return _lookup(network_prefix).decimal


def get_hex_by_network(network_prefix: str) -> str:
    """Get the network tag as a hex string, e.g. "0x40"."""
    return _lookup(network_prefix).hex


def get_url_by_network(network_prefix: str) -> str:
    """Get the default node URL of a network."""
    return _lookup(network_prefix).url


def list_networks() -> List[str]:
    """List the known network identifiers."""
    return list(NETWORK_DEFAULTS)


__all__ = [
    "NetworkInfo",
    "NETWORK_DEFAULTS",
    "is_valid_network",
    "get_decimal_by_network",
    "get_hex_by_network",
    "get_url_by_network",
    "list_networks",
]
