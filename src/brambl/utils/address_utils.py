"""
Address utilities for Brambl.

A Topl address is the base58 encoding of 38 bytes:

    [network tag (1)] [proposition type (1)] [blake2b-256(public key) (32)] [checksum (4)]

where the checksum is the first 4 bytes of blake2b-256 over the leading
34 bytes. Validation never raises on malformed input; bad addresses are
reported in the result instead.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field

from ..codec import base58
from ..crypto.hash_utils import CHECKSUM_LENGTH, blake2b_256, checksum, verify_checksum
from ..networks import get_decimal_by_network, is_valid_network

logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 38
CHECKSUM_OFFSET = ADDRESS_LENGTH - CHECKSUM_LENGTH
PUBLIC_KEY_CURVE25519 = 0x01

# Keys of a transaction-parameters object that hold addresses, in extraction order.
SINGLE_ADDRESS_FIELDS = ("changeAddress", "consolidationAddress", "consolidationAdddress")
RECIPIENTS_FIELD = "recipients"
ADDRESS_LIST_FIELDS = ("sender", "addresses")


class ValidationResult(BaseModel):
    """
    Outcome of validate_addresses_by_network().

    Every input address is listed in addresses; the ones that failed any
    check are repeated in invalid_addresses.
    """
    success: bool = False
    error_msg: str = Field(default="", alias="errorMsg")
    network_prefix: Any = Field(default=None, alias="networkPrefix")
    addresses: List[Any] = Field(default_factory=list)
    invalid_addresses: List[Any] = Field(default_factory=list, alias="invalidAddresses")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-compatible dictionary."""
        return self.model_dump(by_alias=True)


def extract_addresses_from_obj(obj: Union[str, Mapping[str, Any]]) -> List[Any]:
    """
    Collect every address-shaped field of a transaction-parameters object.

    Order: change and consolidation addresses, recipients (first element of
    each [address, amount] pair), sender, then the generic address list.
    Duplicates are kept.

    Example:
        >>> extract_addresses_from_obj({"changeAddress": "A", "sender": ["B"], "addresses": ["C"]})
        ['A', 'B', 'C']
    """
    if isinstance(obj, str):
        return [obj]
    if not isinstance(obj, Mapping):
        return []

    addresses: List[Any] = []

    for field in SINGLE_ADDRESS_FIELDS:
        if obj.get(field):
            addresses.append(obj[field])

    for recipient in _as_list(obj.get(RECIPIENTS_FIELD)):
        if isinstance(recipient, (list, tuple)):
            if recipient:
                addresses.append(recipient[0])
        else:
            addresses.append(recipient)

    for field in ADDRESS_LIST_FIELDS:
        addresses.extend(_as_list(obj.get(field)))

    return addresses


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _normalize(addresses: Union[str, Iterable[Any], Mapping[str, Any]]) -> List[Any]:
    if isinstance(addresses, (list, tuple)):
        return list(addresses)
    return extract_addresses_from_obj(addresses)


def is_valid_address(address: Any, network_prefix: str) -> bool:
    """
    Check a single address against a network.

    An address is valid when it decodes to exactly 38 bytes, starts with the
    network tag, and ends with the checksum of its first 34 bytes.
    """
    if not is_valid_network(network_prefix):
        return False
    return _check_address(address, get_decimal_by_network(network_prefix))


def _check_address(address: Any, network_decimal: int) -> bool:
    decoded = base58.try_decode(address)
    if decoded is None:
        return False
    if len(decoded) != ADDRESS_LENGTH or decoded[0] != network_decimal:
        return False
    return verify_checksum(decoded[:CHECKSUM_OFFSET], decoded[CHECKSUM_OFFSET:])


def validate_addresses_by_network(network_prefix: str,
                                  addresses: Optional[Union[List[Any], Mapping[str, Any]]]) -> ValidationResult:
    """
    Check that every address belongs to the given network.

    Args:
        network_prefix: Network identifier, e.g. "private"
        addresses: Flat list of base58 addresses, or a transaction-parameters
            object to extract them from

    Returns:
        ValidationResult; success is True only when every address is valid
    """
    if not is_valid_network(network_prefix):
        return ValidationResult(
            error_msg=f"Invalid network provided: {network_prefix}",
            network_prefix=network_prefix,
        )

    if addresses is None or addresses == "":
        return ValidationResult(error_msg="No addresses provided", network_prefix=network_prefix)

    network_decimal = get_decimal_by_network(network_prefix)
    address_list = _normalize(addresses)

    if not address_list:
        return ValidationResult(error_msg="No addresses found", network_prefix=network_prefix)

    invalid = [address for address in address_list if not _check_address(address, network_decimal)]

    if invalid:
        logger.debug(f"{len(invalid)} of {len(address_list)} addresses invalid for network {network_prefix}")
        return ValidationResult(
            error_msg=f"Invalid addresses for network: {network_prefix}",
            network_prefix=network_prefix,
            addresses=address_list,
            invalid_addresses=invalid,
        )

    return ValidationResult(
        success=True,
        network_prefix=network_prefix,
        addresses=address_list,
    )


def generate_address(public_key: bytes, network_prefix: str,
                     proposition_type: int = PUBLIC_KEY_CURVE25519) -> str:
    """
    Build the address of a public key on a network.

    Args:
        public_key: Raw public key bytes
        network_prefix: Network identifier
        proposition_type: Proposition type byte (0x01 for a single public key)

    Returns:
        Base58 address

    Raises:
        NetworkError: If network_prefix is unknown
        ValueError: If public_key is not bytes or proposition_type is not a byte
    """
    if not isinstance(public_key, (bytes, bytearray)):
        raise ValueError("public_key must be bytes")
    if not 0 <= proposition_type <= 0xFF:
        raise ValueError("proposition_type must fit in one byte")

    body = bytes([get_decimal_by_network(network_prefix), proposition_type]) + blake2b_256(public_key)
    return base58.encode(body + checksum(body))


__all__ = [
    "ADDRESS_LENGTH",
    "PUBLIC_KEY_CURVE25519",
    "ValidationResult",
    "extract_addresses_from_obj",
    "is_valid_address",
    "validate_addresses_by_network",
    "generate_address",
]
