"""
Hash utilities for Brambl.

Provides the BLAKE2b-256 digest used for address checksums and public key
hashes, and the Keccak-256 digest used for keystore MACs.
"""

import hashlib
from typing import Union

from Crypto.Hash import keccak

CHECKSUM_LENGTH = 4
BLAKE2B_DIGEST_SIZE = 32


def blake2b_256(data: bytes) -> bytes:
    """
    Calculate BLAKE2b hash with a 32-byte digest.

    Args:
        data: Data to hash

    Returns:
        32-byte digest

    Raises:
        ValueError: If data is not bytes
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("data must be bytes")

    return hashlib.blake2b(bytes(data), digest_size=BLAKE2B_DIGEST_SIZE).digest()


def checksum(data: bytes) -> bytes:
    """
    Calculate the 4-byte integrity tag of a buffer.

    The tag is the first 4 bytes of BLAKE2b-256(data).
    """
    return blake2b_256(data)[:CHECKSUM_LENGTH]


def verify_checksum(data: bytes, expected: bytes) -> bool:
    """Check that expected is the integrity tag of data."""
    if not isinstance(expected, (bytes, bytearray)) or len(expected) != CHECKSUM_LENGTH:
        return False
    return checksum(data) == bytes(expected)


def keccak256(data: Union[bytes, bytearray]) -> bytes:
    """
    Calculate Keccak-256 hash (pre-standard SHA3 padding).

    Args:
        data: Data to hash

    Returns:
        32-byte digest
    """
    return keccak.new(digest_bits=256).update(bytes(data)).digest()


__all__ = [
    "CHECKSUM_LENGTH",
    "BLAKE2B_DIGEST_SIZE",
    "blake2b_256",
    "checksum",
    "verify_checksum",
    "keccak256",
]
