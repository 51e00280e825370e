"""
Cryptographic primitives for Brambl.

Provides Ed25519 keys and the hash functions used for address checksums
and keystore MACs.
"""

from .ed25519 import Ed25519Error, Ed25519KeyPair, Ed25519PublicKey
from .hash_utils import blake2b_256, checksum, verify_checksum, keccak256

__all__ = [
    "Ed25519Error",
    "Ed25519KeyPair",
    "Ed25519PublicKey",
    "blake2b_256",
    "checksum",
    "verify_checksum",
    "keccak256",
]
