"""
Ed25519 keys for Brambl.

KeyManager holds an Ed25519KeyPair built from a 32-byte seed; the keystore
stores that seed. Signing is deterministic (RFC 8032).
"""

from __future__ import annotations
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.hazmat.primitives.asymmetric import ed25519

KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

KeyBytes = Union[bytes, bytearray]


class Ed25519Error(Exception):
    """Malformed Ed25519 key material."""
    pass


def _require_key_bytes(value: KeyBytes, kind: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != KEY_LENGTH:
        raise Ed25519Error(f"Ed25519 {kind} must be {KEY_LENGTH} bytes")
    return bytes(value)


class Ed25519PublicKey:
    """Verifier for one 32-byte public key."""

    def __init__(self, public_key_bytes: KeyBytes):
        raw = _require_key_bytes(public_key_bytes, "public key")
        try:
            self._verifier = ed25519.Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as e:
            raise Ed25519Error(f"Invalid Ed25519 public key: {e}")
        self._raw = raw

    def to_bytes(self) -> bytes:
        return self._raw

    def verify(self, signature: bytes, message: bytes) -> bool:
        """Return True if signature is a valid signature of message; never raises."""
        if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            self._verifier.verify(bytes(signature), message)
        except InvalidSignature:
            return False
        return True


class Ed25519KeyPair:
    """
    Seed-backed signing key and its public key.

    The seed is only exposed through private_key_bytes(), which the keystore
    uses to encrypt it.
    """

    def __init__(self, seed: KeyBytes):
        self._seed = _require_key_bytes(seed, "seed")
        self._signer = ed25519.Ed25519PrivateKey.from_private_bytes(self._seed)
        self.public_key = Ed25519PublicKey(
            self._signer.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        )

    @classmethod
    def from_seed(cls, seed: KeyBytes) -> Ed25519KeyPair:
        """
        Build the key pair of a 32-byte seed.

        Raises:
            Ed25519Error: If seed is not exactly 32 bytes
        """
        return cls(seed)

    def sign(self, message: bytes) -> bytes:
        """Return the 64-byte signature of message."""
        return self._signer.sign(message)

    def public_key_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    def private_key_bytes(self) -> bytes:
        return self._seed


__all__ = [
    "KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "Ed25519Error",
    "Ed25519PublicKey",
    "Ed25519KeyPair",
]
