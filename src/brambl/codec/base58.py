"""
Base58 helpers (Bitcoin alphabet).

Addresses and every binary field of a keystore record are carried as
base58 strings.
"""

from typing import Union

import base58


def encode(data: Union[bytes, bytearray]) -> str:
    """Encode bytes to a base58 string."""
    return base58.b58encode(bytes(data)).decode("ascii")


def decode(text: str) -> bytes:
    """
    Decode a base58 string.

    Raises:
        ValueError: If text is not a string or contains characters outside
            the base58 alphabet
    """
    if not isinstance(text, str):
        raise ValueError(f"base58 input must be a string, got {type(text).__name__}")
    return base58.b58decode(text)


def try_decode(text) -> Union[bytes, None]:
    """Decode a base58 string, returning None instead of raising."""
    try:
        return decode(text)
    except ValueError:
        return None


__all__ = ["encode", "decode", "try_decode"]
