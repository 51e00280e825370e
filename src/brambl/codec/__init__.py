"""
Brambl encoding helpers.

- base58.py: base58 encode/decode shared by addresses and keystore records
"""

from .base58 import encode as b58encode, decode as b58decode, try_decode as b58try_decode

__all__ = [
    "b58encode",
    "b58decode",
    "b58try_decode",
]
