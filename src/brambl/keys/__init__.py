"""
Key management for Brambl.

Provides the password-protected KeyManager and the encrypted keystore
record it exports.
"""

from .key_manager import KeyManager, derive_key_pair
from .keystore import create_key_storage, decrypt_key_storage
from .file_writer import write_key_storage, read_key_storage

__all__ = [
    "KeyManager",
    "derive_key_pair",
    "create_key_storage",
    "decrypt_key_storage",
    "write_key_storage",
    "read_key_storage",
]
