"""
Brambl Python SDK

Password-protected key management and network-aware address validation
for Topl networks.
"""

from .runtime.errors import *
from .config import KeyManagerOptions, ScryptParams
from .networks import (
    NetworkInfo,
    is_valid_network,
    get_decimal_by_network,
    get_hex_by_network,
    get_url_by_network,
    list_networks,
)
from .keys import KeyManager, create_key_storage, decrypt_key_storage
from .utils import (
    ValidationResult,
    extract_addresses_from_obj,
    is_valid_address,
    validate_addresses_by_network,
    generate_address,
)

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "BramblError",
    "ConfigurationError",
    "InvalidPasswordError",
    "InvalidAccessError",
    "AlreadyUnlockedError",
    "LockedError",
    "KeystoreError",
    "NetworkError",

    # Configuration
    "KeyManagerOptions",
    "ScryptParams",

    # Networks
    "NetworkInfo",
    "is_valid_network",
    "get_decimal_by_network",
    "get_hex_by_network",
    "get_url_by_network",
    "list_networks",

    # Keys
    "KeyManager",
    "create_key_storage",
    "decrypt_key_storage",

    # Addresses
    "ValidationResult",
    "extract_addresses_from_obj",
    "is_valid_address",
    "validate_addresses_by_network",
    "generate_address",
]
