"""Utility helpers for the Brambl Python SDK."""

from .address_utils import (
    ValidationResult,
    extract_addresses_from_obj,
    is_valid_address,
    validate_addresses_by_network,
    generate_address,
)

__all__ = [
    "ValidationResult",
    "extract_addresses_from_obj",
    "is_valid_address",
    "validate_addresses_by_network",
    "generate_address",
]
