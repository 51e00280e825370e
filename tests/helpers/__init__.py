from .factories import FAST_KDF, NETWORK_TAGS, mk_address, mk_address_bytes, corrupt_checksum

__all__ = [
    "FAST_KDF",
    "NETWORK_TAGS",
    "mk_address",
    "mk_address_bytes",
    "corrupt_checksum",
]
