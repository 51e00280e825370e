"""Runtime helpers for the Brambl Python SDK"""

from .errors import (
    ErrorCode,
    BramblError,
    ConfigurationError,
    InvalidPasswordError,
    InvalidAccessError,
    AlreadyUnlockedError,
    LockedError,
    KeystoreError,
    NetworkError,
)

__all__ = [
    "ErrorCode",
    "BramblError",
    "ConfigurationError",
    "InvalidPasswordError",
    "InvalidAccessError",
    "AlreadyUnlockedError",
    "LockedError",
    "KeystoreError",
    "NetworkError",
]
