"""
Brambl Error Model

This module provides the error handling framework for the Brambl Python SDK.
Every error raised by the key manager, keystore and network registry derives
from BramblError and carries a stable ErrorCode.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Brambl error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_CONFIG = 3

    # Key manager errors (100-199)
    INVALID_PASSWORD = 100
    INVALID_ACCESS = 101
    ALREADY_UNLOCKED = 102
    LOCKED = 103

    # Keystore errors (200-299)
    KEYSTORE_ERROR = 200

    # Network errors (300-399)
    INVALID_NETWORK = 300


class BramblError(Exception):
    """
    Base class for all Brambl errors.

    Provides structured error information: a message, an error code,
    optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Brambl error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ConfigurationError(BramblError):
    """Invalid key manager options (anything other than the password)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CONFIG, details, cause)


class InvalidPasswordError(BramblError):
    """Missing, malformed or wrong password, or unusable key material."""

    def __init__(self, message: str = "A password must be provided at initialization",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_PASSWORD, details, cause)


class InvalidAccessError(BramblError):
    """Attempt to change the lock state outside lock_key()/unlock_key()."""

    def __init__(self, message: str = "Invalid private variable access, use lock_key() instead.",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ACCESS, details, cause)


class AlreadyUnlockedError(BramblError):
    """Unlock requested while the key is already unlocked."""

    def __init__(self, message: str = "The key is already unlocked",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ALREADY_UNLOCKED, details, cause)


class LockedError(BramblError):
    """
    Guarded operation refused.

    Raised both when the key manager is locked and when a guarded operation
    receives structurally invalid arguments; callers cannot tell the two apart.
    """

    def __init__(self, message: str = "Key manager is currently locked. Please unlock and try again.",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.LOCKED, details, cause)


class KeystoreError(BramblError):
    """Malformed or unsupported keystore record."""

    def __init__(self, message: str = "Invalid keystore record",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEYSTORE_ERROR, details, cause)


class NetworkError(BramblError):
    """Unknown network identifier."""

    def __init__(self, message: str = "Invalid network provided",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_NETWORK, details, cause)


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
