r"""
Password-protected key manager.

A KeyManager derives one Ed25519 key pair from a password and guards every
use of the private key behind a lock:

    km = KeyManager("correct horse")        # unlocked
    signature = km.sign("message")
    km.lock_key()
    km.unlock_key("correct horse")
    record = km.get_key_storage()           # encrypted keystore record

Signing and export raise LockedError while locked. They raise the same
LockedError for malformed arguments, so callers cannot probe the lock
state with bad input.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Union
import logging
import threading

from cryptography.hazmat.primitives.constant_time import bytes_eq
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from pydantic import SecretStr, ValidationError

from ..codec import base58
from ..config import KeyManagerOptions, ScryptParams
from ..crypto.ed25519 import Ed25519Error, Ed25519KeyPair, Ed25519PublicKey, KEY_LENGTH
from ..runtime.errors import (
    AlreadyUnlockedError,
    ConfigurationError,
    InvalidAccessError,
    InvalidPasswordError,
    LockedError,
)
from ..utils.address_utils import generate_address
from .file_writer import write_key_storage
from .keystore import create_key_storage, decrypt_key_storage

logger = logging.getLogger(__name__)

# Fixed salt: the same password must always yield the same key pair.
KEY_DERIVATION_SALT = b"brambl/key-manager/ed25519-seed"
KEY_DERIVATION_PARAMS = ScryptParams(n=2 ** 14, r=8, p=1)

KeystoreWriter = Callable[[Dict[str, Any], str], Any]


def derive_key_pair(password: str) -> Ed25519KeyPair:
    """
    Derive the Ed25519 key pair of a password.

    scrypt(password, KEY_DERIVATION_SALT) gives the 32-byte Ed25519 seed.
    """
    kdf = Scrypt(
        salt=KEY_DERIVATION_SALT,
        length=KEY_LENGTH,
        n=KEY_DERIVATION_PARAMS.n,
        r=KEY_DERIVATION_PARAMS.r,
        p=KEY_DERIVATION_PARAMS.p,
    )
    return Ed25519KeyPair.from_seed(kdf.derive(password.encode("utf-8")))


def _is_text(value: Any) -> bool:
    """True for a non-empty string that has a UTF-8 encoding (no lone surrogates)."""
    if not isinstance(value, str) or not value:
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _parse_options(params: Union[str, Mapping[str, Any], KeyManagerOptions]) -> KeyManagerOptions:
    if isinstance(params, KeyManagerOptions):
        if not _is_text(params.password.get_secret_value()):
            raise InvalidPasswordError()
        return params

    if isinstance(params, str):
        if not _is_text(params):
            raise InvalidPasswordError()
        return KeyManagerOptions(password=params)

    if isinstance(params, Mapping):
        password = params.get("password")
        if not _is_text(password):
            raise InvalidPasswordError()
        try:
            return KeyManagerOptions.model_validate(dict(params))
        except ValidationError as e:
            raise ConfigurationError("Invalid key manager options", cause=e)

    raise InvalidPasswordError()


class KeyManager:
    """
    Owns one password-derived key pair and its lock state.

    The instance starts unlocked. Only lock_key() and unlock_key() change the
    lock state; is_locked is read-only.
    """

    def __init__(self, params: Union[str, Mapping[str, Any], KeyManagerOptions],
                 writer: Optional[KeystoreWriter] = None):
        """
        Derive the key pair.

        Args:
            params: Password string, or options with a non-empty string
                "password" (plus optional keyPath, networkPrefix, kdfParams)
            writer: Called as writer(record, key_path) by export_to_file();
                defaults to write_key_storage()

        Raises:
            InvalidPasswordError: If no usable password was given
            ConfigurationError: If any other option is invalid
        """
        options = _parse_options(params)

        self._options = options
        self._password: SecretStr = options.password
        self._key_pair: Optional[Ed25519KeyPair] = derive_key_pair(options.password.get_secret_value())
        self._writer: KeystoreWriter = writer or write_key_storage
        self._mutex = threading.RLock()
        self._is_locked = False

        logger.debug(f"Derived key {self.public_key_id}")

    @classmethod
    def from_key_storage(cls, record: Mapping[str, Any],
                         params: Union[str, Mapping[str, Any], KeyManagerOptions],
                         writer: Optional[KeystoreWriter] = None) -> KeyManager:
        """
        Open a keystore record with its password.

        Raises:
            InvalidPasswordError: If the password does not open the record, or
                the record holds a key that was not derived from this password
            KeystoreError: If the record is malformed
        """
        key_manager = cls(params, writer=writer)
        stored = decrypt_key_storage(record, key_manager._password.get_secret_value())
        if stored.public_key_bytes() != key_manager._key_pair.public_key_bytes():
            logger.warning("Rejected keystore record: key not derived from this password")
            raise InvalidPasswordError("Invalid password")
        return key_manager

    # ------------------------------------------------------------------ state

    @property
    def is_locked(self) -> bool:
        """Whether guarded operations are currently refused."""
        return self._is_locked

    @is_locked.setter
    def is_locked(self, value) -> None:
        raise InvalidAccessError()

    def lock_key(self) -> None:
        """Lock the key. Locking an already locked key is a no-op."""
        with self._mutex:
            self._is_locked = True
        logger.debug("Key locked")

    def unlock_key(self, password: Optional[str] = None) -> None:
        """
        Unlock the key with the password it was created with.

        Raises:
            AlreadyUnlockedError: If the key is not locked
            InvalidPasswordError: If the password does not match; the key
                stays locked
        """
        with self._mutex:
            if not self._is_locked:
                raise AlreadyUnlockedError()

            if not _is_text(password) or not bytes_eq(
                password.encode("utf-8"), self._password.get_secret_value().encode("utf-8")
            ):
                logger.warning("Rejected unlock attempt: invalid password")
                raise InvalidPasswordError("Invalid password")

            self._is_locked = False
        logger.debug("Key unlocked")

    # ----------------------------------------------------------------- guards

    def _ensure_key_material(self) -> None:
        if (not isinstance(self._key_pair, Ed25519KeyPair)
                or not isinstance(self._password, SecretStr)
                or not self._password.get_secret_value()):
            raise InvalidPasswordError()

    def _require_unlocked(self) -> None:
        if self._is_locked:
            raise LockedError()

    @staticmethod
    def _require_message(message: Any) -> None:
        if not _is_text(message):
            raise LockedError()

    @staticmethod
    def _require_key_path(key_path: Any) -> None:
        if key_path is not None and not isinstance(key_path, str):
            raise LockedError()

    # ------------------------------------------------------- public key data

    @property
    def public_key_id(self) -> str:
        """Base58 public key, the keystore record's external handle."""
        self._ensure_key_material()
        return base58.encode(self._key_pair.public_key_bytes())

    @property
    def public_key(self) -> bytes:
        """Raw 32-byte public key."""
        self._ensure_key_material()
        return self._key_pair.public_key_bytes()

    @property
    def address(self) -> str:
        """Address of this key on the configured network."""
        return generate_address(self.public_key, self._options.network_prefix)

    # ------------------------------------------------------ guarded operations

    def sign(self, message: str) -> bytes:
        """
        Sign a message.

        Args:
            message: Non-empty string, signed as UTF-8

        Returns:
            64-byte Ed25519 signature

        Raises:
            LockedError: If the key is locked or message is not a non-empty string
            InvalidPasswordError: If the key material is unusable
        """
        with self._mutex:
            self._ensure_key_material()
            self._require_unlocked()
            self._require_message(message)
            return self._key_pair.sign(message.encode("utf-8"))

    def get_key_storage(self) -> Dict[str, Any]:
        """
        Build an encrypted keystore record of the key pair.

        Returns:
            Record with publicKeyId and crypto fields

        Raises:
            LockedError: If the key is locked
            InvalidPasswordError: If the key material is unusable
        """
        with self._mutex:
            self._ensure_key_material()
            self._require_unlocked()
            record = create_key_storage(
                self._key_pair, self._password.get_secret_value(), self._options.kdf_params
            )
        logger.debug(f"Built keystore record for key {record['publicKeyId']}")
        return record

    def export_to_file(self, key_path: Optional[str] = None) -> Any:
        """
        Hand the keystore record to the writer.

        Args:
            key_path: Destination directory; defaults to the configured key_path

        Returns:
            Whatever the writer returns (the file path for the default writer)

        Raises:
            LockedError: If the key is locked or key_path is not a string
            InvalidPasswordError: If the key material is unusable
        """
        with self._mutex:
            self._ensure_key_material()
            self._require_unlocked()
            self._require_key_path(key_path)
            record = self.get_key_storage()
        return self._writer(record, key_path or self._options.key_path)

    # ------------------------------------------------------------ verification

    def verify(self, message: Union[str, bytes], signature: bytes) -> bool:
        """Check a signature made by this key. Never raises on bad input."""
        return self.verify_signature(self.public_key, message, signature)

    @staticmethod
    def verify_signature(public_key: Union[str, bytes], message: Union[str, bytes],
                         signature: bytes) -> bool:
        """
        Check a signature against a public key.

        Args:
            public_key: Raw 32-byte key, or its base58 public key id
            message: Signed message (strings are taken as UTF-8)
            signature: 64-byte signature

        Returns:
            True if the signature is valid; False for any malformed input
        """
        if isinstance(public_key, str):
            public_key = base58.try_decode(public_key)
        if isinstance(message, str):
            try:
                message = message.encode("utf-8")
            except UnicodeEncodeError:
                return False
        if not isinstance(message, (bytes, bytearray)):
            return False

        try:
            key = Ed25519PublicKey(public_key)
        except Ed25519Error:
            return False
        return key.verify(signature, bytes(message))

    def __repr__(self) -> str:
        return f"KeyManager(locked={self._is_locked})"


__all__ = [
    "KEY_DERIVATION_SALT",
    "KeyManager",
    "derive_key_pair",
]
