r"""
Encrypted keystore records.

A keystore record is a JSON-serializable snapshot of a key pair:

    {
        "publicKeyId": <base58 public key>,
        "crypto": {
            "cipher": "aes-256-ctr",
            "cipherText": <base58>,
            "cipherParams": {"iv": <base58>},
            "kdf": "scrypt",
            "kdfParams": {"salt": <base58>, "n": ..., "r": ..., "p": ..., "dkLen": 64},
            "mac": <base58>
        }
    }

The 64-byte scrypt output is split in two: the first half is the AES key,
the second half authenticates the ciphertext via keccak256(macKey + cipherText).
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Optional
import logging
import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.constant_time import bytes_eq
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from pydantic import ValidationError

from ..codec import base58
from ..config import ScryptParams
from ..crypto.ed25519 import Ed25519KeyPair, Ed25519Error
from ..crypto.hash_utils import keccak256
from ..runtime.errors import InvalidPasswordError, KeystoreError

logger = logging.getLogger(__name__)

CIPHER = "aes-256-ctr"
KDF = "scrypt"
DERIVED_KEY_LENGTH = 64
SALT_LENGTH = 32
IV_LENGTH = 16


def derive_encryption_key(password: str, salt: bytes, params: ScryptParams) -> bytes:
    """
    Stretch a password into the 64-byte keystore key.

    Args:
        password: Keystore password
        salt: Per-record random salt
        params: scrypt cost parameters

    Returns:
        64 bytes: AES-256 key followed by MAC key
    """
    kdf = Scrypt(salt=salt, length=DERIVED_KEY_LENGTH, n=params.n, r=params.r, p=params.p)
    return kdf.derive(password.encode("utf-8"))


def _aes_ctr(key: bytes, iv: bytes, data: bytes) -> bytes:
    # CTR mode: encryption and decryption are the same operation.
    cipher = Cipher(algorithms.AES(key), modes.CTR(iv))
    ctx = cipher.encryptor()
    return ctx.update(data) + ctx.finalize()


def _mac(derived_key: bytes, cipher_text: bytes) -> bytes:
    return keccak256(derived_key[32:DERIVED_KEY_LENGTH] + cipher_text)


def create_key_storage(key_pair: Ed25519KeyPair, password: str,
                       kdf_params: Optional[ScryptParams] = None) -> Dict[str, Any]:
    """
    Encrypt a key pair into a keystore record.

    Args:
        key_pair: Key pair to protect
        password: Password the record is encrypted under
        kdf_params: scrypt cost parameters (defaults to ScryptParams())

    Returns:
        Keystore record with publicKeyId and crypto fields
    """
    params = kdf_params or ScryptParams()
    salt = os.urandom(SALT_LENGTH)
    iv = os.urandom(IV_LENGTH)

    derived_key = derive_encryption_key(password, salt, params)
    cipher_text = _aes_ctr(derived_key[:32], iv, key_pair.private_key_bytes())

    kdf_fields = params.to_dict()
    kdf_fields["salt"] = base58.encode(salt)
    kdf_fields["dkLen"] = DERIVED_KEY_LENGTH

    return {
        "publicKeyId": base58.encode(key_pair.public_key_bytes()),
        "crypto": {
            "cipher": CIPHER,
            "cipherText": base58.encode(cipher_text),
            "cipherParams": {"iv": base58.encode(iv)},
            "kdf": KDF,
            "kdfParams": kdf_fields,
            "mac": base58.encode(_mac(derived_key, cipher_text)),
        },
    }


def _field(container: Mapping[str, Any], name: str, kind: type) -> Any:
    value = container.get(name)
    if not isinstance(value, kind):
        raise KeystoreError(f"Keystore field '{name}' is missing or malformed")
    return value


def _b58_field(container: Mapping[str, Any], name: str) -> bytes:
    try:
        return base58.decode(_field(container, name, str))
    except ValueError as e:
        raise KeystoreError(f"Keystore field '{name}' is not valid base58", cause=e)


def decrypt_key_storage(record: Mapping[str, Any], password: str) -> Ed25519KeyPair:
    """
    Recover the key pair from a keystore record.

    The MAC is checked before anything is decrypted.

    Args:
        record: Keystore record produced by create_key_storage()
        password: Password the record was encrypted under

    Returns:
        The stored key pair

    Raises:
        KeystoreError: If the record is malformed, uses an unsupported scheme,
            or asks for scrypt costs above the configured bounds
        InvalidPasswordError: If the password does not authenticate the record
    """
    if not isinstance(record, Mapping):
        raise KeystoreError("Keystore record must be a mapping")
    if not isinstance(password, str) or not password:
        raise InvalidPasswordError("Invalid password")

    public_key = _b58_field(record, "publicKeyId")
    crypto = _field(record, "crypto", Mapping)

    if crypto.get("cipher") != CIPHER:
        raise KeystoreError(f"Unsupported cipher: {crypto.get('cipher')}")
    if crypto.get("kdf") != KDF:
        raise KeystoreError(f"Unsupported kdf: {crypto.get('kdf')}")

    cipher_text = _b58_field(crypto, "cipherText")
    iv = _b58_field(_field(crypto, "cipherParams", Mapping), "iv")
    mac = _b58_field(crypto, "mac")
    kdf_fields = _field(crypto, "kdfParams", Mapping)
    salt = _b58_field(kdf_fields, "salt")

    if kdf_fields.get("dkLen", DERIVED_KEY_LENGTH) != DERIVED_KEY_LENGTH:
        raise KeystoreError(f"Unsupported dkLen: {kdf_fields.get('dkLen')}")
    if len(iv) != IV_LENGTH:
        raise KeystoreError(f"IV must be {IV_LENGTH} bytes")

    try:
        params = ScryptParams(n=kdf_fields.get("n"), r=kdf_fields.get("r"), p=kdf_fields.get("p"))
    except ValidationError as e:
        raise KeystoreError("Invalid kdfParams", cause=e)

    try:
        derived_key = derive_encryption_key(password, salt, params)
    except UnicodeEncodeError as e:
        raise InvalidPasswordError("Invalid password", cause=e)
    except (MemoryError, ValueError) as e:
        raise KeystoreError("Keystore kdfParams cannot be satisfied", cause=e)

    if not bytes_eq(_mac(derived_key, cipher_text), mac):
        logger.debug("Keystore MAC mismatch")
        raise InvalidPasswordError("Invalid password")

    try:
        key_pair = Ed25519KeyPair.from_seed(_aes_ctr(derived_key[:32], iv, cipher_text))
    except Ed25519Error as e:
        raise KeystoreError("Decrypted key material is malformed", cause=e)

    if key_pair.public_key_bytes() != public_key:
        raise KeystoreError("Decrypted key does not match publicKeyId")

    return key_pair


__all__ = [
    "CIPHER",
    "KDF",
    "derive_encryption_key",
    "create_key_storage",
    "decrypt_key_storage",
]
