"""
Key manager configuration.

Options may be passed to KeyManager as a plain mapping (camelCase or
snake_case keys) or as a KeyManagerOptions instance.
"""

from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, Field, SecretStr, field_validator

from .networks import is_valid_network, list_networks

DEFAULT_KEY_PATH = "keyfiles"
DEFAULT_NETWORK = "local"

# Upper bounds on scrypt cost; records arrive from untrusted storage.
MAX_SCRYPT_N = 2 ** 20
MAX_SCRYPT_R = 32
MAX_SCRYPT_P = 16


class ScryptParams(BaseModel):
    """
    scrypt cost parameters used to encrypt the keystore record.

    The salt is generated per record and is not part of the configuration.
    The derived key length is fixed by the keystore format (dkLen 64).
    """
    n: int = Field(default=2 ** 14, description="CPU/memory cost, a power of two")
    r: int = Field(default=8, ge=1, le=MAX_SCRYPT_R, description="Block size")
    p: int = Field(default=1, ge=1, le=MAX_SCRYPT_P, description="Parallelization")

    model_config = {"frozen": True}

    @field_validator("n")
    @classmethod
    def validate_n(cls, v: int) -> int:
        if v < 2 or v & (v - 1):
            raise ValueError("n must be a power of two greater than 1")
        if v > MAX_SCRYPT_N:
            raise ValueError(f"n must not exceed {MAX_SCRYPT_N}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to keystore kdfParams fields."""
        return {"n": self.n, "r": self.r, "p": self.p}


class KeyManagerOptions(BaseModel):
    """
    Options accepted by KeyManager at construction.

    Only password is required.
    """
    password: SecretStr = Field(description="Password the key pair is derived from")
    key_path: str = Field(default=DEFAULT_KEY_PATH, alias="keyPath",
                          description="Default export directory")
    network_prefix: str = Field(default=DEFAULT_NETWORK, alias="networkPrefix",
                                description="Network used for this key's address")
    kdf_params: ScryptParams = Field(default_factory=ScryptParams, alias="kdfParams",
                                     description="Keystore encryption cost parameters")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("network_prefix")
    @classmethod
    def validate_network_prefix(cls, v: str) -> str:
        if not is_valid_network(v):
            raise ValueError(f"network_prefix must be one of {list_networks()}")
        return v
