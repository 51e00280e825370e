"""
Default file writer for exported keystore records.

Files are named UTC--<timestamp>--<publicKeyId>.json inside the export
directory, which is created if it does not exist.
"""

from __future__ import annotations
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union
import json
import logging

from ..runtime.errors import KeystoreError

logger = logging.getLogger(__name__)


def key_file_name(public_key_id: str, now: Optional[datetime] = None) -> str:
    """Build the file name of an exported keystore record."""
    now = now or datetime.now(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S.%fZ")
    return f"UTC--{timestamp}--{public_key_id}.json"


def write_key_storage(record: Mapping[str, Any], key_path: Union[str, Path]) -> str:
    """
    Write a keystore record as JSON.

    Args:
        record: Keystore record (must have a publicKeyId)
        key_path: Destination directory

    Returns:
        Path of the written file

    Raises:
        KeystoreError: If the record has no publicKeyId or the file exists
    """
    public_key_id = record.get("publicKeyId")
    if not isinstance(public_key_id, str) or not public_key_id:
        raise KeystoreError("Keystore record has no publicKeyId")

    directory = Path(key_path)
    directory.mkdir(parents=True, exist_ok=True)

    key_file = directory / key_file_name(public_key_id)
    if key_file.exists():
        raise KeystoreError(f"Key file already exists: {key_file}")

    with open(key_file, "w") as f:
        json.dump(dict(record), f, indent=2)

    logger.debug(f"Exported key {public_key_id} to file {key_file}")
    return str(key_file)


def read_key_storage(key_file: Union[str, Path]) -> dict:
    """Load a keystore record written by write_key_storage()."""
    try:
        with open(key_file, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise KeystoreError(f"Failed to read keystore file {key_file}", cause=e)


__all__ = ["key_file_name", "write_key_storage", "read_key_storage"]
