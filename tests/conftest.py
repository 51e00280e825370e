"""
Shared fixtures.

Keystore encryption uses the cheapest valid scrypt cost so the suite stays
fast; key derivation itself always uses the production parameters.
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from brambl.config import ScryptParams
from brambl.keys.key_manager import KeyManager

from helpers import FAST_KDF

TEST_PASSWORD = "password_test"


@pytest.fixture
def password():
    """Password every key manager fixture is created with."""
    return TEST_PASSWORD


@pytest.fixture
def fast_kdf_params():
    """Cheap scrypt parameters for keystore encryption."""
    return ScryptParams(**FAST_KDF)


@pytest.fixture
def written_records():
    """Records captured by the recording_writer fixture."""
    return []


@pytest.fixture
def recording_writer(written_records):
    """Keystore writer that records its calls instead of touching disk."""
    def writer(record, key_path):
        written_records.append((record, key_path))
        return f"{key_path}/{record['publicKeyId']}.json"
    return writer


@pytest.fixture
def key_manager(password, recording_writer):
    """Unlocked key manager with fast keystore encryption."""
    return KeyManager({"password": password, "kdfParams": FAST_KDF}, writer=recording_writer)
