"""
Address validation tests.

Valid addresses are built independently in helpers.factories; the tests
check acceptance, each rejection rule, and extraction from transaction
parameter objects.
"""

import hashlib

import base58
import pytest

from brambl.runtime.errors import NetworkError
from brambl.utils.address_utils import (
    ValidationResult,
    extract_addresses_from_obj,
    generate_address,
    is_valid_address,
    validate_addresses_by_network,
)

from helpers import NETWORK_TAGS, corrupt_checksum, mk_address, mk_address_bytes


class TestValidateAddressesByNetwork:
    """Test validate_addresses_by_network()."""

    def test_valid_private_address(self):
        address = mk_address("private")

        result = validate_addresses_by_network("private", [address])

        assert isinstance(result, ValidationResult)
        assert result.success is True
        assert result.error_msg == ""
        assert result.network_prefix == "private"
        assert result.addresses == [address]
        assert result.invalid_addresses == []

    @pytest.mark.parametrize("network", sorted(NETWORK_TAGS))
    def test_valid_on_every_network(self, network):
        result = validate_addresses_by_network(network, [mk_address(network)])
        assert result.success is True

    @pytest.mark.parametrize("index", [-1, -2, -3, -4])
    def test_corrupted_checksum_byte(self, index):
        good = mk_address("private", b"first")
        bad = corrupt_checksum(mk_address("private", b"second"), index)

        result = validate_addresses_by_network("private", [good, bad])

        assert result.success is False
        assert result.error_msg == "Invalid addresses for network: private"
        assert result.addresses == [good, bad]
        assert result.invalid_addresses == [bad]

    def test_corrupted_payload(self):
        raw = bytearray(mk_address_bytes(0x40))
        raw[10] ^= 0x01
        bad = base58.b58encode(bytes(raw)).decode()

        result = validate_addresses_by_network("private", [bad])
        assert result.invalid_addresses == [bad]

    def test_wrong_network(self):
        address = mk_address("local")

        result = validate_addresses_by_network("private", [address])

        assert result.success is False
        assert result.invalid_addresses == [address]

    @pytest.mark.parametrize("length", [37, 39])
    def test_wrong_length(self, length):
        body = bytes([0x40]) + b"\x01" * (length - 5)
        checksum = hashlib.blake2b(body, digest_size=32).digest()[:4]
        address = base58.b58encode(body + checksum).decode()

        result = validate_addresses_by_network("private", [address])
        assert result.invalid_addresses == [address]

    @pytest.mark.parametrize("address", ["0OIl not base58", "", 12345, None])
    def test_undecodable_address(self, address):
        result = validate_addresses_by_network("private", [address])

        assert result.success is False
        assert result.invalid_addresses == [address]

    def test_unknown_network(self, monkeypatch):
        """Nothing is decoded for an unknown network."""
        calls = []
        monkeypatch.setattr("brambl.utils.address_utils._check_address",
                            lambda *args: calls.append(args))

        result = validate_addresses_by_network("not_a_network", [mk_address("private")])

        assert result.success is False
        assert "not_a_network" in result.error_msg
        assert result.addresses == []
        assert calls == []

    @pytest.mark.parametrize("addresses", [None, ""])
    def test_no_addresses_provided(self, addresses):
        result = validate_addresses_by_network("private", addresses)

        assert result.success is False
        assert result.error_msg == "No addresses provided"

    @pytest.mark.parametrize("addresses", [[], {}, {"fee": 1, "data": ""}])
    def test_no_addresses_found(self, addresses):
        result = validate_addresses_by_network("private", addresses)

        assert result.success is False
        assert result.error_msg == "No addresses found"

    def test_structured_input_order(self):
        a, b, c = (mk_address("local", seed) for seed in (b"a", b"b", b"c"))

        result = validate_addresses_by_network("local", {"changeAddress": a, "sender": [b], "addresses": [c]})

        assert result.addresses == [a, b, c]
        assert result.success is True

    def test_single_string(self):
        address = mk_address("hel")

        result = validate_addresses_by_network("hel", address)
        assert result.addresses == [address]
        assert result.success is True

    def test_duplicates_are_kept(self):
        address = mk_address("private")

        result = validate_addresses_by_network("private", [address, address])
        assert result.addresses == [address, address]

    def test_result_is_immutable(self):
        result = validate_addresses_by_network("private", [mk_address("private")])

        with pytest.raises(Exception):
            result.success = False

    def test_to_dict(self):
        address = mk_address("private")

        assert validate_addresses_by_network("private", [address]).to_dict() == {
            "success": True,
            "errorMsg": "",
            "networkPrefix": "private",
            "addresses": [address],
            "invalidAddresses": [],
        }


class TestExtractAddressesFromObj:
    """Test extraction from transaction parameter objects."""

    def test_full_params_object(self):
        params = {
            "propositionType": "PublicKeyCurve25519",
            "changeAddress": "change",
            "consolidationAddress": "consolidation",
            "recipients": [["recipient1", 10], ["recipient2", 5]],
            "sender": ["sender1", "sender2"],
            "addresses": ["generic"],
            "fee": 1,
            "data": "",
        }

        assert extract_addresses_from_obj(params) == [
            "change", "consolidation", "recipient1", "recipient2", "sender1", "sender2", "generic",
        ]

    def test_legacy_consolidation_spelling(self):
        assert extract_addresses_from_obj({"consolidationAdddress": "x"}) == ["x"]

    def test_plain_string_recipients(self):
        assert extract_addresses_from_obj({"recipients": ["r1", ("r2", 3)]}) == ["r1", "r2"]

    def test_non_mapping(self):
        assert extract_addresses_from_obj(42) == []


class TestGenerateAddress:
    """Test address generation."""

    def test_generated_address_validates(self):
        address = generate_address(b"\x11" * 32, "valhalla")

        assert is_valid_address(address, "valhalla")
        assert not is_valid_address(address, "hel")

    def test_layout(self):
        public_key = b"\x11" * 32
        raw = base58.b58decode(generate_address(public_key, "private"))

        assert len(raw) == 38
        assert raw[0] == 0x40
        assert raw[1] == 0x01
        assert raw[2:34] == hashlib.blake2b(public_key, digest_size=32).digest()
        assert raw == mk_address_bytes(0x40, raw[1:34])

    def test_unknown_network(self):
        with pytest.raises(NetworkError):
            generate_address(b"\x11" * 32, "not_a_network")

    def test_bad_public_key(self):
        with pytest.raises(ValueError):
            generate_address("not bytes", "private")

    def test_is_valid_address_unknown_network(self):
        assert is_valid_address(mk_address("private"), "not_a_network") is False
