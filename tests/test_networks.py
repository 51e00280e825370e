"""
Network registry tests.
"""

import pytest

from brambl.networks import (
    NETWORK_DEFAULTS,
    get_decimal_by_network,
    get_hex_by_network,
    get_url_by_network,
    is_valid_network,
    list_networks,
)
from brambl.runtime.errors import ErrorCode, NetworkError

from helpers import NETWORK_TAGS


class TestNetworkRegistry:
    """Test network lookups."""

    def test_list_networks(self):
        assert list_networks() == ["local", "private", "toplnet", "valhalla", "hel"]

    @pytest.mark.parametrize("network,tag", sorted(NETWORK_TAGS.items()))
    def test_tags(self, network, tag):
        assert is_valid_network(network)
        assert get_decimal_by_network(network) == tag
        assert get_hex_by_network(network) == f"0x{tag:02x}"

    def test_urls(self):
        assert get_url_by_network("local") == "http://localhost:9085/"
        assert get_url_by_network("private") == "http://localhost:9085/"
        assert get_url_by_network("toplnet") == "https://torus.topl.services"
        assert get_url_by_network("valhalla") == "https://valhalla.torus.topl.services"
        assert get_url_by_network("hel") == "https://hel.torus.topl.services"

    @pytest.mark.parametrize("name", ["not_a_network", "", None, 48, "PRIVATE"])
    def test_invalid_network(self, name):
        assert is_valid_network(name) is False

    @pytest.mark.parametrize("getter", [get_decimal_by_network, get_hex_by_network, get_url_by_network])
    def test_getters_reject_unknown_network(self, getter):
        with pytest.raises(NetworkError) as exc_info:
            getter("not_a_network")
        assert exc_info.value.code == ErrorCode.INVALID_NETWORK

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            NETWORK_DEFAULTS["mainnet"] = NETWORK_DEFAULTS["local"]

        with pytest.raises(Exception):
            NETWORK_DEFAULTS["local"].decimal = 1
        assert get_decimal_by_network("local") == 0x30

    def test_list_networks_is_a_copy(self):
        networks = list_networks()
        networks.append("mainnet")
        assert "mainnet" not in list_networks()
