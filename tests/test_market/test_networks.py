"""Tests for the Dexscreener -> GeckoTerminal network mapping."""

import pytest

from dexdash.market.networks import map_chain_to_network


class TestMapChainToNetwork:

    @pytest.mark.parametrize(
        ("chain", "network"),
        [
            ("polygon", "polygon_pos"),
            ("avalanche", "avax"),
            ("eth", "ethereum"),
            ("binance-smart-chain", "bsc"),
            ("solana", "solana"),
            ("base", "base"),
        ],
    )
    def test_known_chains(self, chain: str, network: str) -> None:
        assert map_chain_to_network(chain) == network

    def test_case_insensitive(self) -> None:
        assert map_chain_to_network("Polygon") == "polygon_pos"
        assert map_chain_to_network("SOLANA") == "solana"

    def test_unknown_chain_passes_through(self) -> None:
        assert map_chain_to_network("unknown-chain") == "unknown-chain"

    def test_empty_is_none(self) -> None:
        assert map_chain_to_network("") is None
        assert map_chain_to_network(None) is None
