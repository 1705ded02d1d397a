"""Dexscreener chain id -> GeckoTerminal network id mapping."""

CHAIN_TO_NETWORK: dict[str, str] = {
    "solana": "solana",
    "ethereum": "ethereum",
    "eth": "ethereum",
    "bsc": "bsc",
    "binance-smart-chain": "bsc",
    "base": "base",
    "polygon": "polygon_pos",
    "arbitrum": "arbitrum",
    "optimism": "optimism",
    "avalanche": "avax",
}


def map_chain_to_network(chain: str | None) -> str | None:
    """Translate a Dexscreener chain id into a GeckoTerminal network id.

    Lookup is case-insensitive. Chains missing from the table are returned
    lowercased, on the assumption that both providers share the name.

    Returns:
        The network id, or None when ``chain`` is empty (candles cannot be
        fetched for an unknown chain).
    """
    key = (chain or "").strip().lower()
    if not key:
        return None
    return CHAIN_TO_NETWORK.get(key, key)
