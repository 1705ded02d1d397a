"""Tests for environment-driven settings."""

from dexdash.config import AgentSettings, AppSettings, CacheSettings, SolanaSettings


class TestDefaults:

    def test_defaults(self, monkeypatch) -> None:
        for var in ("SOLANA_RPC_URL", "SOLANA_TX_LIMIT", "CACHE_TTL_MS", "GROQ_API_KEY", "GROQ_MODEL"):
            monkeypatch.delenv(var, raising=False)

        assert SolanaSettings().rpc_url == "https://api.mainnet-beta.solana.com"
        assert SolanaSettings().tx_limit == 10
        assert CacheSettings().ttl_ms == 15000
        agent = AgentSettings()
        assert agent.model == "llama-3.3-70b-versatile"
        assert agent.enabled is False


class TestEnvironment:

    def test_prefixed_env_vars(self, monkeypatch) -> None:
        monkeypatch.setenv("SOLANA_RPC_URL", "https://rpc.example")
        monkeypatch.setenv("SOLANA_TX_LIMIT", "25")
        monkeypatch.setenv("CACHE_TTL_MS", "5000")
        monkeypatch.setenv("GROQ_API_KEY", "gsk-secret")

        assert SolanaSettings().rpc_url == "https://rpc.example"
        assert SolanaSettings().tx_limit == 25
        assert CacheSettings().ttl_ms == 5000
        agent = AgentSettings()
        assert agent.enabled is True
        assert "gsk-secret" not in repr(agent)

    def test_app_settings_accepts_overrides(self, mock_settings: AppSettings) -> None:
        assert mock_settings.solana.rpc_url == "https://rpc.test"
        assert mock_settings.agent.enabled is False
        assert mock_settings.dashboard.port == 8788
