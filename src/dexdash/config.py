"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SolanaSettings(BaseSettings):
    """Solana JSON-RPC connection settings."""

    model_config = SettingsConfigDict(env_prefix="SOLANA_")

    rpc_url: str = "https://api.mainnet-beta.solana.com"
    tx_limit: int = 10  # signatures returned by /api/sol/tx


class CacheSettings(BaseSettings):
    """Response cache settings."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    ttl_ms: int = 15000


class AgentSettings(BaseSettings):
    """Optional Groq chat-completion oracle used by the agent endpoint.

    With an empty api_key the agent runs in fallback mode only.
    """

    model_config = SettingsConfigDict(env_prefix="GROQ_")

    api_key: SecretStr = SecretStr("")
    model: str = "llama-3.3-70b-versatile"
    base_url: str = "https://api.groq.com/openai/v1"
    temperature: float = 0.2

    @property
    def enabled(self) -> bool:
        return bool(self.api_key.get_secret_value())


class HttpSettings(BaseSettings):
    """Outbound HTTP client settings shared by all upstream clients."""

    model_config = SettingsConfigDict(env_prefix="HTTP_")

    timeout_seconds: float = 10.0
    user_agent: str = "dexdash/0.1"


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8788


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # LOG_FORMAT=json for machine-readable output
    solana: SolanaSettings = SolanaSettings()
    cache: CacheSettings = CacheSettings()
    agent: AgentSettings = AgentSettings()
    http: HttpSettings = HttpSettings()
    dashboard: DashboardSettings = DashboardSettings()
