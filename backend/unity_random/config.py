"""Service configuration from environment (prefix UNITY_RANDOM_)."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings with defaults."""

    model_config = SettingsConfigDict(env_prefix="UNITY_RANDOM_")

    # Server
    log_level: str = "INFO"
    redis_url: str = "redis://localhost:6379/0"

    # Protocol
    protocol_version: str = "1.0"

    # Upper bound on draws per /sample or /draw request
    max_draws_per_request: int = 1000

    # Redis TTLs
    stream_state_ttl_seconds: int = 86400  # 24 hours since last draw
    lock_ttl_seconds: int = 30  # Auto-expire lock if process crashes
    idempotency_ttl_seconds: int = 3600


settings = Settings()
